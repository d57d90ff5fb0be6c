"""Request matching — first-match-wins over the route table.

No specificity scoring: a template listed earlier beats a more specific
one listed later. Templates have a fixed segment count, so a request
with a different number of segments never matches.
"""

from collections.abc import Iterable
from urllib.parse import unquote

from fileroute.routing.route import PathSegment, RouteDescriptor, RouteMatch, split_path


def strip_prefix(raw_path: str, prefix: str) -> str | None:
    """Drop everything up to and including the first *prefix* occurrence.

    Returns ``None`` when the path does not contain the prefix at all.
    """
    _, found, rest = raw_path.partition(prefix)
    if not found:
        return None
    return rest


def match_segments(
    segments: tuple[PathSegment, ...],
    parts: list[str],
) -> dict[str, str] | None:
    """Walk template and request segments pairwise.

    Literals compare exactly (case-sensitive); parameters bind any value.
    Returns the bound parameters, or ``None`` on the first mismatch.
    """
    if len(segments) != len(parts):
        return None

    params: dict[str, str] = {}
    for segment, part in zip(segments, parts, strict=True):
        if segment.is_param:
            params[segment.param_name or ""] = part
        elif segment.value != part:
            return None
    return params


def match_route(
    routes: Iterable[RouteDescriptor],
    method: str,
    raw_path: str,
    *,
    prefix: str = "/api/",
) -> RouteMatch | None:
    """Find the first route matching *method* and *raw_path*.

    Args:
        routes: Route table (or any ordered descriptors).
        method: Uppercase request method.
        raw_path: Percent-encoded request path, including the API prefix.
            Segments are decoded after the split.
        prefix: API prefix to strip before matching.

    Returns:
        A :class:`RouteMatch` for the first matching descriptor, or
        ``None`` if none matches.
    """
    path = strip_prefix(raw_path, prefix)
    if path is None:
        return None

    # Decode after splitting so an encoded "/" stays inside its segment
    parts = [unquote(part) for part in split_path(path)]
    for route in routes:
        if not route.allows(method):
            continue
        params = match_segments(route.segments, parts)
        if params is not None:
            return RouteMatch(route=route, path_params=params)
    return None
