"""RouteDescriptor, PathSegment, and RouteMatch frozen dataclasses."""

from dataclasses import dataclass, field

from fileroute.errors import RouteDeclarationError

# Leading character that turns a template segment into a named parameter
PARAM_MARKER = ":"

HTTP_METHODS = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"}
)


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a path template.

    Literal:  ``users``  (is_param=False)
    Param:    ``:id``    (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


def split_path(path: str) -> list[str]:
    """Trim surrounding slashes and split on ``/``.

    Inner empty segments are kept: ``"a//b"`` -> ``["a", "", "b"]``.
    The root path yields a single empty segment, matching a root template.
    """
    return path.strip("/").split("/")


def parse_template(template: str, *, handler_ref: str = "<template>") -> tuple[PathSegment, ...]:
    """Parse a path template into segments.

    Examples::

        "/users"      -> (PathSegment("users"),)
        "/users/:id"  -> (PathSegment("users"), PathSegment(":id", True, "id"))

    Raises ``RouteDeclarationError`` for empty or duplicate parameter names.
    """
    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in split_path(template):
        if not part.startswith(PARAM_MARKER):
            segments.append(PathSegment(value=part))
            continue
        name = part[len(PARAM_MARKER) :]
        if not name:
            raise RouteDeclarationError(handler_ref, f"empty parameter name in {template!r}")
        if name in seen:
            raise RouteDeclarationError(
                handler_ref, f"duplicate parameter {name!r} in {template!r}"
            )
        seen.add(name)
        segments.append(PathSegment(value=part, is_param=True, param_name=name))
    return tuple(segments)


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """One discovered endpoint.

    Built by the scanner (or rebuilt from the cache) and never mutated.
    ``segments`` is derived from ``template`` and excluded from equality,
    so two descriptors compare equal field-for-field on what was declared.

    Attributes:
        template: The route line as declared (e.g. ``/user/:id``).
        methods: Allowed HTTP methods, or ``None`` for any method.
        auth_rule: Opaque token for the auth predicate, or ``None``.
        handler_ref: Path of the handler file.
    """

    template: str
    methods: frozenset[str] | None
    auth_rule: str | None
    handler_ref: str
    segments: tuple[PathSegment, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.methods is not None:
            if not self.methods:
                raise RouteDeclarationError(self.handler_ref, "empty method list")
            unknown = sorted(self.methods - HTTP_METHODS)
            if unknown:
                raise RouteDeclarationError(
                    self.handler_ref, f"unknown HTTP method(s): {', '.join(unknown)}"
                )
        object.__setattr__(
            self, "segments", parse_template(self.template, handler_ref=self.handler_ref)
        )

    def allows(self, method: str) -> bool:
        """Whether *method* passes this descriptor's method filter."""
        return self.methods is None or method in self.methods

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(s.param_name for s in self.segments if s.param_name is not None)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``path_params`` belongs to this match alone and is never shared
    between requests.
    """

    route: RouteDescriptor
    path_params: dict[str, str]
