"""Shared fixtures: handler trees built under tmp_path."""

from collections.abc import Callable
from pathlib import Path

import pytest

from fileroute.app import App
from fileroute.config import RouterConfig

WriteHandler = Callable[..., Path]


@pytest.fixture
def handlers_dir(tmp_path: Path) -> Path:
    path = tmp_path / "routes"
    path.mkdir()
    return path


@pytest.fixture
def write_handler(handlers_dir: Path) -> WriteHandler:
    """Write a handler file under the handler root.

    ``write_handler("users/show.py", "/users/:id [GET]", body=...)`` writes
    a ``# @route`` header (plus ``# @auth`` when *auth* is given) followed
    by *body*. Pass ``header=`` to write the head verbatim instead.
    """

    def _write(
        relative: str,
        route: str | None = None,
        *,
        auth: str | None = None,
        body: str = "def handle():\n    return {'ok': True}\n",
        header: str | None = None,
    ) -> Path:
        if header is None:
            lines = []
            if route is not None:
                lines.append(f"# @route {route}")
            if auth is not None:
                lines.append(f"# @auth {auth}")
            header = "\n".join(lines) + "\n\n"
        path = handlers_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(header + body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config(tmp_path: Path, handlers_dir: Path) -> RouterConfig:
    return RouterConfig(handlers_dir=handlers_dir, cache_dir=tmp_path / "cache")


@pytest.fixture
def make_app(config: RouterConfig) -> Callable[..., App]:
    def _make(**overrides: object) -> App:
        if overrides:
            from dataclasses import replace

            return App(replace(config, **overrides))
        return App(config)

    return _make
