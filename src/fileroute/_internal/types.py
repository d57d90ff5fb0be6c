"""Shared type aliases used across fileroute modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Handler function loaded from a handler file; signature varies
Handler: TypeAlias = Callable[..., Any]
