"""App import resolution — resolves ``"module:attribute"`` strings to App instances.

Shared by every subcommand that needs a fileroute App.
"""

import importlib
import sys

from fileroute.app import App


def resolve_app(import_string: str) -> App:
    """Resolve an import string to a fileroute App instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"app"`` (e.g. ``"myapp"`` resolves to
    ``myapp.app``).  A callable that is not an App is treated as a
    factory and called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a fileroute ``App``.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a fileroute.App instance"
        raise TypeError(msg)

    return obj


def resolve_or_exit(import_string: str) -> App:
    """``resolve_app`` that reports failures on stderr and exits 1."""
    try:
        return resolve_app(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
