"""Invoke helper — call sync or async handlers uniformly.

Handler files may define ``def`` or ``async def`` functions. Any code that
calls one goes through :func:`invoke` so the sync/async check lives in
exactly one place::

    result = await invoke(handler, **kwargs)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
