"""Request-scoped context via ContextVar.

``request_var`` holds the current ``Request`` for this task. The ASGI
handler sets it before dispatch and resets it afterwards, so auth
predicates (which receive only the rule token) can still inspect the
request without any process-global state.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local across
    worker threads. No locks needed.
"""

from contextvars import ContextVar

from fileroute.http.request import Request

request_var: ContextVar[Request] = ContextVar("fileroute_request")
"""The current request. Set by the ASGI handler before dispatch."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()
