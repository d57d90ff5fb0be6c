"""ASGI handler — translates ASGI scope/messages to fileroute types.

The only component that touches raw ASGI for HTTP requests. Converts the
scope dict to a Request, runs it through the dispatcher, and sends the
Response back through ASGI send().
"""

from contextvars import Token

from fileroute._internal.asgi import Receive, Scope, Send
from fileroute.context import request_var
from fileroute.dispatch import Dispatcher
from fileroute.errors import HTTPError
from fileroute.http.request import Request
from fileroute.server.errors import handle_http_error, handle_internal_error
from fileroute.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    # Set request context var (reset after dispatch)
    token: Token[Request] = request_var.set(request)
    try:
        response = await dispatcher.dispatch(request)
    except HTTPError as exc:
        response = handle_http_error(exc, request)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=debug)
    finally:
        request_var.reset(token)

    await send_response(response, send)
