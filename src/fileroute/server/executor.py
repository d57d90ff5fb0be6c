"""Handler execution — loads handler files and calls them.

The router only decides *which* handler file serves a request. This module
turns that file into a callable: it imports the file as a module (once),
picks the function for the request method, builds its arguments from the
signature, and negotiates the return value into a Response.

Lookup inside a handler module:

1. a function named after the lowercase method (``get``, ``post``, ...)
2. otherwise a function named ``handle``
"""

from __future__ import annotations

import hashlib
import importlib.util
import inspect
import threading
from types import ModuleType
from typing import Any, Protocol

from fileroute._internal.invoke import invoke
from fileroute._internal.types import Handler
from fileroute.errors import ConfigurationError
from fileroute.http.request import Request
from fileroute.http.response import Response
from fileroute.routing.route import RouteDescriptor
from fileroute.server.negotiation import negotiate

DEFAULT_HANDLER_NAME = "handle"


class HandlerExecutor(Protocol):
    """Runs the handler referenced by a matched route.

    Called exactly once per matched and authorized request. The request
    already carries the bound ``path_params``.
    """

    async def execute(self, route: RouteDescriptor, request: Request) -> Response: ...


class ModuleExecutor:
    """Execute handler files as Python modules.

    Modules are imported lazily on first use and kept for the life of
    the executor. Loading is serialized with a lock so concurrent first
    requests import a module once.
    """

    __slots__ = ("_lock", "_modules")

    def __init__(self) -> None:
        self._modules: dict[str, ModuleType] = {}
        self._lock = threading.Lock()

    async def execute(self, route: RouteDescriptor, request: Request) -> Response:
        handler = self.resolve_handler(route, request.method)
        kwargs = build_handler_kwargs(handler, request)
        result = await invoke(handler, **kwargs)
        return negotiate(result)

    def resolve_handler(self, route: RouteDescriptor, method: str) -> Handler:
        """Return the function in *route*'s module that serves *method*."""
        module = self._load(route.handler_ref)
        for name in (method.lower(), DEFAULT_HANDLER_NAME):
            func = getattr(module, name, None)
            if func is not None and callable(func):
                return func
        msg = (
            f"Handler {route.handler_ref} defines neither {method.lower()}() "
            f"nor {DEFAULT_HANDLER_NAME}()"
        )
        raise ConfigurationError(msg)

    def _load(self, handler_ref: str) -> ModuleType:
        module = self._modules.get(handler_ref)
        if module is not None:
            return module
        with self._lock:
            module = self._modules.get(handler_ref)
            if module is None:
                module = _import_file(handler_ref)
                self._modules[handler_ref] = module
        return module


def _import_file(handler_ref: str) -> ModuleType:
    """Import a handler file under a name derived from its path."""
    digest = hashlib.sha1(handler_ref.encode("utf-8")).hexdigest()[:12]
    spec = importlib.util.spec_from_file_location(f"_fileroute_handler_{digest}", handler_ref)
    if spec is None or spec.loader is None:
        msg = f"Cannot load handler file {handler_ref}"
        raise ConfigurationError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def build_handler_kwargs(handler: Handler, request: Request) -> dict[str, Any]:
    """Inspect the handler signature and build kwargs from the request.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Path parameters (by name, converted to the annotation when possible)
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in request.path_params:
            value = request.path_params[name]
            if param.annotation not in (inspect.Parameter.empty, str):
                try:
                    kwargs[name] = param.annotation(value)
                except (ValueError, TypeError):
                    kwargs[name] = value
            else:
                kwargs[name] = value

    return kwargs
