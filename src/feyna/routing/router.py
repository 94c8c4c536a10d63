"""
feyna.routing.router

`Router` base class.

Subclass it and declare routes with the decorators from `feyna.routing.decorators`.
When the class body is complete its routes are collected into the registry; when
the class is instantiated every route is handed to a FastAPI `APIRouter` together
with its resolved middlewares and wrapped endpoint, and that router is mounted on
the app configured through `@router_config(app, "/base-path")`.

Responsibilities:
- Resolve auth sentinels into concrete dependencies (`resolve_middlewares`).
- Register routes in declaration order and mount them (`Router.__init__`).
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from typing import Any, ClassVar

from fastapi import APIRouter, Depends, Request
from fastapi.params import Depends as DependsParam
from starlette.responses import Response

from feyna.auth.deps import optional, required
from feyna.errors import RouterConfigError
from feyna.observability.logging import get_logger
from feyna.routing.config import RouterConfig, get_router_config
from feyna.routing.decorators import NO_AUTH_MIDDLEWARE, REQUIRES_LOGIN
from feyna.routing.handlers import exception_translator, handler_adapter, register_exception_handlers
from feyna.routing.registry import RouteRegistration, RouterEntry, RouterRegistry, default_registry

log = get_logger(__name__)


def resolve_middlewares(middlewares: Iterable[Any], config: RouterConfig) -> list[Any]:
    """
    Replace auth sentinels with concrete middlewares.

    REQUIRES_LOGIN becomes the required-token dependency and NO_AUTH_MIDDLEWARE is
    dropped; both count as an auth decision. Without any decision the optional-token
    dependency is appended, so every route at least parses a presented token.
    """
    resolved: list[Any] = []
    auth_decided = False
    for middleware in middlewares:
        if middleware is REQUIRES_LOGIN:
            auth_decided = True
            resolved.append(required(_secret(config)))
        elif middleware is NO_AUTH_MIDDLEWARE:
            auth_decided = True
        else:
            resolved.append(middleware)

    if not auth_decided:
        resolved.append(optional(_secret(config)))
    return resolved


def _secret(config: RouterConfig) -> str:
    if not config.secret:
        raise RouterConfigError(
            "No signing secret configured; call configure_router(secret=...) "
            "or set FEYNA_JWT_SECRET"
        )
    return config.secret


def _as_dependency(middleware: Any) -> DependsParam:
    return middleware if isinstance(middleware, DependsParam) else Depends(middleware)


def _mount_prefix(base_path: str) -> str:
    prefix = "/" + base_path.strip("/")
    return "" if prefix == "/" else prefix


class Router:
    registry: ClassVar[RouterRegistry] = default_registry

    def __init_subclass__(cls, *, registry: RouterRegistry | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if registry is not None:
            cls.registry = registry
        cls.registry.collect(cls)

    def __init__(self, app: Any = None, base_path: str | None = None) -> None:
        """
        Register every declared route and mount them.

        `app`/`base_path` override what `@router_config` recorded for the class.
        """
        entry = self.registry.get(type(self))
        if entry is None:
            raise RouterConfigError("Router must be subclassed before it is instantiated")

        app = app if app is not None else entry.app
        if app is None:
            raise RouterConfigError(
                f'Please configure {entry.name} with @router_config(app, "/base-path")'
            )
        if app in entry.mounted_on:
            raise RouterConfigError(f"{entry.name} is already mounted on this app")

        base_path = base_path if base_path is not None else entry.base_path
        if not base_path:
            log.warning("router_base_path_missing", router=entry.name, fallback="/")
            base_path = "/"
        prefix = _mount_prefix(base_path)

        config = get_router_config()
        self.router = APIRouter(
            dependencies=[Depends(entry.before)] if entry.before is not None else None,
        )
        for route in entry.routes.values():
            self._register(route, entry, config, prefix)

        if hasattr(app, "exception_handlers"):
            register_exception_handlers(app)
        app.include_router(self.router, prefix=prefix)
        entry.mounted_on.add(app)
        log.info("router_mounted", router=entry.name, base_path=prefix or "/", routes=len(entry.routes))

    def _register(self, route: RouteRegistration, entry: RouterEntry, config: RouterConfig, prefix: str) -> None:
        middlewares = resolve_middlewares(route.middlewares, config)
        # "/" under a non-root prefix maps to the prefix itself ("/users", not "/users/").
        path = "" if route.path == "/" and prefix else route.path
        self.router.add_api_route(
            path,
            self._endpoint(route, entry.after),
            methods=[route.http_method.upper()],
            dependencies=[_as_dependency(m) for m in middlewares],
            response_model=None,
            name=route.key,
        )
        log.debug(
            "route_registered",
            router=entry.name,
            method=route.http_method.upper(),
            path=prefix + path or "/",
            middlewares=len(middlewares),
        )

    def _endpoint(self, route: RouteRegistration, after: Callable[..., Any] | None):
        translated = exception_translator(handler_adapter(getattr(self, route.key)))

        async def endpoint(request: Request) -> Response:
            response = await translated(request)
            if after is not None:
                # The response is already decided; a failing hook is logged, not sent.
                try:
                    result = after(request, response)
                    if inspect.isawaitable(result):
                        await result
                except Exception:
                    log.exception("after_hook_failed", router=type(self).__qualname__, path=request.url.path)
            return response

        endpoint.__name__ = route.key
        endpoint.__qualname__ = f"{type(self).__qualname__}.{route.key}"
        endpoint.__doc__ = route.handler.__doc__
        return endpoint


# --- Module Notes -----------------------------------------------------------
# Dependencies run in list order: the class-level `before` first, then the route's
# middlewares as resolved above. Errors they raise are translated by the app-level
# handlers installed in `register_exception_handlers`.
