"""
feyna.routing.decorators

Decorators used to declare routes on `Router` subclasses.

Responsibilities:
- Record HTTP method + path on handler methods (`get`, `post`, ...).
- Accumulate per-route middlewares (`apply_middlewares`, `requires_login`).
- Record app/base path for a router class (`router_config`).

Example:

    @router_config(app, "/users")
    class UserRouter(Router):
        @get("/{user_id}")
        @requires_login("User")
        async def show(self, request):
            return {"id": request.path_params["user_id"]}
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable
from typing import Any, Literal, TypeVar

from feyna.auth.deps import authorize
from feyna.auth.roles import WILDCARD
from feyna.errors import RouterConfigError
from feyna.routing.registry import HTTP_METHODS, ensure_marker, flatten

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)


class AuthSentinel(enum.Enum):
    # Placeholders resolved by `resolve_middlewares` when the router is instantiated.
    REQUIRES_LOGIN = "REQUIRES_LOGIN"
    NO_AUTH_MIDDLEWARE = "NO_AUTH_MIDDLEWARE"


REQUIRES_LOGIN = AuthSentinel.REQUIRES_LOGIN
NO_AUTH_MIDDLEWARE = AuthSentinel.NO_AUTH_MIDDLEWARE


def request(method: str) -> Callable[[str], Callable[[F], F]]:
    method = method.lower()
    if method not in HTTP_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method!r}")

    def for_path(path: str) -> Callable[[F], F]:
        def decorator(fn: F) -> F:
            marker = ensure_marker(fn)
            marker.http_method = method
            marker.path = path
            return fn

        return decorator

    return for_path


get = request("get")
post = request("post")
put = request("put")
patch = request("patch")
delete = request("delete")
remove = delete


def apply_middlewares(*middlewares: Any) -> Callable[[F], F]:
    flat = flatten(middlewares)

    def decorator(fn: F) -> F:
        ensure_marker(fn).middlewares.extend(flat)
        return fn

    return decorator


def requires_login(role: str | Iterable[str] | Literal[False] = WILDCARD) -> Callable[[F], F]:
    """
    Require a verified token (and `role`), or opt out of auth with `role=False`.

    `requires_login(False)` keeps the route from receiving the default optional
    token parsing, so the request is never checked for a token.
    """
    if role is False:
        return apply_middlewares(NO_AUTH_MIDDLEWARE)
    return apply_middlewares(REQUIRES_LOGIN, authorize(role))


def router_config(
    app: Any,
    base_path: str = "/",
    *,
    before: Callable[..., Any] | None = None,
    after: Callable[..., Any] | None = None,
) -> Callable[[C], C]:
    """
    Attach a router class to `app` under `base_path`.

    `before` runs ahead of every route of the class (as a router dependency);
    `after` is called with `(request, response)` once a route produced its response.
    """

    def decorator(cls: C) -> C:
        registry = getattr(cls, "registry", None)
        if registry is None:
            raise RouterConfigError(f"{cls.__qualname__} is not a Router subclass")

        entry = registry.entry_for(cls)
        entry.app = app
        entry.base_path = base_path
        entry.before = before
        entry.after = after
        return cls

    return decorator
