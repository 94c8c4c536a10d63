"""
tests.test_registry

Decorator bookkeeping and middleware resolution, without serving requests.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI, Request

from feyna.errors import RouterConfigError
from feyna.routing.config import RouterConfig, configure_router, get_router_config
from feyna.routing.decorators import (
    NO_AUTH_MIDDLEWARE,
    REQUIRES_LOGIN,
    apply_middlewares,
    get,
    post,
    request,
    requires_login,
    router_config,
)
from feyna.routing.registry import RouterRegistry, flatten
from feyna.routing.router import Router, resolve_middlewares


def _tag(request: Request) -> None:
    pass


def _other(request: Request) -> None:
    pass


def _kind(middleware: object) -> str:
    return getattr(middleware, "__qualname__", "").split(".<locals>")[0]


def test_routes_are_collected_in_declaration_order() -> None:
    registry = RouterRegistry()

    class Items(Router, registry=registry):
        @get("/b")
        async def second_declared_first(self, request: Request) -> dict:
            return {}

        @post("/a")
        async def declared_second(self, request: Request) -> dict:
            return {}

    entry = registry.get(Items)
    assert entry is not None
    assert list(entry.routes) == ["second_declared_first", "declared_second"]
    assert [(r.http_method, r.path) for r in entry.routes.values()] == [("get", "/b"), ("post", "/a")]


def test_middlewares_accumulate_across_decorators() -> None:
    registry = RouterRegistry()

    class Items(Router, registry=registry):
        @get("/")
        @apply_middlewares([_other])
        @apply_middlewares(_tag, [None])
        async def index(self, request: Request) -> dict:
            return {}

    route = registry.get(Items).routes["index"]
    # Innermost decorator applies first.
    assert route.middlewares == [_tag, _other]


def test_requires_login_attaches_sentinel_then_role_check() -> None:
    registry = RouterRegistry()

    class Items(Router, registry=registry):
        @get("/")
        @requires_login("User")
        async def index(self, request: Request) -> dict:
            return {}

        @get("/public")
        @requires_login(False)
        async def public(self, request: Request) -> dict:
            return {}

    routes = registry.get(Items).routes
    assert routes["index"].middlewares[0] is REQUIRES_LOGIN
    assert _kind(routes["index"].middlewares[1]) == "authorize"
    assert routes["public"].middlewares == [NO_AUTH_MIDDLEWARE]


def test_same_class_name_in_different_scopes_does_not_collide() -> None:
    registry = RouterRegistry()

    def build(path: str) -> type:
        class Items(Router, registry=registry):
            @get(path)
            async def index(self, request: Request) -> dict:
                return {}

        return Items

    first, second = build("/one"), build("/two")

    assert len(registry) == 2
    assert registry.get(first).routes["index"].path == "/one"
    assert registry.get(second).routes["index"].path == "/two"


def test_subclass_inherits_and_overrides_routes() -> None:
    registry = RouterRegistry()

    class Base(Router, registry=registry):
        @get("/a")
        async def a(self, request: Request) -> dict:
            return {}

        @get("/b")
        async def b(self, request: Request) -> dict:
            return {}

    class Child(Base):
        @get("/b2")
        async def b(self, request: Request) -> dict:
            return {}

        @get("/c")
        async def c(self, request: Request) -> dict:
            return {}

    routes = registry.get(Child).routes
    assert [(k, r.path) for k, r in routes.items()] == [("a", "/a"), ("b", "/b2"), ("c", "/c")]
    assert routes["b"].owner is Child


def test_middlewares_without_route_fail_at_class_creation() -> None:
    with pytest.raises(RouterConfigError, match="no route"):

        class Broken(Router, registry=RouterRegistry()):
            @requires_login()
            async def orphan(self, request: Request) -> dict:
                return {}


def test_unknown_http_method_is_rejected() -> None:
    with pytest.raises(ValueError):
        request("trace")


def test_router_config_records_app_and_base_path() -> None:
    registry = RouterRegistry()
    app = FastAPI()

    @router_config(app, "/things")
    class Things(Router, registry=registry):
        pass

    entry = registry.get(Things)
    assert entry.app is app
    assert entry.base_path == "/things"


def test_resolve_without_auth_decision_appends_optional() -> None:
    resolved = resolve_middlewares([], get_router_config())
    assert [_kind(m) for m in resolved] == ["optional"]

    resolved = resolve_middlewares([_tag], get_router_config())
    assert resolved[0] is _tag
    assert [_kind(m) for m in resolved[1:]] == ["optional"]


def test_resolve_no_auth_sentinel_leaves_no_auth_middleware() -> None:
    assert resolve_middlewares([NO_AUTH_MIDDLEWARE], get_router_config()) == []


def test_resolve_requires_login_keeps_position() -> None:
    resolved = resolve_middlewares([_tag, REQUIRES_LOGIN, _other], get_router_config())
    assert resolved[0] is _tag
    assert _kind(resolved[1]) == "required"
    assert resolved[2] is _other


def test_resolve_without_secret_fails() -> None:
    with pytest.raises(RouterConfigError, match="secret"):
        resolve_middlewares([], RouterConfig(secret=None))

    # Opting out of auth never needs a secret.
    assert resolve_middlewares([NO_AUTH_MIDDLEWARE], RouterConfig(secret=None)) == []


def test_configure_router_merges_options() -> None:
    policy = get_router_config().role_policy
    config = configure_router(secret="rotated")
    assert config.secret == "rotated"
    assert config.role_policy is policy

    with pytest.raises(TypeError):
        configure_router(algorithm="RS256")


def test_flatten_drops_none_and_nesting() -> None:
    assert flatten([1, [2, (3, None)], None]) == [1, 2, 3]
