"""
feyna.routing.config

Process-wide auth configuration read when routes are registered.

Responsibilities:
- Hold the signing secret and role policy used by auth middlewares.
- Merge partial updates via `configure_router(**options)`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from feyna.auth.roles import DEFAULT_ROLE_POLICY, RolePolicy
from feyna.settings import get_settings


@dataclass(frozen=True, slots=True)
class RouterConfig:
    secret: str | None = dataclasses.field(default=None, repr=False)
    role_policy: RolePolicy = DEFAULT_ROLE_POLICY


_config: RouterConfig | None = None


def get_router_config() -> RouterConfig:
    global _config
    if _config is None:
        _config = RouterConfig(secret=get_settings().jwt_secret)
    return _config


def configure_router(**options: Any) -> RouterConfig:
    """
    Update the process-wide config; unknown option names raise `TypeError`.

    Only routers instantiated afterwards pick up a new secret.
    """
    global _config
    _config = dataclasses.replace(get_router_config(), **options)
    return _config


def reset_router_config() -> None:
    global _config
    _config = None
