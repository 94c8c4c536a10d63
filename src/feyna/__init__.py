"""
feyna

Decorator-driven class routers for FastAPI.

Responsibilities:
- Expose package version metadata.
- Re-export the public routing surface (decorators, `Router`, errors).
"""

from feyna.errors import ApplicationError
from feyna.routing.config import configure_router
from feyna.routing.decorators import (
    apply_middlewares,
    delete,
    get,
    patch,
    post,
    put,
    remove,
    request,
    requires_login,
    router_config,
)
from feyna.routing.router import Router

__all__ = [
    "__version__",
    "ApplicationError",
    "Router",
    "apply_middlewares",
    "configure_router",
    "delete",
    "get",
    "patch",
    "post",
    "put",
    "remove",
    "request",
    "requires_login",
    "router_config",
]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Importing this package registers nothing; routes are collected only when a
# `Router` subclass is defined.
