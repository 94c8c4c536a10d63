"""
feyna.errors

Error types shared by the routing and auth layers.

Responsibilities:
- Define the tagged `ApplicationError` translated into JSON error responses.
- Define the auth failures raised by token/role middlewares.
- Define the startup-time configuration error.
"""

from __future__ import annotations

from typing import Any

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN


class ApplicationError(Exception):
    """
    Deliberate, client-visible failure.

    `info` is arbitrary data attached to the error response; an optional
    `status` key selects the HTTP status code (400 when absent).
    """

    def __init__(self, message: str, info: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.info = info

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, {self.info!r})"


class AuthenticationError(ApplicationError):
    def __init__(self, message: str, **info: Any) -> None:
        super().__init__(message, {"status": HTTP_401_UNAUTHORIZED, **info})


class AuthorizationError(ApplicationError):
    def __init__(self, message: str = "Unauthorized access.") -> None:
        super().__init__(message, {"status": HTTP_403_FORBIDDEN})


class RouterConfigError(RuntimeError):
    """Raised at startup when a router cannot be registered as declared."""


# --- Module Notes -----------------------------------------------------------
# `RouterConfigError` is not an `ApplicationError`: it never
# reaches a client, it aborts app composition.
