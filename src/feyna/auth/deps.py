"""
feyna.auth.deps

FastAPI dependency factories used as route middlewares.

Responsibilities:
- Convert a bearer token into a `Principal` on `request.state.user`.
- Offer a "required" and an "optional" flavor of token verification.
- Enforce role requirements via `authorize`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from fastapi import Request

from feyna.auth.jwt import JwtValidationError, decode_token, extract_bearer_token
from feyna.auth.models import Principal
from feyna.auth.roles import WILDCARD, RolePolicy
from feyna.errors import AuthenticationError, AuthorizationError
from feyna.routing.config import get_router_config


def current_user(request: Request) -> Principal | None:
    return getattr(request.state, "user", None)


def _verify(request: Request, *, secret: str, credentials_required: bool) -> Principal | None:
    token = extract_bearer_token(request)
    if token is None:
        if credentials_required:
            raise AuthenticationError("No authorization token was found.")
        request.state.user = None
        return None

    try:
        payload = decode_token(secret=secret, token=token)
    except JwtValidationError as e:
        # A bad token is rejected even when credentials are optional.
        raise AuthenticationError("Invalid token.", reason=str(e)) from e

    principal = Principal(claims=payload)
    request.state.user = principal
    return principal


def required(secret: str) -> Callable[[Request], Principal]:
    def _required(request: Request) -> Principal:
        return _verify(request, secret=secret, credentials_required=True)  # type: ignore[return-value]

    return _required


def optional(secret: str) -> Callable[[Request], Principal | None]:
    def _optional(request: Request) -> Principal | None:
        return _verify(request, secret=secret, credentials_required=False)

    return _optional


def authorize(
    role: str | Iterable[str] = WILDCARD,
    *,
    policy: RolePolicy | None = None,
) -> Callable[[Request], None]:
    """
    Pass when `role` is "*" or the caller's role is in the permitted set.

    Without an explicit `policy`, the configured one is looked up per request.
    """
    if not isinstance(role, str):
        role = tuple(role)

    def _authorize(request: Request) -> None:
        if role == WILDCARD:
            return

        principal = current_user(request)
        if principal is not None and principal.role is not None:
            permitted = (policy or get_router_config().role_policy).permitted(role)
            if principal.role in permitted:
                return

        raise AuthorizationError()

    return _authorize


# --- Module Notes -----------------------------------------------------------
# `authorize` reads `request.state.user`, so it must run after `required` or
# `optional`; `requires_login` attaches them in that order.
