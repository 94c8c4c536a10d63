"""
feyna.auth.jwt

JWT extraction, issuing and validation helpers.

Responsibilities:
- Pull a bearer token out of the `Authorization` header.
- Decode and verify tokens with the single supported algorithm (HS256).
- Issue tokens carrying the `data` claim that role checks read.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import jwt
from jwt import InvalidTokenError

ALGORITHM = "HS256"


class _HasHeaders(Protocol):
    headers: Mapping[str, str]


class JwtValidationError(Exception):
    pass


def extract_bearer_token(request: _HasHeaders) -> str | None:
    """
    Return the token of an `Authorization: Bearer <token>` header, else None.

    Starlette headers are case-insensitive, so `authorization` matches any casing
    of the header name. The scheme itself must be exactly `Bearer`.
    """
    authorization = request.headers.get("authorization")
    if not authorization:
        return None

    parts = authorization.split(" ")
    if parts[0] != "Bearer" or len(parts) < 2:
        return None
    return parts[1] or None


def decode_token(*, secret: str, token: str) -> dict[str, Any]:
    try:
        # Signature is always checked; `exp`/`nbf` are enforced when present.
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


def issue_token(
    *,
    secret: str,
    data: Mapping[str, Any],
    ttl: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "data": dict(data),
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `api/routers/dev_auth.py` and the test suite; the
# routing layer only ever decodes.
