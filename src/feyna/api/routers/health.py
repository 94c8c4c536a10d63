"""
feyna.api.routers.health

Health endpoints.

Responsibilities:
- Provide a liveness check (`/healthz`) that never looks at tokens.
- Report the caller's role when a token is presented (`/whoami`).
"""

from __future__ import annotations

from fastapi import Request

from feyna.auth.deps import current_user
from feyna.routing.decorators import get, requires_login
from feyna.routing.router import Router


class HealthRouter(Router):
    @get("/healthz")
    @requires_login(False)
    async def healthz(self, request: Request) -> dict[str, bool]:
        # A "status" key would be read as the HTTP status code.
        return {"ok": True}

    @get("/whoami")
    async def whoami(self, request: Request) -> dict[str, str | None]:
        # Default optional auth: anonymous callers get a null role.
        user = current_user(request)
        return {"role": user.role if user is not None else None}
