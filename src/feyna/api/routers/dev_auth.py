from __future__ import annotations

from datetime import timedelta
from typing import Any

from fastapi import Request
from pydantic import BaseModel, Field, ValidationError
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from feyna.auth.jwt import issue_token
from feyna.errors import ApplicationError
from feyna.routing.config import get_router_config
from feyna.routing.decorators import post, requires_login
from feyna.routing.router import Router
from feyna.settings import Settings


class DevTokenRequest(BaseModel):
    data: dict[str, Any] = Field(default_factory=dict)
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevAuthRouter(Router):
    def __init__(self, app: Any = None, base_path: str | None = None, *, settings: Settings) -> None:
        self.settings = settings
        super().__init__(app, base_path)

    @post("/token")
    @requires_login(False)
    async def mint_token(self, request: Request) -> dict[str, Any]:
        if self.settings.is_production:
            raise ApplicationError("Not found", {"status": HTTP_404_NOT_FOUND})

        try:
            payload = await request.json()
        except ValueError as e:
            raise ApplicationError("Request body must be JSON.") from e
        try:
            body = DevTokenRequest.model_validate(payload)
        except ValidationError as e:
            errors = e.errors(include_url=False, include_context=False, include_input=False)
            raise ApplicationError("Invalid token request.", {"errors": errors}) from e

        token = issue_token(
            secret=get_router_config().secret,
            data=body.data,
            ttl=timedelta(minutes=body.ttl_minutes),
        )
        return {"access_token": token, "token_type": "bearer", "status": HTTP_201_CREATED}
