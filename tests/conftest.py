"""
tests.conftest

Shared fixtures.

Responsibilities:
- Give every test a known signing secret and a clean process-wide router config.
- Mint tokens signed with that secret.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from feyna.auth.jwt import issue_token
from feyna.routing.config import configure_router, reset_router_config

SECRET = "test-secret"


@pytest.fixture(autouse=True)
def router_secret() -> Iterator[str]:
    reset_router_config()
    configure_router(secret=SECRET)
    yield SECRET
    reset_router_config()


@pytest.fixture
def make_token() -> Callable[..., str]:
    def _make(role: str | None = None, *, secret: str = SECRET, **data: object) -> str:
        if role is not None:
            data["role"] = role
        return issue_token(secret=secret, data=data)

    return _make
