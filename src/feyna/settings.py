"""
feyna.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the routing layer and the reference service.
- Hide the signing secret from repr/logging.
- Offer a cached settings instance.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FEYNA_", case_sensitive=False)

    # "prod" silences per-request timing logs; nothing else changes.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "feyna"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Seed for the process-wide auth secret; `configure_router(secret=...)` overrides it.
    jwt_secret: str | None = Field(default=None, repr=False)

    @property
    def is_production(self) -> bool:
        return self.env == "prod"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The signing algorithm is not a setting: tokens are always HS256 (see `auth.jwt`).
