"""
feyna.api.app

FastAPI app factory for the reference service.

Responsibilities:
- Build the FastAPI application and mount the class routers.
- Push the signing secret from settings into the process-wide router config.
- Provide a single composition root where cross-cutting concerns live.
- Run the service under uvicorn (`main`, also `python -m feyna.api`).
"""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from feyna import __version__
from feyna.api.routers.dev_auth import DevAuthRouter
from feyna.api.routers.health import HealthRouter
from feyna.observability.logging import configure_logging, get_logger
from feyna.routing.config import configure_router
from feyna.routing.handlers import register_exception_handlers
from feyna.settings import Settings, get_settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        production=settings.is_production,
    )
    if settings.jwt_secret:
        configure_router(secret=settings.jwt_secret)

    app = FastAPI(
        title="feyna reference service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )
    register_exception_handlers(app)

    # Instantiation registers the routes; it fails here if no secret is configured.
    HealthRouter(app, "/")
    DevAuthRouter(app, "/v1/dev", settings=settings)

    log.info("app_created", env=settings.env)
    return app


def main() -> None:
    settings = get_settings()
    # log_config=None leaves uvicorn's loggers to the structlog setup above.
    uvicorn.run(create_app(settings=settings), host=settings.api_host, port=settings.api_port, log_config=None)


# --- Module Notes -----------------------------------------------------------
# Routers take the app explicitly so the factory can build several apps in one
# process (tests do); module-level apps can use `@router_config` instead.
