"""
feyna.routing.handlers

Endpoint wrappers and error translation.

Responsibilities:
- Adapt a handler's return value into a JSON response (`handler_adapter`).
- Translate `ApplicationError` into `{"message", "data"}` responses and map
  anything else to a generic 500 (`exception_translator`).
- Install the same translation as app-level exception handlers for errors raised
  by route dependencies.
"""

from __future__ import annotations

import inspect
import time
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response
from starlette.status import (
    HTTP_200_OK,
    HTTP_204_NO_CONTENT,
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from feyna.errors import ApplicationError
from feyna.observability.logging import get_logger, request_timer
from feyna.settings import get_settings

log = get_logger(__name__)

Endpoint = Callable[[Request], Awaitable[Response]]


def handler_adapter(fn: Callable[[Request], Any]) -> Endpoint:
    async def _call(request: Request) -> Any:
        if inspect.iscoroutinefunction(fn):
            return await fn(request)
        result = await run_in_threadpool(fn, request)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _adapted(request: Request) -> Response:
        if get_settings().is_production:
            return to_response(await _call(request))

        with request_timer():
            started = time.perf_counter()
            result = await _call(request)
            log.info(
                "request_handled",
                path=request.url.path,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 3),
            )
        return to_response(result)

    return _adapted


def to_response(result: Any) -> Response:
    if isinstance(result, Response):
        return result
    if result is None:
        return Response(status_code=HTTP_204_NO_CONTENT)
    if isinstance(result, BaseModel):
        result = result.model_dump(mode="json")
    if isinstance(result, dict):
        body = dict(result)
        status = body.pop("status", None) or HTTP_200_OK
        return JSONResponse(body, status_code=status)
    return JSONResponse(result, status_code=HTTP_200_OK)


def error_response(exc: ApplicationError) -> JSONResponse:
    content: dict[str, Any] = {"message": exc.message}
    status = HTTP_400_BAD_REQUEST
    if isinstance(exc.info, dict):
        data = dict(exc.info)
        status = data.pop("status", None) or HTTP_400_BAD_REQUEST
        content["data"] = data
    elif exc.info is not None:
        content["data"] = exc.info
    return JSONResponse(content, status_code=status)


def internal_error_response() -> JSONResponse:
    return JSONResponse(
        {"message": "Internal server error."},
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
    )


def exception_translator(fn: Endpoint) -> Endpoint:
    async def _translated(request: Request) -> Response:
        try:
            return await fn(request)
        except ApplicationError as e:
            log.info("application_error", path=request.url.path, message=e.message)
            return error_response(e)
        except Exception:
            log.exception("unhandled_error", path=request.url.path)
            return internal_error_response()

    return _translated


def register_exception_handlers(app: FastAPI) -> None:
    if ApplicationError in app.exception_handlers:
        return

    @app.exception_handler(ApplicationError)
    async def _application_error(request: Request, exc: ApplicationError) -> JSONResponse:
        log.info("application_error", path=request.url.path, message=exc.message)
        return error_response(exc)

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        # Starlette re-raises after sending this response so servers still log it.
        log.exception("unhandled_error", path=request.url.path, exc_info=exc)
        return internal_error_response()


# --- Module Notes -----------------------------------------------------------
# Handlers receive the `Request` only; path/query values come from
# `request.path_params` / `request.query_params`, the parsed token from
# `request.state.user`.
