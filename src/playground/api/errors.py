"""Flat ``{"error": message}`` envelope for every failure."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError as FastAPIValidationError
from fastapi.responses import JSONResponse

from playground.runtime.errors import PlaygroundError

logger = logging.getLogger(__name__)


def error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


async def _playground_error(_: Request, exc: Exception) -> JSONResponse:
    logger.info("Request failed: %s: %s", type(exc).__name__, exc)
    return error_response(str(exc))


async def _malformed_request(_: Request, exc: FastAPIValidationError) -> JSONResponse:
    errors = exc.errors()
    if not errors:
        return error_response("invalid request")
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return error_response(f"invalid request: {location}: {message}" if location else f"invalid request: {message}")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlaygroundError, _playground_error)
    app.add_exception_handler(FastAPIValidationError, _malformed_request)
