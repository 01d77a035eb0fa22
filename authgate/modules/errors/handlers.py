"""Translate exceptions into the gateway JSON error body."""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .codes import GatewayErrorCode
from .exceptions import GatewayError

logger = logging.getLogger(__name__)


def error_response(code: GatewayErrorCode, details: Optional[Any] = None) -> JSONResponse:
    """Build the standard `{code, details}` error response."""
    return JSONResponse(
        status_code=code.status,
        content={"code": code.value, "details": details},
    )


def _log(code: GatewayErrorCode, request: Request, message: str, exc: Optional[BaseException] = None):
    text = f"{code.value} {request.method} {request.url.path}: {message}"
    if code.log_level >= logging.ERROR and exc is not None:
        logger.log(code.log_level, text, exc_info=exc)
    else:
        logger.log(code.log_level, text)


async def handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
    _log(exc.code, request, str(exc), exc)
    return error_response(exc.code, exc.details)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    missing = [e for e in exc.errors() if e.get("type") == "missing"]
    code = GatewayErrorCode.MISSING_REQUEST_VALUE if missing else GatewayErrorCode.REQUEST_BIND_ERROR
    fields = [".".join(str(p) for p in e.get("loc", ())) for e in exc.errors()]
    _log(code, request, f"invalid fields {fields}")
    return error_response(code, {"fields": fields})


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = GatewayErrorCode.from_status(exc.status_code)
    _log(code, request, str(exc.detail))
    return error_response(code)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    _log(GatewayErrorCode.INTERNAL_ERROR, request, f"unhandled {type(exc).__name__}", exc)
    return error_response(GatewayErrorCode.INTERNAL_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    """Install the gateway error handlers on an application."""
    app.add_exception_handler(GatewayError, handle_gateway_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
