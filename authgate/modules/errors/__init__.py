"""
Errors Module - Black Box Interface

Purpose: Stable error codes and the JSON error body returned to clients
Interface: GatewayErrorCode, GatewayError and subclasses, register_error_handlers()
Hidden: Status mapping, log level selection, framework exception translation
"""

from .codes import GatewayErrorCode
from .exceptions import (
    BadRequestError,
    ConfigurationError,
    GatewayError,
    InternalError,
    UnauthorizedError,
    UnavailableError,
)
from .handlers import error_response, register_error_handlers

__all__ = [
    "GatewayErrorCode",
    "GatewayError",
    "UnauthorizedError",
    "BadRequestError",
    "InternalError",
    "ConfigurationError",
    "UnavailableError",
    "error_response",
    "register_error_handlers",
]
