"""Error codes exposed in gateway error responses."""

import logging
from enum import Enum


class GatewayErrorCode(str, Enum):
    """Client-visible error code; the value is the code string in the body."""

    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    MISSING_REQUEST_VALUE = "MISSING_REQUEST_VALUE"
    REQUEST_BIND_ERROR = "REQUEST_BIND_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    GATEWAY_TIMEOUT = "GATEWAY_TIMEOUT"

    @property
    def status(self) -> int:
        return _STATUS[self]

    @property
    def log_level(self) -> int:
        if self.status >= 500:
            return logging.ERROR
        if self is GatewayErrorCode.RATE_LIMIT_EXCEEDED:
            return logging.INFO
        return logging.WARNING

    @classmethod
    def from_status(cls, status: int) -> "GatewayErrorCode":
        """Pick the code for a framework-raised HTTP status."""
        for code, code_status in _STATUS.items():
            if code_status == status:
                return code
        if status >= 500:
            return cls.INTERNAL_ERROR
        return cls.REQUEST_BIND_ERROR


_STATUS = {
    GatewayErrorCode.UNAUTHORIZED: 401,
    GatewayErrorCode.FORBIDDEN: 403,
    GatewayErrorCode.REQUEST_BIND_ERROR: 400,
    GatewayErrorCode.MISSING_REQUEST_VALUE: 400,
    GatewayErrorCode.NOT_FOUND: 404,
    GatewayErrorCode.METHOD_NOT_ALLOWED: 405,
    GatewayErrorCode.UNSUPPORTED_MEDIA_TYPE: 415,
    GatewayErrorCode.RATE_LIMIT_EXCEEDED: 429,
    GatewayErrorCode.INTERNAL_ERROR: 500,
    GatewayErrorCode.SERVICE_UNAVAILABLE: 503,
    GatewayErrorCode.GATEWAY_TIMEOUT: 504,
}
