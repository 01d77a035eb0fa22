"""Exception hierarchy raised by gateway components."""

from typing import Any, Optional

from .codes import GatewayErrorCode


class GatewayError(Exception):
    """Base error carrying a client-visible code."""

    code = GatewayErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str = "",
        details: Optional[Any] = None,
        code: Optional[GatewayErrorCode] = None,
    ):
        super().__init__(message or self.__class__.__name__)
        self.message = message
        self.details = details
        if code is not None:
            self.code = code

    @property
    def status(self) -> int:
        return self.code.status


class UnauthorizedError(GatewayError):
    """Missing, invalid, expired or reused credential."""

    code = GatewayErrorCode.UNAUTHORIZED


class BadRequestError(GatewayError):
    """Malformed client input such as a blank exchange code."""

    code = GatewayErrorCode.MISSING_REQUEST_VALUE


class InternalError(GatewayError):
    """Server-side failure that the client cannot fix."""

    code = GatewayErrorCode.INTERNAL_ERROR


class ConfigurationError(InternalError):
    """Invalid configuration; fatal at startup."""


class UnavailableError(GatewayError):
    """A collaborator or the shared store could not be reached."""

    code = GatewayErrorCode.SERVICE_UNAVAILABLE
