"""Issues a long-lived device identifier cookie on first contact."""

import logging
import uuid
from typing import Iterable

from fastapi import Request

logger = logging.getLogger(__name__)

DEVICE_COOKIE_MAX_AGE = 365 * 24 * 60 * 60


class DeviceIdCookieMiddleware:
    """
    Sets a random device id cookie when the client has none.

    CORS preflights and auth endpoints are left alone.
    """

    def __init__(
        self,
        cookie_name: str = "deviceId",
        skip_prefixes: Iterable[str] = ("/api/v1/auth/",),
        secure: bool = True,
        max_age_seconds: int = DEVICE_COOKIE_MAX_AGE,
    ):
        self.cookie_name = cookie_name
        self.skip_prefixes = tuple(skip_prefixes)
        self.secure = secure
        self.max_age_seconds = max_age_seconds

    def should_issue(self, request: Request) -> bool:
        if request.method.upper() == "OPTIONS":
            return False
        if request.url.path.startswith(self.skip_prefixes):
            return False
        existing = request.cookies.get(self.cookie_name)
        return not (existing and existing.strip())

    async def __call__(self, request: Request, call_next):
        issue = self.should_issue(request)
        response = await call_next(request)
        if issue:
            response.set_cookie(
                key=self.cookie_name,
                value=str(uuid.uuid4()),
                max_age=self.max_age_seconds,
                path="/",
                secure=self.secure,
                httponly=True,
                samesite="lax",
            )
            logger.debug(f"Issued {self.cookie_name} cookie for {request.url.path}")
        return response
