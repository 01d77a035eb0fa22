"""Refresh cookie policy; set and clear share one attribute set."""

from typing import Any, Dict

from fastapi import Response

from ...config.provider import CookieConfig


class RefreshCookiePolicy:
    def __init__(self, config: CookieConfig, max_age_seconds: int):
        self.config = config
        self.max_age_seconds = max_age_seconds

    @property
    def name(self) -> str:
        return self.config.name

    def _attributes(self, max_age: int) -> Dict[str, Any]:
        return {
            "key": self.config.name,
            "max_age": max_age,
            "path": self.config.path,
            "secure": self.config.secure,
            "httponly": True,
            "samesite": self.config.same_site,
        }

    def apply(self, response: Response, refresh_token: str) -> None:
        response.set_cookie(value=refresh_token, **self._attributes(self.max_age_seconds))

    def clear(self, response: Response) -> None:
        response.set_cookie(value="", **self._attributes(0))
