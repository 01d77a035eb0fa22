"""
HTTP client for the user-profile service.

Not-found answers are returned as None; transport failures and server
errors surface as UnavailableError so callers never mistake an outage
for a missing user.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ...config.provider import UserServiceConfig
from ..errors import InternalError, UnavailableError
from .models import OAuthUserCreateRequest, UserSummary

logger = logging.getLogger(__name__)


class UserServiceClient:
    """Async client for `{base_url}{internal_path}` user endpoints."""

    def __init__(self, config: UserServiceConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.users_url,
            timeout=config.timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def find_by_oauth(self, provider: str, provider_user_id: str) -> Optional[UserSummary]:
        path = f"/{quote(provider, safe='')}/{quote(provider_user_id, safe='')}"
        return await self._get_optional(path, "find user by oauth")

    async def find_by_id(self, user_id: str) -> Optional[UserSummary]:
        return await self._get_optional(f"/{quote(str(user_id), safe='')}", "find user by id")

    async def create_oauth_user(
        self, provider: str, provider_user_id: str, nickname: Optional[str]
    ) -> UserSummary:
        """
        Create a user for an identity provider account.

        Raises:
            InternalError: If the user service rejects the request or answers
                with an unreadable body
            UnavailableError: If the user service cannot be reached
        """
        body = OAuthUserCreateRequest(provider_user_id=provider_user_id, nickname=nickname)
        response = await self._send(
            "POST",
            f"/{quote(provider, safe='')}",
            "create oauth user",
            json=body.model_dump(by_alias=True),
        )
        if response.status_code >= 400:
            logger.error(f"User service rejected user creation: {response.status_code}")
            raise InternalError(f"User creation rejected with status {response.status_code}")
        return self._parse(response, "create oauth user")

    async def _get_optional(self, path: str, operation: str) -> Optional[UserSummary]:
        response = await self._send("GET", path, operation)
        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            logger.error(f"User service {operation} returned {response.status_code}")
            raise InternalError(f"User service {operation} failed with status {response.status_code}")
        return self._parse(response, operation)

    async def _send(self, method: str, path: str, operation: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"User service {operation} timed out")
            raise UnavailableError(f"User service {operation} timed out") from e
        except httpx.TransportError as e:
            logger.error(f"User service {operation} unreachable: {e}")
            raise UnavailableError(f"User service {operation} unreachable") from e

        if response.status_code >= 500:
            logger.error(f"User service {operation} returned {response.status_code}")
            raise UnavailableError(f"User service {operation} failed with status {response.status_code}")
        return response

    @staticmethod
    def _parse(response: httpx.Response, operation: str) -> UserSummary:
        try:
            return UserSummary.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"User service {operation} returned an unreadable body")
            raise InternalError(f"User service {operation} returned an invalid body") from e
