"""Identity resolution against the user-profile service."""

import logging
from typing import Optional, Protocol

from ..errors import InternalError, UnauthorizedError
from ..userservice.models import UserSummary
from .interfaces import AuthenticatedUser, ExchangePayload

logger = logging.getLogger(__name__)


class UserDirectory(Protocol):
    """Protocol for the user-profile collaborator."""

    async def find_by_oauth(self, provider: str, provider_user_id: str) -> Optional[UserSummary]:
        ...

    async def create_oauth_user(
        self, provider: str, provider_user_id: str, nickname: Optional[str]
    ) -> UserSummary:
        ...

    async def find_by_id(self, user_id: str) -> Optional[UserSummary]:
        ...


def _to_user(summary: UserSummary) -> AuthenticatedUser:
    return AuthenticatedUser(
        subject_id=summary.id,
        display_name=summary.nickname,
        roles=list(summary.roles),
    )


class UserIdentityService:
    """Maps identity provider accounts and subject ids to internal users."""

    def __init__(self, directory: UserDirectory):
        self.directory = directory

    async def resolve_or_create(self, payload: ExchangePayload) -> AuthenticatedUser:
        """
        Find the user linked to a provider account, creating it on first sight.

        Args:
            payload: Identity facts from a consumed exchange code

        Returns:
            The internal user

        Raises:
            InternalError: If the payload is incomplete
        """
        provider = (payload.provider or "").strip().lower()
        provider_subject_id = (payload.provider_subject_id or "").strip()
        if not provider or not provider_subject_id:
            raise InternalError("Exchange payload is missing provider identity")

        summary = await self.directory.find_by_oauth(provider, provider_subject_id)
        if summary is None:
            logger.info(f"Creating user for new {provider} account")
            summary = await self.directory.create_oauth_user(
                provider, provider_subject_id, payload.display_name
            )
        return _to_user(summary)

    async def load(self, subject_id: str) -> AuthenticatedUser:
        if not subject_id or not str(subject_id).strip():
            raise InternalError("Subject id must not be blank")
        summary = await self.directory.find_by_id(subject_id)
        if summary is None:
            logger.warning(f"Refresh for unknown subject {subject_id}")
            raise UnauthorizedError("USER_NOT_FOUND", details={"reason": "USER_NOT_FOUND"})
        return _to_user(summary)
