"""
Token lifecycle: issue, rotate and revoke credential pairs.

Only the HMAC hash of a refresh token ever reaches the store. The raw
value exists in memory long enough to be returned to the caller once.
"""

import logging
from typing import Callable

from ..errors import InternalError, UnauthorizedError
from .interfaces import (
    AuthenticatedUser,
    CredentialSigner,
    IssuedPair,
    RefreshTokenHasher,
    RefreshTokenStore,
    SubjectLoader,
)
from .refresh import generate_refresh_token

logger = logging.getLogger(__name__)


class TokenLifecycleManager:
    def __init__(
        self,
        signer: CredentialSigner,
        hasher: RefreshTokenHasher,
        store: RefreshTokenStore,
        subjects: SubjectLoader,
        refresh_ttl_seconds: int,
        token_generator: Callable[[], str] = generate_refresh_token,
    ):
        """
        Initialize the lifecycle manager.

        Args:
            signer: Access token signer
            hasher: Refresh token hasher
            store: Hashed refresh token store
            subjects: Loader used to re-resolve the subject on refresh
            refresh_ttl_seconds: Lifetime of each refresh token
            token_generator: Source of raw refresh tokens
        """
        self.signer = signer
        self.hasher = hasher
        self.store = store
        self.subjects = subjects
        self.refresh_ttl_seconds = refresh_ttl_seconds
        self._generate = token_generator

    def _pair(self, user: AuthenticatedUser, raw_refresh: str) -> IssuedPair:
        access = self.signer.issue(user.subject_id, user.display_name, user.roles)
        return IssuedPair(
            access_token=access.token,
            refresh_token=raw_refresh,
            access_expires_in=access.expires_in_seconds,
            refresh_expires_in=self.refresh_ttl_seconds,
        )

    async def issue(self, user: AuthenticatedUser) -> IssuedPair:
        raw = self._generate()
        saved = await self.store.save(self.hasher.hash(raw), user.subject_id, self.refresh_ttl_seconds)
        if not saved:
            logger.error(f"Refresh token was not persisted for subject {user.subject_id}")
            raise InternalError("Failed to persist refresh token")

        logger.info(f"Issued credential pair for subject {user.subject_id}")
        return self._pair(user, raw)

    async def rotate(self, old_raw: str) -> IssuedPair:
        """
        Exchange a live refresh token for a new pair.

        Raises:
            UnauthorizedError: If the token is unknown, expired or already rotated
        """
        if not old_raw:
            raise UnauthorizedError("Refresh token missing")

        new_raw = self._generate()
        subject_id = await self.store.rotate(
            self.hasher.hash(old_raw),
            self.hasher.hash(new_raw),
            self.refresh_ttl_seconds,
        )
        if subject_id is None:
            raise UnauthorizedError("Invalid refresh token")

        user = await self.subjects.load(subject_id)
        logger.info(f"Rotated refresh token for subject {subject_id}")
        return self._pair(user, new_raw)

    async def revoke(self, raw: str) -> None:
        if not raw:
            return
        removed = await self.store.delete(self.hasher.hash(raw))
        if not removed:
            logger.debug("Revoke found no live refresh token")
