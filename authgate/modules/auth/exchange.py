"""Hand-off from a successful identity provider sign-in to the front end."""

import logging
import secrets
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ..errors import InternalError
from .interfaces import ExchangeCodeStore, ExchangePayload

logger = logging.getLogger(__name__)


def generate_exchange_code() -> str:
    return secrets.token_urlsafe(32)


class OAuthLoginSuccessHandler:
    """Mints a one-time exchange code and builds the front-end redirect."""

    def __init__(self, store: ExchangeCodeStore, ttl_seconds: int, redirect_uri: str):
        self.store = store
        self.ttl_seconds = ttl_seconds
        self.redirect_uri = redirect_uri

    async def on_success(
        self, provider: str, provider_subject_id: str, display_name: Optional[str]
    ) -> str:
        """
        Record the sign-in and return the redirect target.

        Returns:
            The configured redirect URI with a `code` query parameter
        """
        payload = ExchangePayload(
            provider=provider,
            provider_subject_id=provider_subject_id,
            display_name=display_name,
        )
        code = generate_exchange_code()
        if not await self.store.save(code, payload, self.ttl_seconds):
            raise InternalError("Failed to persist exchange code")

        logger.info(f"Issued exchange code for {provider} sign-in")
        parts = urlsplit(self.redirect_uri)
        query = parse_qsl(parts.query, keep_blank_values=True)
        query.append(("code", code))
        return urlunsplit(parts._replace(query=urlencode(query)))
