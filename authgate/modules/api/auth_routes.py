"""Auth endpoints: login with an exchange code, refresh, logout."""

import logging

from fastapi import APIRouter, Request, Response, status

from ..auth.interfaces import IssuedPair
from ..auth.service import AuthenticationService
from .cookies import RefreshCookiePolicy
from .models import LoginRequest, TokenResponse

logger = logging.getLogger(__name__)


def _token_response(pair: IssuedPair, response: Response, cookies: RefreshCookiePolicy) -> TokenResponse:
    cookies.apply(response, pair.refresh_token)
    return TokenResponse(
        access_token=pair.access_token,
        token_type=pair.token_type,
        expires_in=pair.access_expires_in,
    )


def create_auth_router(
    auth_service: AuthenticationService,
    cookies: RefreshCookiePolicy,
) -> APIRouter:
    """
    Create the auth router with injected service and cookie policy.

    Args:
        auth_service: Authentication facade
        cookies: Refresh cookie policy

    Returns:
        FastAPI router mounted under /api/v1/auth
    """
    router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

    @router.post("/login", response_model=TokenResponse, response_model_by_alias=True)
    async def login(body: LoginRequest, response: Response) -> TokenResponse:
        """Redeem a one-time exchange code for a credential pair."""
        pair = await auth_service.login(body.auth_code)
        return _token_response(pair, response, cookies)

    @router.post("/refresh", response_model=TokenResponse, response_model_by_alias=True)
    async def refresh(request: Request, response: Response) -> TokenResponse:
        """Rotate the refresh cookie and issue a new access token."""
        pair = await auth_service.refresh(request.cookies.get(cookies.name))
        return _token_response(pair, response, cookies)

    @router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
    async def logout(request: Request) -> Response:
        """
        Revoke the refresh token and clear the cookie.

        Revocation is best effort; the cookie is cleared and 204 returned
        even when the store call fails.
        """
        response = Response(status_code=status.HTTP_204_NO_CONTENT)
        try:
            await auth_service.logout(request.cookies.get(cookies.name))
        except Exception as e:
            logger.warning(f"Refresh token revoke failed during logout: {type(e).__name__}: {e}")
        finally:
            cookies.clear(response)
        return response

    return router
