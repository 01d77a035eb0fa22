"""
API Module - Black Box Interface

Purpose: HTTP surface of the authentication flows
Interface: create_auth_router(), RefreshCookiePolicy
Hidden: Wire models, cookie attributes
"""

from .auth_routes import create_auth_router
from .cookies import RefreshCookiePolicy
from .models import HealthResponse, LoginRequest, TokenResponse

__all__ = ["create_auth_router", "RefreshCookiePolicy", "LoginRequest", "TokenResponse", "HealthResponse"]
