"""
User Service Module - Black Box Interface

Purpose: Look up and create users in the user-profile service
Interface: UserServiceClient.find_by_oauth(), create_oauth_user(), find_by_id()
Hidden: HTTP transport, URL layout, status code interpretation
"""

from .client import UserServiceClient
from .models import OAuthUserCreateRequest, UserSummary

__all__ = ["UserServiceClient", "UserSummary", "OAuthUserCreateRequest"]
