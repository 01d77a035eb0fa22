"""
Request and response models of the auth endpoints.

Field names are camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(CamelModel):
    """Exchange code redemption."""

    auth_code: str = Field(..., min_length=1, description="One-time exchange code")


class TokenResponse(CamelModel):
    """Access token handed to the client; the refresh token travels in a cookie."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class HealthResponse(BaseModel):
    status: str = "ok"
