"""Wire models of the user-profile service's internal API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserSummary(BaseModel):
    """User record as returned by the user service."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    nickname: Optional[str] = None
    roles: List[str] = Field(default_factory=list)


class OAuthUserCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider_user_id: str = Field(alias="providerUserId")
    nickname: Optional[str] = None
