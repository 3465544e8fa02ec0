"""User profile schemas (camelCase on the wire)."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserUpsertRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uid: str = Field(..., min_length=1)
    email: EmailStr
    display_name: str | None = Field(default=None, alias="displayName")
    photo_url: str | None = Field(default=None, alias="photoURL")
    email_verified: bool = Field(default=False, alias="emailVerified")
