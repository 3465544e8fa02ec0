"""Pinboard API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PinboardCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    pins: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False


class PinboardUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    pins: list[str] | None = None
    tags: list[str] | None = None
    is_public: bool | None = None


class PinboardAddPinRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pin_id: str = Field(..., min_length=1, alias="pinId")
