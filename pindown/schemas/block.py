"""Block API schemas."""

from pydantic import BaseModel, Field

from pindown.domain.enums import BlockType


class BlockCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    type: BlockType
    template: str = Field(..., min_length=1)
    order: int = Field(default=0, ge=0)


class BlockUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    type: BlockType | None = None
    template: str | None = Field(default=None, min_length=1)
    order: int | None = Field(default=None, ge=0)
