"""Pin API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from pindown.domain.enums import DataType


class PinMetadataIn(BaseModel):
    """Metadata on create. Unknown keys are kept on the stored metadata."""

    model_config = ConfigDict(extra="allow")

    title: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    is_public: bool = False


class PinCreateRequest(BaseModel):
    data_type: DataType = DataType.MARKDOWN
    metadata: PinMetadataIn | None = None
    api_key: str | None = None


class PinMetadataPatch(BaseModel):
    title: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    is_public: bool | None = None


class PinUpdateRequest(BaseModel):
    metadata: PinMetadataPatch | None = None
    api_key: str | None = None


class PinContentRequest(BaseModel):
    """Write rendered content (typically from a workflow run)."""

    content: str = Field(..., min_length=1)
    wid: str | None = Field(default=None, min_length=1)
    data_type: DataType | None = None
    api_key: str | None = None
