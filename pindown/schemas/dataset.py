"""Dataset API schemas. datasetType keeps its camelCase wire name."""

from pydantic import BaseModel, ConfigDict, Field

from pindown.domain.enums import DatasetFormat, DatasetType


class DatasetCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    type: DatasetFormat
    dataset_type: DatasetType = Field(default=DatasetType.USER, alias="datasetType")
    data: str = Field(..., min_length=1)
    description: str | None = None


class DatasetUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, min_length=1, max_length=100)
    type: DatasetFormat | None = None
    dataset_type: DatasetType | None = Field(default=None, alias="datasetType")
    data: str | None = Field(default=None, min_length=1)
    description: str | None = None
