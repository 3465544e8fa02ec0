"""Workflow data API schemas."""

from typing import Any

from pydantic import BaseModel, field_validator


class WorkflowDataRequest(BaseModel):
    data: dict[str, Any]
    api_key: str | None = None

    @field_validator("data")
    @classmethod
    def data_not_empty(cls, v: dict[str, Any]) -> dict[str, Any]:
        if not v:
            raise ValueError("Data is required")
        return v
