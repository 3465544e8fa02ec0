"""DTOs for datasets (records under pin_datasets/{pin_id}/{dataset_id})."""

from dataclasses import dataclass
from typing import Any

from pindown.domain.enums import DatasetFormat, DatasetType
from pindown.domain.value_objects import DatasetPayload, payload_from_record
from pindown.shared.utils.records import decode_list, decode_map


@dataclass(frozen=True)
class DatasetMetadata:
    name: str
    type: DatasetFormat
    dataset_type: DatasetType = DatasetType.USER
    description: str = ""
    created_by: str = ""
    created_at: Any = None
    updated_at: Any = None
    status: str = "active"

    @classmethod
    def from_record(cls, raw: Any) -> "DatasetMetadata":
        d = decode_map(raw)
        try:
            dataset_type = DatasetType(d.get("datasetType") or DatasetType.USER.value)
        except ValueError:
            dataset_type = DatasetType.USER
        return cls(
            name=d.get("name", ""),
            type=DatasetFormat(d.get("type") or DatasetFormat.JSON.value),
            dataset_type=dataset_type,
            description=d.get("description") or "",
            created_by=d.get("createdBy", ""),
            created_at=d.get("createdAt"),
            updated_at=d.get("updatedAt"),
            status=d.get("status") or "active",
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.value,
            "datasetType": self.dataset_type.value,
            "description": self.description,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "status": self.status,
        }


@dataclass(frozen=True)
class Dataset:
    id: str
    metadata: DatasetMetadata
    data: DatasetPayload
    viewers: tuple[str, ...] = ()
    editors: tuple[str, ...] = ()

    @classmethod
    def from_record(cls, dataset_id: str, raw: dict[str, Any]) -> "Dataset":
        metadata = DatasetMetadata.from_record(raw.get("metadata"))
        perms = decode_map(raw.get("permissions"))
        return cls(
            id=raw.get("id") or dataset_id,
            metadata=metadata,
            data=payload_from_record(metadata.type, raw.get("data")),
            viewers=tuple(decode_list(perms.get("viewers"))),
            editors=tuple(decode_list(perms.get("editors"))),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "metadata": self.metadata.to_record(),
            "data": self.data.to_record(),
            "permissions": {
                "viewers": list(self.viewers),
                "editors": list(self.editors),
            },
        }


@dataclass(frozen=True)
class DatasetCreate:
    """Input for create_dataset; data is the raw string from the request."""

    name: str
    type: DatasetFormat
    data: Any
    created_by: str
    dataset_type: DatasetType = DatasetType.USER
    description: str = ""
    status: str = "active"


@dataclass(frozen=True)
class DatasetUpdate:
    """Partial dataset update; None means leave unchanged."""

    name: str | None = None
    type: DatasetFormat | None = None
    dataset_type: DatasetType | None = None
    description: str | None = None
    data: Any = None
