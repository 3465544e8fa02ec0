"""DTOs for pins (records under pins/{id})."""

from dataclasses import dataclass, field
from typing import Any

from pindown.domain.enums import DataType
from pindown.shared.utils.records import decode_list, decode_map

_METADATA_KEYS = (
    "title",
    "description",
    "tags",
    "workflow_sources",
    "created_at",
    "updated_at",
    "is_public",
)


@dataclass(frozen=True)
class PinMetadata:
    """Descriptive metadata. extra keeps caller-supplied keys we do not model."""

    title: str = "Untitled Pin"
    description: str = ""
    tags: tuple[str, ...] = ()
    workflow_sources: tuple[str, ...] = ()
    created_at: Any = None
    updated_at: Any = None
    is_public: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, raw: Any) -> "PinMetadata":
        d = decode_map(raw)
        return cls(
            title=d.get("title") or "Untitled Pin",
            description=d.get("description") or "",
            tags=tuple(decode_list(d.get("tags"))),
            workflow_sources=tuple(decode_list(d.get("workflow_sources"))),
            created_at=d.get("created_at"),
            updated_at=d.get("updated_at"),
            is_public=bool(d.get("is_public", False)),
            extra={k: v for k, v in d.items() if k not in _METADATA_KEYS},
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = dict(self.extra)
        record.update(
            {
                "title": self.title,
                "description": self.description,
                "tags": list(self.tags),
                "workflow_sources": list(self.workflow_sources),
                "created_at": self.created_at,
                "is_public": self.is_public,
            }
        )
        if self.updated_at is not None:
            record["updated_at"] = self.updated_at
        return record


@dataclass(frozen=True)
class PinPermissions:
    is_public: bool
    created_by: str

    def to_record(self) -> dict[str, Any]:
        return {"is_public": self.is_public, "created_by": self.created_by}


@dataclass(frozen=True)
class Pin:
    """Pin read-model.

    Visibility is read from permissions.is_public; rows written before
    permissions existed fall back to metadata.is_public.
    """

    id: str
    user_id: str
    data_type: DataType
    content: str
    metadata: PinMetadata
    permissions: PinPermissions | None = None
    wid: str | None = None

    @property
    def is_public(self) -> bool:
        if self.permissions is not None:
            return self.permissions.is_public
        return self.metadata.is_public

    @classmethod
    def from_record(cls, pin_id: str, raw: dict[str, Any]) -> "Pin":
        perms_raw = raw.get("permissions")
        permissions = None
        if isinstance(perms_raw, dict):
            permissions = PinPermissions(
                is_public=bool(perms_raw.get("is_public", False)),
                created_by=perms_raw.get("created_by") or raw.get("user_id", ""),
            )
        try:
            data_type = DataType(raw.get("data_type") or DataType.MARKDOWN.value)
        except ValueError:
            data_type = DataType.TEXT
        return cls(
            id=raw.get("id") or pin_id,
            user_id=raw.get("user_id", ""),
            data_type=data_type,
            content=raw.get("content") or "",
            metadata=PinMetadata.from_record(raw.get("metadata")),
            permissions=permissions,
            wid=raw.get("wid"),
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": self.id,
            "user_id": self.user_id,
            "wid": self.wid,
            "data_type": self.data_type.value,
            "content": self.content,
            "metadata": self.metadata.to_record(),
        }
        if self.permissions is not None:
            record["permissions"] = self.permissions.to_record()
        return record


@dataclass(frozen=True)
class PinCreate:
    """Input for PinRepository.create_pin. Content starts empty."""

    user_id: str
    data_type: DataType = DataType.MARKDOWN
    title: str | None = None
    description: str = ""
    tags: tuple[str, ...] = ()
    is_public: bool = False
    extra_metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PinMetadataUpdate:
    """Partial metadata update; None means leave unchanged."""

    title: str | None = None
    description: str | None = None
    tags: tuple[str, ...] | None = None
    is_public: bool | None = None
