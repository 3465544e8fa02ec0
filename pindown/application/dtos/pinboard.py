"""DTOs for pinboards (records under pin_boards/{id})."""

from dataclasses import dataclass
from typing import Any

from pindown.shared.utils.records import decode_list, dedupe


@dataclass(frozen=True)
class Pinboard:
    """Pinboard read-model; pins are ordered and never repeat."""

    id: str
    user_id: str
    name: str
    description: str = ""
    pins: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    is_public: bool = False
    created_at: Any = None
    updated_at: Any = None

    @classmethod
    def from_record(cls, pinboard_id: str, raw: dict[str, Any]) -> "Pinboard":
        return cls(
            id=raw.get("id") or pinboard_id,
            user_id=raw.get("user_id", ""),
            name=raw.get("name", ""),
            description=raw.get("description") or "",
            pins=tuple(dedupe(decode_list(raw.get("pins")))),
            tags=tuple(decode_list(raw.get("tags"))),
            is_public=bool(raw.get("is_public", False)),
            created_at=raw.get("created_at"),
            updated_at=raw.get("updated_at"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "pins": list(self.pins),
            "tags": list(self.tags),
            "is_public": self.is_public,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class PinboardCreate:
    user_id: str
    name: str
    description: str = ""
    pins: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    is_public: bool = False


@dataclass(frozen=True)
class PinboardUpdate:
    """Partial pinboard update; None means leave unchanged. Owner is not updatable."""

    name: str | None = None
    description: str | None = None
    pins: tuple[str, ...] | None = None
    tags: tuple[str, ...] | None = None
    is_public: bool | None = None

    def to_patch(self) -> dict[str, Any]:
        patch: dict[str, Any] = {}
        if self.name is not None:
            patch["name"] = self.name
        if self.description is not None:
            patch["description"] = self.description
        if self.pins is not None:
            patch["pins"] = dedupe(list(self.pins))
        if self.tags is not None:
            patch["tags"] = list(self.tags)
        if self.is_public is not None:
            patch["is_public"] = self.is_public
        return patch
