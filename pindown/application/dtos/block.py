"""DTOs for blocks (records under pin_blocks/{pin_id}/{block_id})."""

from dataclasses import dataclass
from typing import Any

from pindown.domain.enums import BlockType


@dataclass(frozen=True)
class Block:
    id: str
    name: str
    type: BlockType
    template: str
    order: int | None = None
    created_at: Any = None
    updated_at: Any = None

    @property
    def sort_key(self) -> tuple[int, str]:
        """Ascending order with missing order as 0; ids break ties chronologically."""
        return (self.order if self.order is not None else 0, self.id)

    @classmethod
    def from_record(cls, block_id: str, raw: dict[str, Any]) -> "Block":
        order = raw.get("order")
        try:
            block_type = BlockType(raw.get("type") or BlockType.MARKDOWN.value)
        except ValueError:
            block_type = BlockType.MARKDOWN
        return cls(
            id=block_id,
            name=raw.get("name", ""),
            type=block_type,
            template=raw.get("template", ""),
            order=int(order) if isinstance(order, (int, float)) else None,
            created_at=raw.get("created_at"),
            updated_at=raw.get("updated_at"),
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "template": self.template,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if self.order is not None:
            record["order"] = self.order
        return record


@dataclass(frozen=True)
class BlockCreate:
    name: str
    type: BlockType
    template: str
    order: int | None = None


@dataclass(frozen=True)
class BlockUpdate:
    """Partial block update; None means leave unchanged."""

    name: str | None = None
    type: BlockType | None = None
    template: str | None = None
    order: int | None = None

    def to_patch(self) -> dict[str, Any]:
        patch: dict[str, Any] = {}
        if self.name is not None:
            patch["name"] = self.name
        if self.type is not None:
            patch["type"] = self.type.value
        if self.template is not None:
            patch["template"] = self.template
        if self.order is not None:
            patch["order"] = self.order
        return patch
