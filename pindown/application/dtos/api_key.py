"""DTOs for API keys (records under api_keys/{user_id}/{key_id})."""

from dataclasses import dataclass
from typing import Any

from pindown.shared.utils.records import decode_list

DEFAULT_API_KEY_PERMISSIONS: tuple[str, ...] = ("workflow_data:write",)


@dataclass(frozen=True)
class ApiKey:
    """Stored API key. Only the salted hash is kept, never the plaintext."""

    id: str
    user_id: str
    name: str
    key_hash: str
    permissions: tuple[str, ...] = DEFAULT_API_KEY_PERMISSIONS
    is_active: bool = True
    created_at: Any = None
    usage_count: int = 0

    @classmethod
    def from_record(cls, user_id: str, key_id: str, raw: dict[str, Any]) -> "ApiKey":
        return cls(
            id=key_id,
            user_id=user_id,
            name=raw.get("name", ""),
            key_hash=raw.get("key_hash", ""),
            permissions=tuple(decode_list(raw.get("permissions"))),
            is_active=bool(raw.get("is_active", False)),
            created_at=raw.get("created_at"),
            usage_count=int(raw.get("usage_count") or 0),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "permissions": list(self.permissions),
            "key_hash": self.key_hash,
            "is_active": self.is_active,
            "created_at": self.created_at,
            "usage_count": self.usage_count,
        }

    def to_public(self) -> dict[str, Any]:
        """Listing view: no hash."""
        return {
            "id": self.id,
            "name": self.name,
            "permissions": list(self.permissions),
            "is_active": self.is_active,
            "created_at": self.created_at,
            "usage_count": self.usage_count,
        }
