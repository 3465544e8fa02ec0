"""DTOs for user profiles (records under users/{uid}, camelCase keys)."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class User:
    uid: str
    email: str
    display_name: str | None = None
    photo_url: str | None = None
    email_verified: bool = False
    created_at: Any = None
    updated_at: Any = None
    last_login_at: Any = None

    @classmethod
    def from_record(cls, uid: str, raw: dict[str, Any]) -> "User":
        return cls(
            uid=raw.get("uid") or uid,
            email=raw.get("email", ""),
            display_name=raw.get("displayName"),
            photo_url=raw.get("photoURL"),
            email_verified=bool(raw.get("emailVerified", False)),
            created_at=raw.get("createdAt"),
            updated_at=raw.get("updatedAt"),
            last_login_at=raw.get("lastLoginAt"),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "email": self.email,
            "displayName": self.display_name,
            "photoURL": self.photo_url,
            "emailVerified": self.email_verified,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "lastLoginAt": self.last_login_at,
        }


@dataclass(frozen=True)
class UserUpsert:
    uid: str
    email: str
    display_name: str | None = None
    photo_url: str | None = None
    email_verified: bool = False
