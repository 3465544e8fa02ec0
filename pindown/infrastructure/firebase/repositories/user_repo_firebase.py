"""Realtime Database user profile repository (implements IUserRepository)."""

from __future__ import annotations

import logging

from pindown.application.dtos.user import User, UserUpsert
from pindown.infrastructure.firebase import paths
from pindown.infrastructure.firebase.repositories._base import FirebaseRepository

logger = logging.getLogger(__name__)


class FirebaseUserRepository(FirebaseRepository):
    async def upsert_user(self, data: UserUpsert) -> User:
        """Create or refresh a profile. createdAt is kept from the first write."""
        path = paths.user_path(data.uid)
        existing = await self._store.get(path)
        now = self._now()
        created_at = existing.get("createdAt") if isinstance(existing, dict) else None
        user = User(
            uid=data.uid,
            email=data.email,
            display_name=data.display_name,
            photo_url=data.photo_url,
            email_verified=data.email_verified,
            created_at=created_at if created_at is not None else now,
            updated_at=now,
            last_login_at=now,
        )
        await self._store.set(path, user.to_record())
        logger.info("Upserted user %s", data.uid)
        return await self.get_user(data.uid) or user

    async def get_user(self, uid: str) -> User | None:
        raw = await self._store.get(paths.user_path(uid))
        if not isinstance(raw, dict):
            return None
        return User.from_record(uid, raw)
