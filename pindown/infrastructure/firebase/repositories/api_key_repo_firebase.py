"""Realtime Database API key repository (implements IApiKeyRepository).

Keys are stored as api_keys/{user_id}/{key_id} with only the salted hash.
Lookup by hash scans every user's keys; this matches how keys are
presented (no user id accompanies the key).
"""

from __future__ import annotations

import hmac
import logging

from pindown.application.dtos.api_key import DEFAULT_API_KEY_PERMISSIONS, ApiKey
from pindown.application.interfaces.services import IDocumentStore, IIdGenerator
from pindown.application.services.api_key_hasher import ApiKeyHasher
from pindown.domain.exceptions import ResourceNotFoundException
from pindown.infrastructure.firebase import paths
from pindown.infrastructure.firebase.repositories._base import FirebaseRepository

logger = logging.getLogger(__name__)


class FirebaseApiKeyRepository(FirebaseRepository):
    def __init__(
        self, store: IDocumentStore, ids: IIdGenerator, hasher: ApiKeyHasher
    ) -> None:
        super().__init__(store)
        self._ids = ids
        self._hasher = hasher

    async def create_api_key(
        self, user_id: str, name: str, permissions: list[str] | None = None
    ) -> tuple[ApiKey, str]:
        """Create a key; return the stored record and the plaintext (shown once)."""
        key_id = self._ids.api_key_id()
        plaintext = self._hasher.generate_key()
        key = ApiKey(
            id=key_id,
            user_id=user_id,
            name=name,
            key_hash=self._hasher.hash(plaintext),
            permissions=tuple(permissions) if permissions else DEFAULT_API_KEY_PERMISSIONS,
            is_active=True,
            created_at=self._now(),
            usage_count=0,
        )
        await self._store.set(paths.api_key_path(user_id, key_id), key.to_record())
        logger.info("Created API key %s for user %s", key_id, user_id)
        stored = await self.get_api_key(user_id, key_id)
        return (stored or key), plaintext

    async def list_api_keys(self, user_id: str) -> list[ApiKey]:
        raw = await self._store.get(paths.user_api_keys_path(user_id))
        if not isinstance(raw, dict):
            return []
        return [
            ApiKey.from_record(user_id, key_id, value)
            for key_id, value in sorted(raw.items())
            if isinstance(value, dict)
        ]

    async def get_api_key(self, user_id: str, key_id: str) -> ApiKey | None:
        raw = await self._store.get(paths.api_key_path(user_id, key_id))
        if not isinstance(raw, dict):
            return None
        return ApiKey.from_record(user_id, key_id, raw)

    async def revoke_api_key(self, user_id: str, key_id: str) -> None:
        """Delete the key record."""
        if await self.get_api_key(user_id, key_id) is None:
            raise ResourceNotFoundException("api_key", key_id)
        await self._store.delete(paths.api_key_path(user_id, key_id))
        logger.info("Revoked API key %s for user %s", key_id, user_id)

    async def find_active_by_hash(self, key_hash: str) -> ApiKey | None:
        """Return the active key whose hash matches, or None."""
        raw = await self._store.get(paths.NODE_API_KEYS)
        if not isinstance(raw, dict):
            return None
        for user_id, keys in raw.items():
            if not isinstance(keys, dict):
                continue
            for key_id, value in keys.items():
                if not isinstance(value, dict) or not value.get("is_active"):
                    continue
                if hmac.compare_digest(str(value.get("key_hash", "")), key_hash):
                    return ApiKey.from_record(user_id, key_id, value)
        return None
