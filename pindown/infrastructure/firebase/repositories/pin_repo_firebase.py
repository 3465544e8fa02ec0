"""Realtime Database pin repository (implements IPinRepository).

A pin lives at pins/{id} with an owner index entry at user_pins/{owner}/{id}.
Create and delete touch both in one multi-path update. Updates write the
pin record conditionally (ETag) and then refresh the index entry only if
it still exists, so a concurrent delete is never undone.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pindown.application.dtos.pin import (
    Pin,
    PinCreate,
    PinMetadata,
    PinMetadataUpdate,
    PinPermissions,
)
from pindown.application.interfaces.services import IDocumentStore, IIdGenerator
from pindown.domain.enums import DataType
from pindown.domain.exceptions import ResourceNotFoundException
from pindown.domain.value_objects import extract_workflow_sources, validate_keys
from pindown.infrastructure.firebase import paths
from pindown.infrastructure.firebase.repositories._base import FirebaseRepository

logger = logging.getLogger(__name__)


class FirebasePinRepository(FirebaseRepository):
    def __init__(
        self, store: IDocumentStore, ids: IIdGenerator, max_cas_retries: int = 5
    ) -> None:
        super().__init__(store, max_cas_retries)
        self._ids = ids

    async def create_pin(self, data: PinCreate) -> Pin:
        """Create pin with empty content and its owner index entry (one update)."""
        validate_keys(data.extra_metadata, "metadata")
        pin_id = self._ids.pin_id()
        now = self._now()
        metadata = PinMetadata(
            title=data.title or "Untitled Pin",
            description=data.description,
            tags=tuple(data.tags),
            workflow_sources=(),
            created_at=now,
            is_public=data.is_public,
            extra=dict(data.extra_metadata),
        )
        pin = Pin(
            id=pin_id,
            user_id=data.user_id,
            data_type=data.data_type,
            content="",
            metadata=metadata,
            permissions=PinPermissions(data.is_public, data.user_id),
            wid=None,
        )
        await self._store.update(
            {
                paths.pin_path(pin_id): pin.to_record(),
                paths.user_pin_path(data.user_id, pin_id): {
                    "title": metadata.title,
                    "workflow_sources": [],
                    "created_at": now,
                    "is_active": True,
                },
            }
        )
        logger.info("Created pin %s for user %s", pin_id, data.user_id)
        return await self._reload(pin_id)

    async def get_pin(self, pin_id: str) -> Pin | None:
        """Return pin by id, or None."""
        raw = await self._store.get(paths.pin_path(pin_id))
        if not isinstance(raw, dict):
            return None
        return Pin.from_record(pin_id, raw)

    async def get_user_pins(self, user_id: str) -> list[Pin]:
        """Return the user's pins in index order (push keys sort chronologically).

        Index entries whose pin is missing or owned by someone else are skipped.
        """
        index = await self._store.get(paths.user_pins_path(user_id))
        if not isinstance(index, dict) or not index:
            return []
        pin_ids = sorted(index)
        pins = await asyncio.gather(*(self.get_pin(pid) for pid in pin_ids))
        return [p for p in pins if p is not None and p.user_id == user_id]

    async def update_pin(self, pin: Pin, patch: PinMetadataUpdate) -> Pin:
        """Merge metadata fields; mirror is_public into permissions; refresh index title.

        The pin record is written conditionally, so a pin deleted since it was
        loaded is reported as missing rather than recreated.
        """
        now = self._now()

        def apply(record: dict[str, Any]) -> dict[str, Any]:
            metadata = _metadata_of(record)
            metadata["updated_at"] = now
            if patch.title is not None:
                metadata["title"] = patch.title
            if patch.description is not None:
                metadata["description"] = patch.description
            if patch.tags is not None:
                metadata["tags"] = list(patch.tags)
            if patch.is_public is not None:
                _apply_visibility(record, metadata, patch.is_public)
            return record

        await self._compare_and_set(paths.pin_path(pin.id), apply, "pin", pin.id)
        if patch.title is not None:
            await self._refresh_index(pin, {"title": patch.title})
        logger.info("Updated pin %s", pin.id)
        return await self._reload(pin.id)

    async def set_visibility(self, pin: Pin, is_public: bool) -> Pin:
        """Publish (True) or unpublish (False) a pin."""
        now = self._now()

        def apply(record: dict[str, Any]) -> dict[str, Any]:
            metadata = _metadata_of(record)
            metadata["updated_at"] = now
            _apply_visibility(record, metadata, is_public)
            return record

        await self._compare_and_set(paths.pin_path(pin.id), apply, "pin", pin.id)
        logger.info("Pin %s is now %s", pin.id, "public" if is_public else "private")
        return await self._reload(pin.id)

    async def update_content(
        self,
        pin: Pin,
        content: str,
        wid: str | None = None,
        data_type: DataType | None = None,
    ) -> Pin:
        """Write content and recompute workflow_sources from {{wd_x.…}} references."""
        sources = extract_workflow_sources(content)
        now = self._now()

        def apply(record: dict[str, Any]) -> dict[str, Any]:
            metadata = _metadata_of(record)
            metadata["workflow_sources"] = sources
            metadata["updated_at"] = now
            record["content"] = content
            if wid is not None:
                record["wid"] = wid
            if data_type is not None:
                record["data_type"] = data_type.value
            return record

        await self._compare_and_set(paths.pin_path(pin.id), apply, "pin", pin.id)
        await self._refresh_index(pin, {"workflow_sources": sources})
        logger.info("Updated content of pin %s (%d workflow sources)", pin.id, len(sources))
        return await self._reload(pin.id)

    async def delete_pin(self, pin: Pin) -> None:
        """Delete pin, owner index entry, blocks, datasets and workflow data in one update.

        The index entry is removed under the pin's owner, not the caller.
        """
        await self._store.update(
            {
                paths.pin_path(pin.id): None,
                paths.user_pin_path(pin.user_id, pin.id): None,
                paths.pin_blocks_path(pin.id): None,
                paths.pin_datasets_path(pin.id): None,
                paths.pin_workflow_data_path(pin.id): None,
            }
        )
        logger.info("Deleted pin %s of user %s", pin.id, pin.user_id)


    async def _refresh_index(self, pin: Pin, fields: dict[str, Any]) -> None:
        """Copy fields into the owner index entry if it still exists."""

        def apply(entry: dict[str, Any]) -> dict[str, Any]:
            entry.update(fields)
            return entry

        try:
            await self._compare_and_set(
                paths.user_pin_path(pin.user_id, pin.id), apply, "pin", pin.id
            )
        except ResourceNotFoundException:
            logger.info("Index entry for pin %s is gone; not refreshed", pin.id)

    async def _reload(self, pin_id: str) -> Pin:
        pin = await self.get_pin(pin_id)
        if pin is None:
            # Deleted concurrently right after our write.
            raise ResourceNotFoundException("pin", pin_id)
        return pin


def _metadata_of(record: dict[str, Any]) -> dict[str, Any]:
    metadata = record.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}
    record["metadata"] = metadata
    return metadata


def _apply_visibility(
    record: dict[str, Any], metadata: dict[str, Any], is_public: bool
) -> None:
    """Write visibility to permissions (canonical) and metadata (legacy readers)."""
    metadata["is_public"] = is_public
    permissions = record.get("permissions")
    created_by = permissions.get("created_by") if isinstance(permissions, dict) else None
    record["permissions"] = PinPermissions(
        is_public, created_by or record.get("user_id", "")
    ).to_record()
