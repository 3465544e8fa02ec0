"""Realtime Database pinboard repository (implements IPinboardRepository).

A pinboard lives at pin_boards/{id} with an owner index flag at
user_pinboards/{owner}/{id}. The pins list is mutated with an ETag
compare-and-swap loop so concurrent add/remove calls never drop each
other's changes. Pin ids are validated as store keys whenever they are
written.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from pindown.application.dtos.pinboard import Pinboard, PinboardCreate, PinboardUpdate
from pindown.application.interfaces.services import IDocumentStore, IIdGenerator
from pindown.domain.exceptions import ResourceNotFoundException
from pindown.infrastructure.firebase import paths
from pindown.infrastructure.firebase.repositories._base import FirebaseRepository
from pindown.shared.utils.records import dedupe

logger = logging.getLogger(__name__)

# Returns the new pins list, or None when nothing needs to change.
PinsMutation = Callable[[list[str]], list[str] | None]


class FirebasePinboardRepository(FirebaseRepository):
    def __init__(
        self,
        store: IDocumentStore,
        ids: IIdGenerator,
        max_cas_retries: int = 5,
    ) -> None:
        super().__init__(store, max_cas_retries)
        self._ids = ids

    async def create_pinboard(self, data: PinboardCreate) -> Pinboard:
        """Write record and owner index flag in one multi-path update."""
        _validate_pin_ids(data.pins)
        pinboard_id = self._ids.pinboard_id()
        now = self._now()
        pinboard = Pinboard(
            id=pinboard_id,
            user_id=data.user_id,
            name=data.name,
            description=data.description,
            pins=tuple(dedupe(list(data.pins))),
            tags=tuple(data.tags),
            is_public=data.is_public,
            created_at=now,
            updated_at=now,
        )
        await self._store.update(
            {
                paths.pinboard_path(pinboard_id): pinboard.to_record(),
                paths.user_pinboard_path(data.user_id, pinboard_id): True,
            }
        )
        logger.info("Created pinboard %s for user %s", pinboard_id, data.user_id)
        return await self._reload(pinboard_id)

    async def get_pinboard(self, pinboard_id: str) -> Pinboard | None:
        """Return pinboard with pins/tags normalized to lists and pins deduplicated."""
        raw = await self._store.get(paths.pinboard_path(pinboard_id))
        if not isinstance(raw, dict):
            return None
        return Pinboard.from_record(pinboard_id, raw)

    async def get_user_pinboards(self, user_id: str) -> list[Pinboard]:
        index = await self._store.get(paths.user_pinboards_path(user_id))
        if not isinstance(index, dict) or not index:
            return []
        boards = await asyncio.gather(*(self.get_pinboard(bid) for bid in sorted(index)))
        return [b for b in boards if b is not None and b.user_id == user_id]

    async def update_pinboard(self, pinboard: Pinboard, data: PinboardUpdate) -> Pinboard:
        """Apply a partial update conditionally. The owner is never changed."""
        if data.pins is not None:
            _validate_pin_ids(data.pins)
        patch = data.to_patch()
        patch["updated_at"] = self._now()

        def apply(record: dict[str, Any]) -> dict[str, Any]:
            record.update(patch)
            return record

        await self._compare_and_set(
            paths.pinboard_path(pinboard.id), apply, "pinboard", pinboard.id
        )
        logger.info("Updated pinboard %s", pinboard.id)
        return await self._reload(pinboard.id)

    async def delete_pinboard(self, pinboard: Pinboard) -> None:
        """Remove record and owner index flag together."""
        await self._store.update(
            {
                paths.pinboard_path(pinboard.id): None,
                paths.user_pinboard_path(pinboard.user_id, pinboard.id): None,
            }
        )
        logger.info("Deleted pinboard %s of user %s", pinboard.id, pinboard.user_id)

    async def add_pin_to_pinboard(self, pinboard_id: str, pin_id: str) -> Pinboard:
        """Append pin_id unless already present."""
        paths.validate_key(pin_id, "pin_id")

        def add(pins: list[str]) -> list[str] | None:
            if pin_id in pins:
                return None
            return [*pins, pin_id]

        return await self._mutate_pins(pinboard_id, add)

    async def remove_pin_from_pinboard(self, pinboard_id: str, pin_id: str) -> Pinboard:
        """Remove pin_id if present."""

        def remove(pins: list[str]) -> list[str] | None:
            if pin_id not in pins:
                return None
            return [p for p in pins if p != pin_id]

        return await self._mutate_pins(pinboard_id, remove)

    async def _mutate_pins(self, pinboard_id: str, mutate: PinsMutation) -> Pinboard:
        """Read with ETag, apply mutate, write only if unchanged; retry on conflict.

        Raises:
            ResourceNotFoundException: If the pinboard does not exist.
            ConcurrencyConflictException: If every attempt lost to another writer.
        """
        now = self._now()

        def apply(record: dict[str, Any]) -> dict[str, Any] | None:
            board = Pinboard.from_record(pinboard_id, record)
            new_pins = mutate(list(board.pins))
            if new_pins is None:
                return None
            record["pins"] = new_pins
            record["updated_at"] = now
            return record

        await self._compare_and_set(
            paths.pinboard_path(pinboard_id), apply, "pinboard", pinboard_id
        )
        return await self._reload(pinboard_id)

    async def _reload(self, pinboard_id: str) -> Pinboard:
        board = await self.get_pinboard(pinboard_id)
        if board is None:
            raise ResourceNotFoundException("pinboard", pinboard_id)
        return board


def _validate_pin_ids(pin_ids: tuple[str, ...]) -> None:
    for pin_id in pin_ids:
        paths.validate_key(pin_id, "pins")
