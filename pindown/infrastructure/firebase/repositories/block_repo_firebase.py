"""Realtime Database block repository (implements IBlockRepository).

Blocks live under pin_blocks/{pin_id}. Every operation checks the parent pin
first; a create re-checks it after writing and removes the block if the pin
was deleted meanwhile, and updates are conditional on the block still
existing.
"""

from __future__ import annotations

import logging
from typing import Any

from pindown.application.dtos.block import Block, BlockCreate, BlockUpdate
from pindown.application.interfaces.services import IDocumentStore, IIdGenerator
from pindown.domain.exceptions import ResourceNotFoundException
from pindown.infrastructure.firebase import paths
from pindown.infrastructure.firebase.repositories._base import FirebaseRepository

logger = logging.getLogger(__name__)


class FirebaseBlockRepository(FirebaseRepository):
    def __init__(
        self, store: IDocumentStore, ids: IIdGenerator, max_cas_retries: int = 5
    ) -> None:
        super().__init__(store, max_cas_retries)
        self._ids = ids

    async def create_block(self, pin_id: str, data: BlockCreate) -> Block:
        await self._require_pin(pin_id)
        block_id = self._ids.block_id()
        now = self._now()
        record: dict[str, Any] = {
            "id": block_id,
            "name": data.name,
            "type": data.type.value,
            "template": data.template,
            "created_at": now,
            "updated_at": now,
        }
        if data.order is not None:
            record["order"] = data.order
        path = paths.block_path(pin_id, block_id)
        await self._store.set(path, record)
        await self._confirm_parent_pin(pin_id, path, "block", block_id)
        logger.info("Created block %s for pin %s", block_id, pin_id)
        return await self._reload(pin_id, block_id)

    async def get_pin_blocks(self, pin_id: str) -> list[Block]:
        """Return blocks sorted by order (missing = 0), ties by id (creation order)."""
        await self._require_pin(pin_id)
        raw = await self._store.get(paths.pin_blocks_path(pin_id))
        if not isinstance(raw, dict):
            return []
        blocks = [
            Block.from_record(block_id, value)
            for block_id, value in raw.items()
            if isinstance(value, dict)
        ]
        return sorted(blocks, key=lambda b: b.sort_key)

    async def get_block(self, pin_id: str, block_id: str) -> Block | None:
        await self._require_pin(pin_id)
        raw = await self._store.get(paths.block_path(pin_id, block_id))
        if not isinstance(raw, dict):
            return None
        return Block.from_record(block_id, raw)

    async def update_block(self, pin_id: str, block_id: str, data: BlockUpdate) -> Block:
        """Merge the given fields into the block and refresh updated_at."""
        await self._require_pin(pin_id)
        patch = data.to_patch()
        patch["updated_at"] = self._now()

        def apply(record: dict[str, Any]) -> dict[str, Any]:
            record.update(patch)
            return record

        await self._compare_and_set(
            paths.block_path(pin_id, block_id), apply, "block", block_id
        )
        logger.info("Updated block %s for pin %s", block_id, pin_id)
        return await self._reload(pin_id, block_id)

    async def delete_block(self, pin_id: str, block_id: str) -> None:
        if await self.get_block(pin_id, block_id) is None:
            raise ResourceNotFoundException("block", block_id)
        await self._store.delete(paths.block_path(pin_id, block_id))
        logger.info("Deleted block %s for pin %s", block_id, pin_id)

    async def _reload(self, pin_id: str, block_id: str) -> Block:
        raw = await self._store.get(paths.block_path(pin_id, block_id))
        if not isinstance(raw, dict):
            raise ResourceNotFoundException("block", block_id)
        return Block.from_record(block_id, raw)
