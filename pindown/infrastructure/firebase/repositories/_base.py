"""Shared helpers for Realtime Database repositories.

Updates to an existing record go through compare_and_set: read with ETag,
apply a mutation, write only if the record is unchanged. A record deleted in
between is reported as missing instead of being recreated by the write.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any

from pindown.application.interfaces.services import IDocumentStore
from pindown.domain.exceptions import (
    ConcurrencyConflictException,
    ResourceNotFoundException,
)
from pindown.infrastructure.firebase import paths

logger = logging.getLogger(__name__)

# Returns the record to write, or None when nothing needs to change.
RecordMutation = Callable[[dict[str, Any]], dict[str, Any] | None]


class FirebaseRepository:
    """Base for repositories: holds the store, parent-pin checks and CAS writes."""

    def __init__(self, store: IDocumentStore, max_cas_retries: int = 5) -> None:
        self._store = store
        self._max_cas_retries = max_cas_retries

    def _now(self) -> dict[str, str]:
        return self._store.server_timestamp()

    async def _require_pin(self, pin_id: str) -> str:
        """Return the owner of pin_id; raise ResourceNotFoundException if absent."""
        owner = await self._store.get(f"{paths.pin_path(pin_id)}/user_id")
        if not owner:
            raise ResourceNotFoundException("pin", pin_id)
        return owner

    async def _compare_and_set(
        self,
        path: str,
        mutate: RecordMutation,
        resource_type: str,
        resource_id: str,
    ) -> dict[str, Any]:
        """Apply mutate to the record at path with a conditional write.

        Returns the record as written (or as read, when mutate returned None).

        Raises:
            ResourceNotFoundException: If no record exists at path.
            ConcurrencyConflictException: If every attempt lost to another writer.
        """
        for attempt in range(1, self._max_cas_retries + 1):
            current = await self._store.get_with_etag(path)
            if not isinstance(current.value, dict):
                raise ResourceNotFoundException(resource_type, resource_id)
            record = mutate(copy.deepcopy(current.value))
            if record is None:
                return current.value
            if await self._store.set_if_match(path, record, current.etag):
                logger.debug(
                    "Conditional write of %s %s succeeded on attempt %d",
                    resource_type,
                    resource_id,
                    attempt,
                )
                return record
            logger.info("%s %s changed concurrently; retrying", resource_type, resource_id)
        raise ConcurrencyConflictException(
            resource_type, resource_id, self._max_cas_retries
        )

    async def _confirm_parent_pin(
        self, pin_id: str, path: str, resource_type: str, resource_id: str
    ) -> None:
        """Check the parent pin still exists after writing a child at path.

        A pin deleted before the child write landed would leave an orphan;
        remove it and report the pin as missing. A delete that lands after
        this check removes the child itself.
        """
        owner = await self._store.get(f"{paths.pin_path(pin_id)}/user_id")
        if owner:
            return
        await self._store.delete(path)
        logger.info(
            "Pin %s was deleted while writing %s %s; removed the orphan",
            pin_id,
            resource_type,
            resource_id,
        )
        raise ResourceNotFoundException("pin", pin_id)
