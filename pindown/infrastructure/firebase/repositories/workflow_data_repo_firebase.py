"""Realtime Database workflow data channel (implements IWorkflowDataRepository).

Workflow runs push payloads to workflow_data/{pin_id}/{workflow_id}. A put
replaces the whole node (last writer wins) and stamps last_update with the
server clock; readers subscribed to the node see each replacement. A put
that lands after its pin was deleted is removed again and reported as a
missing pin.
"""

from __future__ import annotations

import logging
from typing import Any

from pindown.domain.value_objects import validate_keys
from pindown.infrastructure.firebase import paths
from pindown.infrastructure.firebase.repositories._base import FirebaseRepository

logger = logging.getLogger(__name__)


class FirebaseWorkflowDataRepository(FirebaseRepository):
    async def put(self, pin_id: str, workflow_id: str, payload: dict[str, Any]) -> None:
        validate_keys(payload, "data")
        node = {**payload, "last_update": self._now()}
        path = paths.workflow_data_path(pin_id, workflow_id)
        await self._store.update({path: node})
        await self._confirm_parent_pin(pin_id, path, "workflow_data", workflow_id)
        logger.info("Updated workflow data %s/%s", pin_id, workflow_id)

    async def get(self, pin_id: str, workflow_id: str) -> dict[str, Any] | None:
        raw = await self._store.get(paths.workflow_data_path(pin_id, workflow_id))
        return raw if isinstance(raw, dict) else None

    async def get_all(self, pin_id: str) -> dict[str, Any]:
        raw = await self._store.get(paths.pin_workflow_data_path(pin_id))
        return raw if isinstance(raw, dict) else {}
