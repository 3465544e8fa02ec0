"""Realtime Database dataset repository (implements IDatasetRepository).

JSON datasets are parsed before anything is written; a parse failure raises
ValidationException and leaves the store untouched. Creates re-check the
parent pin after writing; updates are conditional on the dataset still
existing.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from pindown.application.dtos.dataset import (
    Dataset,
    DatasetCreate,
    DatasetMetadata,
    DatasetUpdate,
)
from pindown.application.interfaces.services import IDocumentStore, IIdGenerator
from pindown.domain.exceptions import ResourceNotFoundException
from pindown.domain.value_objects import parse_dataset_payload
from pindown.infrastructure.firebase import paths
from pindown.infrastructure.firebase.repositories._base import FirebaseRepository

logger = logging.getLogger(__name__)


class FirebaseDatasetRepository(FirebaseRepository):
    def __init__(
        self, store: IDocumentStore, ids: IIdGenerator, max_cas_retries: int = 5
    ) -> None:
        super().__init__(store, max_cas_retries)
        self._ids = ids

    async def create_dataset(self, pin_id: str, data: DatasetCreate) -> Dataset:
        payload = parse_dataset_payload(data.type, data.data)
        await self._require_pin(pin_id)
        dataset_id = self._ids.dataset_id()
        now = self._now()
        dataset = Dataset(
            id=dataset_id,
            metadata=DatasetMetadata(
                name=data.name,
                type=data.type,
                dataset_type=data.dataset_type,
                description=data.description,
                created_by=data.created_by,
                created_at=now,
                updated_at=now,
                status=data.status,
            ),
            data=payload,
            viewers=(data.created_by,),
            editors=(data.created_by,),
        )
        path = paths.dataset_path(pin_id, dataset_id)
        await self._store.set(path, dataset.to_record())
        await self._confirm_parent_pin(pin_id, path, "dataset", dataset_id)
        logger.info("Created dataset %s for pin %s", dataset_id, pin_id)
        return await self._reload(pin_id, dataset_id)

    async def get_pin_datasets(self, pin_id: str) -> list[Dataset]:
        await self._require_pin(pin_id)
        raw = await self._store.get(paths.pin_datasets_path(pin_id))
        if not isinstance(raw, dict):
            return []
        return [
            Dataset.from_record(dataset_id, value)
            for dataset_id, value in sorted(raw.items())
            if isinstance(value, dict)
        ]

    async def get_dataset(self, pin_id: str, dataset_id: str) -> Dataset | None:
        await self._require_pin(pin_id)
        raw = await self._store.get(paths.dataset_path(pin_id, dataset_id))
        if not isinstance(raw, dict):
            return None
        return Dataset.from_record(dataset_id, raw)

    async def update_dataset(
        self, pin_id: str, dataset_id: str, data: DatasetUpdate
    ) -> Dataset:
        """Merge metadata; when data is given, re-parse with the new or current type.

        The write is conditional on the dataset being unchanged since it was
        read, so a concurrent delete is reported instead of undone.
        """
        current = await self.get_dataset(pin_id, dataset_id)
        if current is None:
            raise ResourceNotFoundException("dataset", dataset_id)
        fmt = data.type or current.metadata.type
        payload = None
        if data.data is not None:
            payload = parse_dataset_payload(fmt, data.data)
        now = self._now()

        def apply(record: dict[str, Any]) -> dict[str, Any]:
            existing = Dataset.from_record(dataset_id, record)
            metadata = replace(
                existing.metadata,
                name=data.name if data.name else existing.metadata.name,
                type=fmt,
                dataset_type=data.dataset_type or existing.metadata.dataset_type,
                description=(
                    data.description
                    if data.description is not None
                    else existing.metadata.description
                ),
                updated_at=now,
            )
            updated = replace(
                existing,
                metadata=metadata,
                data=payload if payload is not None else existing.data,
            )
            return updated.to_record()

        await self._compare_and_set(
            paths.dataset_path(pin_id, dataset_id), apply, "dataset", dataset_id
        )
        logger.info("Updated dataset %s for pin %s", dataset_id, pin_id)
        return await self._reload(pin_id, dataset_id)

    async def delete_dataset(self, pin_id: str, dataset_id: str) -> None:
        if await self.get_dataset(pin_id, dataset_id) is None:
            raise ResourceNotFoundException("dataset", dataset_id)
        await self._store.delete(paths.dataset_path(pin_id, dataset_id))
        logger.info("Deleted dataset %s for pin %s", dataset_id, pin_id)

    async def _reload(self, pin_id: str, dataset_id: str) -> Dataset:
        raw = await self._store.get(paths.dataset_path(pin_id, dataset_id))
        if not isinstance(raw, dict):
            raise ResourceNotFoundException("dataset", dataset_id)
        return Dataset.from_record(dataset_id, raw)
