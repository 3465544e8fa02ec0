"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from pindown.application.dtos.api_key import ApiKey
    from pindown.application.dtos.block import Block, BlockCreate, BlockUpdate
    from pindown.application.dtos.dataset import Dataset, DatasetCreate, DatasetUpdate
    from pindown.application.dtos.pin import Pin, PinCreate, PinMetadataUpdate
    from pindown.application.dtos.pinboard import (
        Pinboard,
        PinboardCreate,
        PinboardUpdate,
    )
    from pindown.application.dtos.user import User, UserUpsert
    from pindown.domain.enums import DataType


class IPinRepository(Protocol):
    """Pins plus the owner index user_pins/{user_id}."""

    async def create_pin(self, data: PinCreate) -> Pin:
        """Write pin and index entry in one multi-path update."""

    async def get_pin(self, pin_id: str) -> Pin | None:
        """Return pin or None."""

    async def get_user_pins(self, user_id: str) -> list[Pin]:
        """Return pins indexed for user (owned only), in index order."""

    async def update_pin(self, pin: Pin, patch: PinMetadataUpdate) -> Pin:
        """Merge metadata, refresh updated_at and the index title."""

    async def set_visibility(self, pin: Pin, is_public: bool) -> Pin:
        """Publish or unpublish."""

    async def update_content(
        self, pin: Pin, content: str, wid: str | None, data_type: DataType | None
    ) -> Pin:
        """Write content and recompute workflow sources."""

    async def delete_pin(self, pin: Pin) -> None:
        """Remove pin, its index entry and owned children in one update."""


class IBlockRepository(Protocol):
    async def create_block(self, pin_id: str, data: BlockCreate) -> Block: ...

    async def get_pin_blocks(self, pin_id: str) -> list[Block]: ...

    async def get_block(self, pin_id: str, block_id: str) -> Block | None: ...

    async def update_block(
        self, pin_id: str, block_id: str, data: BlockUpdate
    ) -> Block: ...

    async def delete_block(self, pin_id: str, block_id: str) -> None: ...


class IDatasetRepository(Protocol):
    async def create_dataset(self, pin_id: str, data: DatasetCreate) -> Dataset: ...

    async def get_pin_datasets(self, pin_id: str) -> list[Dataset]: ...

    async def get_dataset(self, pin_id: str, dataset_id: str) -> Dataset | None: ...

    async def update_dataset(
        self, pin_id: str, dataset_id: str, data: DatasetUpdate
    ) -> Dataset: ...

    async def delete_dataset(self, pin_id: str, dataset_id: str) -> None: ...


class IPinboardRepository(Protocol):
    """Pinboards plus the owner index user_pinboards/{user_id}."""

    async def create_pinboard(self, data: PinboardCreate) -> Pinboard: ...

    async def get_pinboard(self, pinboard_id: str) -> Pinboard | None: ...

    async def get_user_pinboards(self, user_id: str) -> list[Pinboard]: ...

    async def update_pinboard(
        self, pinboard: Pinboard, data: PinboardUpdate
    ) -> Pinboard: ...

    async def delete_pinboard(self, pinboard: Pinboard) -> None: ...

    async def add_pin_to_pinboard(self, pinboard_id: str, pin_id: str) -> Pinboard:
        """Append pin id if absent (conditional write with retry)."""

    async def remove_pin_from_pinboard(
        self, pinboard_id: str, pin_id: str
    ) -> Pinboard:
        """Remove pin id if present (conditional write with retry)."""


class IApiKeyRepository(Protocol):
    async def create_api_key(
        self, user_id: str, name: str, permissions: list[str] | None = None
    ) -> tuple[ApiKey, str]:
        """Return the stored key and the plaintext (shown once)."""

    async def list_api_keys(self, user_id: str) -> list[ApiKey]: ...

    async def get_api_key(self, user_id: str, key_id: str) -> ApiKey | None: ...

    async def revoke_api_key(self, user_id: str, key_id: str) -> None: ...

    async def find_active_by_hash(self, key_hash: str) -> ApiKey | None: ...


class IUserRepository(Protocol):
    async def upsert_user(self, data: UserUpsert) -> User: ...

    async def get_user(self, uid: str) -> User | None: ...


class IWorkflowDataRepository(Protocol):
    async def put(self, pin_id: str, workflow_id: str, payload: dict[str, Any]) -> None: ...

    async def get(self, pin_id: str, workflow_id: str) -> dict[str, Any] | None: ...

    async def get_all(self, pin_id: str) -> dict[str, Any]: ...
