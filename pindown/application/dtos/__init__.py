"""Application DTOs (no store dependency)."""

from pindown.application.dtos.api_key import ApiKey
from pindown.application.dtos.auth import TOKEN_PERMISSIONS, Credentials, Principal
from pindown.application.dtos.block import Block, BlockCreate, BlockUpdate
from pindown.application.dtos.dataset import (
    Dataset,
    DatasetCreate,
    DatasetMetadata,
    DatasetUpdate,
)
from pindown.application.dtos.pin import (
    Pin,
    PinCreate,
    PinMetadata,
    PinMetadataUpdate,
    PinPermissions,
)
from pindown.application.dtos.pinboard import Pinboard, PinboardCreate, PinboardUpdate
from pindown.application.dtos.store import VersionedValue
from pindown.application.dtos.user import User, UserUpsert

__all__ = [
    "ApiKey",
    "Block",
    "BlockCreate",
    "BlockUpdate",
    "Credentials",
    "Dataset",
    "DatasetCreate",
    "DatasetMetadata",
    "DatasetUpdate",
    "Pin",
    "PinCreate",
    "PinMetadata",
    "PinMetadataUpdate",
    "PinPermissions",
    "Pinboard",
    "PinboardCreate",
    "PinboardUpdate",
    "Principal",
    "TOKEN_PERMISSIONS",
    "User",
    "UserUpsert",
    "VersionedValue",
]
