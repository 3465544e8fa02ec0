"""DTOs for document store reads."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class VersionedValue:
    """Value read together with its ETag, for a later conditional write."""

    value: Any
    etag: str
