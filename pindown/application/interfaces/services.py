"""Service interfaces (ports) for the application layer.

Protocols for the document store, identity verification and id generation.
Infrastructure implements these; repositories and services depend on them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from pindown.application.dtos.store import VersionedValue


class IDocumentStore(Protocol):
    """Path-addressed JSON tree with multi-path updates and ETag CAS."""

    def push_key(self) -> str:
        """Return a new chronologically sortable key."""
        ...

    def server_timestamp(self) -> dict[str, str]:
        """Placeholder resolved to server time (epoch ms) on write."""
        ...

    async def get(self, path: str) -> Any:
        """Return the value at path, or None if absent."""
        ...

    async def get_with_etag(self, path: str) -> VersionedValue:
        """Return the value at path together with its ETag."""
        ...

    async def set(self, path: str, value: Any) -> None:
        """Replace the node at path."""
        ...

    async def set_if_match(self, path: str, value: Any, etag: str) -> bool:
        """Replace the node only if its ETag still matches; False on conflict."""
        ...

    async def update(self, updates: dict[str, Any]) -> None:
        """Apply {path: value} atomically at the root. None deletes."""
        ...

    async def delete(self, path: str) -> None:
        """Delete the node at path (idempotent)."""
        ...


class IdentityVerificationError(Exception):
    """Raised by an identity verifier when a bearer token cannot be verified."""


class IIdentityVerifier(Protocol):
    """Verifies a bearer ID token and returns the user id (uid)."""

    async def verify(self, token: str) -> str:
        """Return uid; raise IdentityVerificationError on any failure."""
        ...


class IIdGenerator(Protocol):
    def pin_id(self) -> str: ...

    def block_id(self) -> str: ...

    def dataset_id(self) -> str: ...

    def pinboard_id(self) -> str: ...

    def api_key_id(self) -> str: ...
