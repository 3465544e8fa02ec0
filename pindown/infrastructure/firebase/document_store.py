"""Document store facade over the Realtime Database REST client.

Repositories talk to this object only. It encodes values, exposes the
multi-path update and ETag primitives, and turns transport failures into
DocumentStoreException so callers see one error type.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx
from google.auth.exceptions import GoogleAuthError

from pindown.application.dtos.store import VersionedValue
from pindown.domain.exceptions import DocumentStoreException
from pindown.infrastructure.firebase._rest_client import (
    PreconditionFailedError,
    RealtimeDatabaseRESTClient,
)
from pindown.infrastructure.firebase._rest_encoding import (
    SERVER_TIMESTAMP,
    encode_value,
)
from pindown.shared.utils.generators import generate_push_id

logger = logging.getLogger(__name__)

_STORE_ERRORS = (httpx.HTTPError, GoogleAuthError, json.JSONDecodeError)


def _reason(exc: Exception) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}"
    return f"{type(exc).__name__}: {exc}"


class DocumentStore:
    """Async path-addressed store (implements IDocumentStore)."""

    def __init__(
        self,
        client: RealtimeDatabaseRESTClient,
        push_id: Callable[[], str] = generate_push_id,
    ) -> None:
        self._client = client
        self._push_id = push_id

    def push_key(self) -> str:
        return self._push_id()

    def server_timestamp(self) -> dict[str, str]:
        return dict(SERVER_TIMESTAMP)

    async def get(self, path: str) -> Any:
        try:
            return await self._client.reference(path).get()
        except _STORE_ERRORS as e:
            raise self._wrap("get", path, e) from e

    async def get_with_etag(self, path: str) -> VersionedValue:
        try:
            value, etag = await self._client.reference(path).get_with_etag()
        except _STORE_ERRORS as e:
            raise self._wrap("get_with_etag", path, e) from e
        if not etag:
            raise DocumentStoreException("get_with_etag", path, "missing ETag header")
        return VersionedValue(value=value, etag=etag)

    async def set(self, path: str, value: Any) -> None:
        try:
            await self._client.reference(path).set(encode_value(value))
        except _STORE_ERRORS as e:
            raise self._wrap("set", path, e) from e

    async def set_if_match(self, path: str, value: Any, etag: str) -> bool:
        try:
            await self._client.reference(path).set_if_match(encode_value(value), etag)
        except PreconditionFailedError:
            logger.debug("Conditional write lost at %s", path)
            return False
        except _STORE_ERRORS as e:
            raise self._wrap("set_if_match", path, e) from e
        return True

    async def update(self, updates: dict[str, Any]) -> None:
        """Apply all paths in one root PATCH; the database applies it atomically."""
        if not updates:
            return
        body = {path.strip("/"): encode_value(v) for path, v in updates.items()}
        try:
            await self._client.reference("").update(body)
        except _STORE_ERRORS as e:
            raise self._wrap("update", ",".join(sorted(body)), e) from e

    async def delete(self, path: str) -> None:
        try:
            await self._client.reference(path).delete()
        except _STORE_ERRORS as e:
            raise self._wrap("delete", path, e) from e

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _wrap(operation: str, path: str, exc: Exception) -> DocumentStoreException:
        reason = _reason(exc)
        logger.error("Document store %s failed at %s: %s", operation, path, reason)
        return DocumentStoreException(operation, path, reason)
