"""Thin Realtime Database REST API client (no firebase-admin).

Uses google-auth for service account tokens and the database REST protocol
(`{database_url}/{path}.json`). All HTTP calls use httpx.AsyncClient so they
do not block the event loop.
"""

from __future__ import annotations

import asyncio
from typing import Any
from urllib.parse import parse_qsl, quote

import httpx

_DATABASE_SCOPES = [
    "https://www.googleapis.com/auth/firebase.database",
    "https://www.googleapis.com/auth/userinfo.email",
]
# The emulator grants admin access to this literal bearer token.
_EMULATOR_TOKEN = "owner"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for the database."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=_DATABASE_SCOPES
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class PreconditionFailedError(Exception):
    """Raised when a conditional write returns 412 (ETag no longer matches)."""

    def __init__(self, etag: str | None, value: Any) -> None:
        super().__init__("ETag mismatch")
        self.etag = etag
        self.value = value


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: Any = None,
    *,
    access_token: str | None = None,
    params: dict[str, str] | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Perform async HTTP request to the database REST API.

    Returns the raw response so callers can read ETag headers. 412 raises
    PreconditionFailedError; other non-2xx statuses raise httpx.HTTPStatusError.
    """
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if extra_headers:
        headers.update(extra_headers)
    if method not in ("GET", "PUT", "PATCH", "DELETE"):
        raise ValueError(f"Unsupported method: {method!r}")
    resp = await client.request(
        method,
        url,
        headers=headers,
        params=params,
        json=body if method in ("PUT", "PATCH") else None,
    )
    if resp.status_code == 412:
        current = resp.json() if resp.content else None
        raise PreconditionFailedError(resp.headers.get("ETag"), current)
    resp.raise_for_status()
    return resp


class DatabaseReference:
    """Reference to a single path in the database tree."""

    def __init__(self, client: "RealtimeDatabaseRESTClient", path: str):
        self._client = client
        self._path = path.strip("/")

    @property
    def path(self) -> str:
        return self._path

    async def get(self) -> Any:
        """Fetch the value at this path; None if absent."""
        resp = await self._client._send("GET", self._path)
        return resp.json() if resp.content else None

    async def get_with_etag(self) -> tuple[Any, str | None]:
        """Fetch the value and its ETag (for a later conditional write)."""
        resp = await self._client._send(
            "GET", self._path, extra_headers={"X-Firebase-ETag": "true"}
        )
        value = resp.json() if resp.content else None
        return value, resp.headers.get("ETag")

    async def set(self, data: Any) -> None:
        """Create or overwrite the node (PUT). Writing None deletes it."""
        await self._client._send("PUT", self._path, body=data, silent=True)

    async def set_if_match(self, data: Any, etag: str) -> None:
        """Overwrite only if the node still has the given ETag.

        Raises:
            PreconditionFailedError: If another writer changed the node.
        """
        await self._client._send(
            "PUT", self._path, body=data, extra_headers={"if-match": etag}
        )

    async def update(self, data: dict[str, Any]) -> None:
        """Merge children (PATCH). Keys may be slash-separated relative paths."""
        await self._client._send("PATCH", self._path, body=data, silent=True)

    async def delete(self) -> None:
        """Delete the node. Idempotent if already missing."""
        await self._client._send("DELETE", self._path)


class RealtimeDatabaseRESTClient:
    """Lightweight Realtime Database client using the REST API."""

    def __init__(
        self,
        database_url: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        base, _, query = database_url.partition("?")
        # Emulator URLs carry the namespace as ?ns=<name>; keep it on every call.
        self._params = dict(parse_qsl(query))
        self._base = base.rstrip("/")
        self._credentials = credentials
        self._http = (
            http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        )
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        if self._credentials is None:
            return _EMULATOR_TOKEN
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def reference(self, path: str = "") -> DatabaseReference:
        return DatabaseReference(self, path)

    def url_for(self, path: str) -> str:
        path = path.strip("/")
        return f"{self._base}/{quote(path, safe='/')}.json" if path else f"{self._base}/.json"

    async def _send(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        extra_headers: dict[str, str] | None = None,
        silent: bool = False,
    ) -> httpx.Response:
        params = dict(self._params)
        if silent:
            # Skip echoing the written data back.
            params["print"] = "silent"
        return await _request_async(
            self._http,
            self.url_for(path),
            method,
            body,
            access_token=await self.get_token(),
            params=params or None,
            extra_headers=extra_headers,
        )
