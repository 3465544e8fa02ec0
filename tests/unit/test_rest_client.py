"""Realtime Database REST client and DocumentStore tests over httpx.MockTransport."""

import json

import httpx
import pytest

from pindown.domain.exceptions import DocumentStoreException
from pindown.infrastructure.firebase._rest_client import (
    PreconditionFailedError,
    RealtimeDatabaseRESTClient,
)
from pindown.infrastructure.firebase.document_store import DocumentStore

DB_URL = "http://127.0.0.1:9000/?ns=pindown-test"


class Recorder:
    """Records requests and answers with a canned response."""

    def __init__(self, status: int = 200, body=None, headers: dict | None = None) -> None:
        self.status = status
        self.body = body
        self.headers = headers or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        content = b"" if self.body is None else json.dumps(self.body).encode()
        return httpx.Response(self.status, content=content, headers=self.headers)


def _client(recorder: Recorder) -> RealtimeDatabaseRESTClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return RealtimeDatabaseRESTClient(DB_URL, None, http_client=http)


class TestRestClient:
    async def test_get_builds_json_url_with_namespace_and_emulator_token(self) -> None:
        rec = Recorder(body={"user_id": "alice"})
        value = await _client(rec).reference("pins/p1").get()
        assert value == {"user_id": "alice"}
        req = rec.requests[0]
        assert req.method == "GET"
        assert req.url.path == "/pins/p1.json"
        assert req.url.params["ns"] == "pindown-test"
        assert req.headers["Authorization"] == "Bearer owner"

    async def test_root_url(self) -> None:
        assert _client(Recorder()).url_for("") == "http://127.0.0.1:9000/.json"

    async def test_set_is_silent_put(self) -> None:
        rec = Recorder(status=204)
        await _client(rec).reference("users/alice").set({"uid": "alice"})
        req = rec.requests[0]
        assert req.method == "PUT"
        assert req.url.params["print"] == "silent"
        assert json.loads(req.content) == {"uid": "alice"}

    async def test_get_with_etag_requests_etag(self) -> None:
        rec = Recorder(body={"pins": ["p1"]}, headers={"ETag": "abc"})
        value, etag = await _client(rec).reference("pin_boards/pb-1").get_with_etag()
        assert value == {"pins": ["p1"]}
        assert etag == "abc"
        assert rec.requests[0].headers["X-Firebase-ETag"] == "true"

    async def test_conditional_write_412(self) -> None:
        rec = Recorder(status=412, body={"pins": ["p2"]}, headers={"ETag": "new"})
        with pytest.raises(PreconditionFailedError) as exc_info:
            await _client(rec).reference("pin_boards/pb-1").set_if_match({"pins": []}, "old")
        assert exc_info.value.etag == "new"
        assert exc_info.value.value == {"pins": ["p2"]}
        assert rec.requests[0].headers["if-match"] == "old"


class TestDocumentStore:
    async def test_update_is_one_root_patch(self) -> None:
        rec = Recorder(status=204)
        store = DocumentStore(_client(rec))
        await store.update({"pins/p1": {"id": "p1"}, "user_pins/alice/p1": None})
        assert len(rec.requests) == 1
        req = rec.requests[0]
        assert req.method == "PATCH"
        assert req.url.path == "/.json"
        assert json.loads(req.content) == {"pins/p1": {"id": "p1"}, "user_pins/alice/p1": None}

    async def test_empty_update_sends_nothing(self) -> None:
        rec = Recorder(status=204)
        await DocumentStore(_client(rec)).update({})
        assert rec.requests == []

    async def test_set_if_match_conflict_returns_false(self) -> None:
        rec = Recorder(status=412, body=None, headers={"ETag": "new"})
        assert await DocumentStore(_client(rec)).set_if_match("x", {"a": 1}, "old") is False

    async def test_set_if_match_success(self) -> None:
        rec = Recorder(status=200, body={"a": 1})
        assert await DocumentStore(_client(rec)).set_if_match("x", {"a": 1}, "e") is True

    async def test_http_error_wrapped(self) -> None:
        rec = Recorder(status=500, body={"error": "boom"})
        with pytest.raises(DocumentStoreException) as exc_info:
            await DocumentStore(_client(rec)).get("pins/p1")
        assert exc_info.value.details["reason"] == "HTTP 500"
        assert exc_info.value.details["operation"] == "get"

    async def test_missing_etag_is_store_error(self) -> None:
        rec = Recorder(body={"a": 1})
        with pytest.raises(DocumentStoreException):
            await DocumentStore(_client(rec)).get_with_etag("pin_boards/pb-1")

    async def test_server_timestamp_placeholder(self) -> None:
        assert DocumentStore(_client(Recorder())).server_timestamp() == {".sv": "timestamp"}
