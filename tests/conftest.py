"""Pytest configuration and fixtures for pindown.

Environment is set before pindown.main is imported so create_app() sees a
valid configuration. HTTP tests run against pindown.main:app with the
in-memory store and fake verifier placed on app.state (ASGITransport does
not run the lifespan).
"""

import os

os.environ.setdefault("FIREBASE_DATABASE_URL", "http://127.0.0.1:9000/?ns=pindown-test")
os.environ.setdefault("FIREBASE_PROJECT_ID", "pindown-test")
os.environ.setdefault("FIREBASE_EMULATOR", "true")
os.environ.setdefault("API_KEY_SALT", "test-salt")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEV_AUTH_BYPASS", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from fakes import FakeIdentityVerifier, InMemoryDocumentStore  # noqa: E402
from pindown.application.services.api_key_hasher import ApiKeyHasher  # noqa: E402
from pindown.core.config import get_settings  # noqa: E402
from pindown.core.limiter import limiter  # noqa: E402
from pindown.infrastructure.firebase.ids import IdGenerator  # noqa: E402
from pindown.main import app as _app  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_limiter_and_settings():
    """Rate limit counters and cached settings do not leak between tests."""
    limiter.reset()
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def ids(store: InMemoryDocumentStore) -> IdGenerator:
    return IdGenerator(store)


@pytest.fixture
def hasher() -> ApiKeyHasher:
    return ApiKeyHasher("test-salt")


@pytest.fixture
def verifier() -> FakeIdentityVerifier:
    return FakeIdentityVerifier({"token-alice": "alice", "token-bob": "bob"})


@pytest.fixture
def app(store: InMemoryDocumentStore, verifier: FakeIdentityVerifier):
    """The FastAPI app wired to the in-memory store and fake verifier."""
    _app.state.document_store = store
    _app.state.identity_verifier = verifier
    yield _app
    _app.state.document_store = None
    _app.state.identity_verifier = None
    _app.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def dev_bypass(monkeypatch):
    """Enable the development auth bypass for one test."""
    monkeypatch.setenv("DEV_AUTH_BYPASS", "true")
    monkeypatch.setenv("DEV_USER_ID", "dev_user_123")
    get_settings.cache_clear()
    yield "dev_user_123"
    get_settings.cache_clear()
