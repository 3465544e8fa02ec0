"""FirebaseApiKeyRepository against the in-memory document store."""

import pytest

from pindown.domain.exceptions import ResourceNotFoundException
from pindown.infrastructure.firebase.repositories import FirebaseApiKeyRepository


@pytest.fixture
def repo(store, ids, hasher) -> FirebaseApiKeyRepository:
    return FirebaseApiKeyRepository(store, ids, hasher)


async def test_create_stores_only_hash(repo, store, hasher) -> None:
    key, plaintext = await repo.create_api_key("alice", "ci")
    assert plaintext.startswith("pk_")
    assert key.id.startswith("key_")
    assert key.permissions == ("workflow_data:write",)
    assert key.usage_count == 0
    stored = store.peek(f"api_keys/alice/{key.id}")
    assert stored["key_hash"] == hasher.hash(plaintext)
    assert plaintext not in str(stored)


async def test_find_active_by_hash(repo, hasher) -> None:
    key, plaintext = await repo.create_api_key("alice", "ci", ["pins:write"])
    found = await repo.find_active_by_hash(hasher.hash(plaintext))
    assert found is not None
    assert found.user_id == "alice"
    assert found.id == key.id
    assert found.permissions == ("pins:write",)
    assert await repo.find_active_by_hash(hasher.hash("pk_wrong")) is None


async def test_inactive_key_not_found(repo, store, hasher) -> None:
    key, plaintext = await repo.create_api_key("alice", "ci")
    store.seed(f"api_keys/alice/{key.id}/is_active", False)
    assert await repo.find_active_by_hash(hasher.hash(plaintext)) is None


async def test_list_and_revoke(repo, hasher) -> None:
    key, plaintext = await repo.create_api_key("alice", "one")
    await repo.create_api_key("alice", "two")
    assert {k.name for k in await repo.list_api_keys("alice")} == {"one", "two"}
    await repo.revoke_api_key("alice", key.id)
    assert await repo.find_active_by_hash(hasher.hash(plaintext)) is None
    with pytest.raises(ResourceNotFoundException):
        await repo.revoke_api_key("alice", key.id)


async def test_cannot_revoke_someone_elses_key(repo) -> None:
    key, _ = await repo.create_api_key("alice", "ci")
    with pytest.raises(ResourceNotFoundException):
        await repo.revoke_api_key("bob", key.id)
