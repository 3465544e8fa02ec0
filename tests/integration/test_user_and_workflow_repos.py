"""User profile and workflow data repositories against the in-memory store."""

import pytest

from pindown.application.dtos.user import UserUpsert
from pindown.domain.exceptions import ResourceNotFoundException, ValidationException
from pindown.infrastructure.firebase.repositories import (
    FirebaseUserRepository,
    FirebaseWorkflowDataRepository,
)


class TestUsers:
    async def test_upsert_preserves_created_at(self, store) -> None:
        repo = FirebaseUserRepository(store)
        first = await repo.upsert_user(UserUpsert(uid="alice", email="a@example.com"))
        second = await repo.upsert_user(
            UserUpsert(uid="alice", email="a@example.com", display_name="Alice")
        )
        assert second.created_at == first.created_at
        assert second.updated_at > first.updated_at
        assert second.display_name == "Alice"
        assert store.peek("users/alice/displayName") == "Alice"

    async def test_get_missing(self, store) -> None:
        assert await FirebaseUserRepository(store).get_user("nobody") is None


class TestWorkflowData:
    @pytest.fixture
    def repo(self, store) -> FirebaseWorkflowDataRepository:
        store.seed("pins/p1", {"id": "p1", "user_id": "alice"})
        return FirebaseWorkflowDataRepository(store)

    async def test_put_replaces_and_stamps(self, repo) -> None:
        await repo.put("p1", "wd_sales", {"total": 1, "old": True})
        await repo.put("p1", "wd_sales", {"total": 2})
        data = await repo.get("p1", "wd_sales")
        assert data["total"] == 2
        assert "old" not in data
        assert isinstance(data["last_update"], int)

    async def test_get_all(self, repo) -> None:
        assert await repo.get_all("p1") == {}
        await repo.put("p1", "wd_a", {"v": 1})
        await repo.put("p1", "wd_b", {"v": 2})
        assert set(await repo.get_all("p1")) == {"wd_a", "wd_b"}

    async def test_rejects_unstorable_keys(self, repo) -> None:
        with pytest.raises(ValidationException):
            await repo.put("p1", "wd_a", {"a.b": 1})

    async def test_get_missing(self, repo) -> None:
        assert await repo.get("p1", "wd_x") is None

    async def test_put_after_pin_deleted_leaves_nothing(self, repo, store) -> None:
        original_update = store.update

        async def delete_pin_then_update(updates):
            store.seed("pins/p1", None)
            await original_update(updates)

        store.update = delete_pin_then_update
        with pytest.raises(ResourceNotFoundException):
            await repo.put("p1", "wd_a", {"v": 1})
        assert store.peek("workflow_data/p1") is None
