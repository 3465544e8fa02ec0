"""FirebasePinRepository against the in-memory document store."""

import asyncio

import pytest

from pindown.application.dtos.pin import PinCreate, PinMetadataUpdate
from pindown.domain.enums import DataType
from pindown.domain.exceptions import ResourceNotFoundException, ValidationException
from pindown.infrastructure.firebase.repositories import FirebasePinRepository


@pytest.fixture
def repo(store, ids) -> FirebasePinRepository:
    return FirebasePinRepository(store, ids)


async def test_create_writes_pin_and_index_in_one_update(repo, store) -> None:
    pin = await repo.create_pin(
        PinCreate(user_id="alice", title="Sales", tags=("q1",), extra_metadata={"color": "red"})
    )
    assert pin.id.startswith("p")
    assert pin.user_id == "alice"
    assert pin.content == ""
    assert pin.metadata.title == "Sales"
    assert pin.metadata.extra == {"color": "red"}
    assert isinstance(pin.metadata.created_at, int)
    assert pin.is_public is False
    updates = [c for c in store.calls if c[0] == "update"]
    assert updates == [("update", sorted([f"pins/{pin.id}", f"user_pins/alice/{pin.id}"]))]
    index = store.peek(f"user_pins/alice/{pin.id}")
    assert index["title"] == "Sales"
    assert index["is_active"] is True


async def test_default_title(repo) -> None:
    pin = await repo.create_pin(PinCreate(user_id="alice"))
    assert pin.metadata.title == "Untitled Pin"


async def test_get_missing(repo) -> None:
    assert await repo.get_pin("pnope") is None


async def test_user_pins_in_creation_order_and_owned_only(repo, store) -> None:
    first = await repo.create_pin(PinCreate(user_id="alice", title="one"))
    second = await repo.create_pin(PinCreate(user_id="alice", title="two"))
    await repo.create_pin(PinCreate(user_id="bob", title="bob's"))
    # Stale index entry pointing at someone else's pin is ignored.
    bob_pin = (await repo.get_user_pins("bob"))[0]
    store.seed(f"user_pins/alice/{bob_pin.id}", {"title": "stolen"})
    # Dangling index entry is ignored.
    store.seed("user_pins/alice/pzzzz", {"title": "gone"})
    pins = await repo.get_user_pins("alice")
    assert [p.id for p in pins] == [first.id, second.id]


async def test_update_pin_merges_and_refreshes_index(repo, store) -> None:
    pin = await repo.create_pin(PinCreate(user_id="alice", title="old", description="d"))
    updated = await repo.update_pin(pin, PinMetadataUpdate(title="new", is_public=True))
    assert updated.metadata.title == "new"
    assert updated.metadata.description == "d"
    assert updated.is_public is True
    assert updated.permissions.is_public is True
    assert updated.metadata.updated_at is not None
    assert store.peek(f"user_pins/alice/{pin.id}/title") == "new"


async def test_set_visibility(repo) -> None:
    pin = await repo.create_pin(PinCreate(user_id="alice"))
    public = await repo.set_visibility(pin, True)
    assert public.is_public is True
    private = await repo.set_visibility(public, False)
    assert private.is_public is False
    assert private.metadata.is_public is False


async def test_update_content_recomputes_sources(repo, store) -> None:
    pin = await repo.create_pin(PinCreate(user_id="alice"))
    updated = await repo.update_content(
        pin, "Total: {{wd_sales.total}} / {{wd_sales.count}}", "wf1", DataType.TEXT
    )
    assert updated.content.startswith("Total:")
    assert updated.wid == "wf1"
    assert updated.data_type is DataType.TEXT
    assert updated.metadata.workflow_sources == ("wd_sales",)
    assert store.peek(f"user_pins/alice/{pin.id}/workflow_sources") == ["wd_sales"]


async def test_delete_removes_pin_index_and_children(repo, store) -> None:
    pin = await repo.create_pin(PinCreate(user_id="alice"))
    store.seed(f"pin_blocks/{pin.id}/b1", {"name": "b"})
    store.seed(f"pin_datasets/{pin.id}/d1", {"id": "d1"})
    store.seed(f"workflow_data/{pin.id}/wd_x", {"v": 1})
    await repo.delete_pin(pin)
    for path in (
        f"pins/{pin.id}",
        f"user_pins/alice/{pin.id}",
        f"pin_blocks/{pin.id}",
        f"pin_datasets/{pin.id}",
        f"workflow_data/{pin.id}",
    ):
        assert store.peek(path) is None


class TestUpdatesAfterConcurrentDelete:
    """A pin deleted after it was loaded stays deleted, index included."""

    @pytest.mark.parametrize(
        "update",
        [
            lambda repo, pin: repo.update_pin(pin, PinMetadataUpdate(title="New")),
            lambda repo, pin: repo.set_visibility(pin, True),
            lambda repo, pin: repo.update_content(pin, "{{wd_a.x}}"),
        ],
        ids=["update_pin", "set_visibility", "update_content"],
    )
    async def test_stale_pin_is_not_recreated(self, repo, store, update) -> None:
        pin = await repo.create_pin(PinCreate(user_id="alice", title="Old"))
        loaded = await repo.get_pin(pin.id)
        await repo.delete_pin(pin)
        with pytest.raises(ResourceNotFoundException):
            await update(repo, loaded)
        assert store.peek(f"pins/{pin.id}") is None
        assert store.peek(f"user_pins/alice/{pin.id}") is None

    async def test_delete_between_read_and_write(self, repo, store) -> None:
        pin = await repo.create_pin(PinCreate(user_id="alice", title="Old"))
        original_read = store.get_with_etag
        deleted = []

        async def read_then_delete(path):
            current = await original_read(path)
            if not deleted:
                deleted.append(path)
                await repo.delete_pin(pin)
            return current

        store.get_with_etag = read_then_delete
        with pytest.raises(ResourceNotFoundException):
            await repo.update_pin(pin, PinMetadataUpdate(title="New"))
        assert store.peek(f"pins/{pin.id}") is None
        assert store.peek(f"user_pins/alice/{pin.id}") is None

    async def test_concurrent_edits_both_land(self, repo) -> None:
        pin = await repo.create_pin(PinCreate(user_id="alice", title="Old"))
        await asyncio.gather(
            repo.update_pin(pin, PinMetadataUpdate(title="New")),
            repo.update_content(pin, "{{wd_a.x}}"),
        )
        final = await repo.get_pin(pin.id)
        assert final.metadata.title == "New"
        assert final.metadata.workflow_sources == ("wd_a",)


async def test_extra_metadata_keys_validated(repo, store) -> None:
    with pytest.raises(ValidationException):
        await repo.create_pin(PinCreate(user_id="alice", extra_metadata={"a.b": 1}))
    assert store.peek("pins") is None
    assert store.peek("user_pins") is None
