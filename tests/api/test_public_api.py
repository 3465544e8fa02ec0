"""Public pin and pinboard views (optional credentials)."""

from httpx import AsyncClient

from fakes import ALICE, BOB


async def _pin_with_block(client: AsyncClient, headers=ALICE, public: bool = True) -> str:
    response = await client.post(
        "/api/pins/send",
        headers=headers,
        json={"metadata": {"title": "Report", "tags": ["q1"], "is_public": public}},
    )
    pid = response.json()["data"]["pid"]
    await client.post(
        f"/api/pins/{pid}/blocks",
        headers=headers,
        json={"name": "body", "type": "markdown", "template": "# Report"},
    )
    return pid


async def test_public_pin_for_anonymous(client: AsyncClient) -> None:
    pid = await _pin_with_block(client)
    response = await client.get(f"/api/public/pins/{pid}")
    assert response.status_code == 200
    pin = response.json()["data"]["pin"]
    assert pin["id"] == pid
    assert pin["metadata"]["title"] == "Report"
    assert pin["metadata"]["tags"] == ["q1"]
    assert [b["name"] for b in pin["blocks"]] == ["body"]


async def test_private_pin_hidden_from_anonymous(client: AsyncClient) -> None:
    pid = await _pin_with_block(client, public=False)
    response = await client.get(f"/api/public/pins/{pid}")
    assert response.status_code == 404


async def test_private_pin_visible_to_owner(client: AsyncClient) -> None:
    pid = await _pin_with_block(client, public=False)
    response = await client.get(f"/api/public/pins/{pid}", headers=ALICE)
    assert response.status_code == 200


async def test_bad_token_on_public_route_is_anonymous(client: AsyncClient) -> None:
    pid = await _pin_with_block(client)
    response = await client.get(
        f"/api/public/pins/{pid}", headers={"Authorization": "Bearer forged"}
    )
    assert response.status_code == 200


async def test_public_pinboard_expands_readable_pins(client: AsyncClient, store) -> None:
    public_pid = await _pin_with_block(client)
    private_pid = await _pin_with_block(client, headers=BOB, public=False)
    board = await client.post(
        "/api/pinboards",
        headers=ALICE,
        json={"name": "Q1", "is_public": True, "pins": [public_pid, private_pid, "pgone"]},
    )
    board_id = board.json()["data"]["id"]

    response = await client.get(f"/api/public/pinboards/{board_id}")
    assert response.status_code == 200
    data = response.json()["data"]["pinboard"]
    assert data["name"] == "Q1"
    assert [p["id"] for p in data["pins"]] == [public_pid]
    item = data["pins"][0]
    assert item["name"] == "Report"
    assert item["author"] == "alice"
    assert item["metadata"] == {"tags": ["q1"]}
    assert item["blocks"][0]["template"] == "# Report"


async def test_private_pinboard_hidden(client: AsyncClient) -> None:
    board = await client.post("/api/pinboards", headers=ALICE, json={"name": "secret"})
    board_id = board.json()["data"]["id"]
    assert (await client.get(f"/api/public/pinboards/{board_id}")).status_code == 404
    assert (
        await client.get(f"/api/public/pinboards/{board_id}", headers=ALICE)
    ).status_code == 200


async def test_public_pinboard_skips_stored_invalid_ids(client: AsyncClient, store) -> None:
    public_pid = await _pin_with_block(client)
    board = await client.post(
        "/api/pinboards", headers=ALICE, json={"name": "Legacy", "is_public": True}
    )
    board_id = board.json()["data"]["id"]
    store.seed(f"pin_boards/{board_id}/pins", ["bad/id", public_pid, "a.b"])

    response = await client.get(f"/api/public/pinboards/{board_id}")
    assert response.status_code == 200
    assert [p["id"] for p in response.json()["data"]["pinboard"]["pins"]] == [public_pid]
