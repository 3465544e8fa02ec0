"""Body size limit and missing backend wiring."""

from httpx import AsyncClient

from fakes import ALICE


async def test_oversized_body_rejected(client: AsyncClient) -> None:
    payload = {"data": {"blob": "x" * 1_100_000}}
    response = await client.put("/api/workflow-data/p1/w1", headers=ALICE, json=payload)
    assert response.status_code == 413
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "PAYLOAD_TOO_LARGE"


async def test_body_under_limit_reaches_route(client: AsyncClient) -> None:
    response = await client.put(
        "/api/workflow-data/p1/w1", headers=ALICE, json={"data": {"blob": "x" * 1000}}
    )
    assert response.status_code == 404


async def test_missing_store_is_service_unavailable(client: AsyncClient, app) -> None:
    app.state.document_store = None
    response = await client.get("/api/pins", headers=ALICE)
    assert response.status_code == 503
    assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"
