import uuid

import pytest
from httpx import AsyncClient

HISTORY_URL = "/api/v1/history"


async def _ask(client: AsyncClient, query: str, headers=None):
    response = await client.post("/api/v1/ask-jiji", json={"query": query}, headers=headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_history_requires_auth(client: AsyncClient):
    """401 when no auth header"""
    response = await client.get(HISTORY_URL)

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Authentication required"}


@pytest.mark.asyncio
async def test_history_with_invalid_token(client: AsyncClient):
    response = await client.get(
        HISTORY_URL, headers={"Authorization": "Bearer broken.token.value"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_history_empty(client: AsyncClient, auth_headers):
    response = await client.get(HISTORY_URL, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": []}


@pytest.mark.asyncio
async def test_history_newest_first(client: AsyncClient, auth_headers):
    for topic in ("recursion basics", "python lists", "graph search"):
        await _ask(client, topic, headers=auth_headers)

    response = await client.get(HISTORY_URL, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert [item["query_text"] for item in data] == [
        "graph search",
        "python lists",
        "recursion basics",
    ]
    assert set(data[0]) == {"id", "query_text", "created_at"}


@pytest.mark.asyncio
async def test_history_respects_limit(client: AsyncClient, auth_headers):
    for i in range(6):
        await _ask(client, f"question number {i}", headers=auth_headers)

    response = await client.get(HISTORY_URL, params={"limit": 5}, headers=auth_headers)

    assert response.status_code == 200
    assert len(response.json()["data"]) == 5


@pytest.mark.asyncio
async def test_history_only_own_queries(client: AsyncClient, store, auth_headers):
    await _ask(client, "my own question", headers=auth_headers)
    await store.insert_query("somebody else", uuid.uuid4())
    await _ask(client, "anonymous question")

    response = await client.get(HISTORY_URL, headers=auth_headers)

    texts = [item["query_text"] for item in response.json()["data"]]
    assert texts == ["my own question"]


@pytest.mark.asyncio
async def test_history_store_failure_returns_empty(
    client: AsyncClient, store, auth_headers
):
    store.fail_history = True
    response = await client.get(HISTORY_URL, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"] == []


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, -3, "abc", 101])
async def test_history_rejects_bad_limit(client: AsyncClient, auth_headers, limit):
    response = await client.get(
        HISTORY_URL, params={"limit": limit}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "limit"
