import uuid

import pytest

from jiji.core.errors import AppError
from jiji.core.query.keywords import DEFAULT_STOP_WORDS, KeywordConfig
from jiji.core.query.orchestrator import QueryService


@pytest.mark.asyncio
async def test_process_query_finds_resource(service, store):
    response = await service.process_query("explain recursion")

    titles = [r.title for r in response.resources]
    assert "Recursion Basics" in titles
    assert response.metadata.resource_count >= 1
    assert response.metadata.resource_count == len(response.resources)
    assert response.metadata.query_id == store.queries[0].id
    assert "1 learning resources" in response.answer


@pytest.mark.asyncio
async def test_stores_sanitized_text(service, store):
    await service.process_query("   <b>recursion</b>  ")
    assert store.queries[0].query_text == "brecursion/b"


@pytest.mark.asyncio
async def test_records_user_id(service, store):
    user_id = uuid.uuid4()
    await service.process_query("explain recursion", user_id)
    assert store.queries[0].user_id == user_id


@pytest.mark.asyncio
async def test_insert_failure_still_answers(service, store):
    store.fail_insert = True

    response = await service.process_query("explain recursion")

    assert response.metadata.query_id is None
    assert response.metadata.resource_count == 1
    assert response.answer


@pytest.mark.asyncio
async def test_insert_without_row_still_answers(service, store):
    store.insert_returns_nothing = True
    response = await service.process_query("explain recursion")
    assert response.metadata.query_id is None


@pytest.mark.asyncio
async def test_catalog_failure_gives_empty_answer(service, store):
    store.fail_resources = True

    response = await service.process_query("explain recursion")

    assert response.resources == []
    assert response.metadata.resource_count == 0
    assert response.metadata.query_id is not None
    assert "as more content is added" in response.answer


@pytest.mark.asyncio
async def test_keyword_config_and_sample_limit_are_passed(store):
    service = QueryService(
        store,
        keyword_config=KeywordConfig(stop_words=DEFAULT_STOP_WORDS | {"recursion"}),
        resource_sample_limit=3,
    )

    response = await service.process_query("explain recursion")

    assert response.resources == []
    assert store.resource_limits == [3]


@pytest.mark.asyncio
async def test_rejects_query_empty_after_sanitizing(service, store):
    with pytest.raises(AppError) as exc_info:
        await service.process_query("<<>>")
    assert exc_info.value.status_code == 400
    assert store.queries == []


@pytest.mark.asyncio
async def test_history_requires_user(service):
    with pytest.raises(AppError) as exc_info:
        await service.get_query_history(None)
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Authentication required"


@pytest.mark.asyncio
async def test_history_limit_and_order(service):
    user_id = uuid.uuid4()
    for i in range(8):
        await service.process_query(f"question about topic {i}", user_id)
    await service.process_query("someone else asking", uuid.uuid4())

    records = await service.get_query_history(user_id, 5)

    assert len(records) == 5
    assert all(r.user_id == user_id for r in records)
    timestamps = [r.created_at for r in records]
    assert timestamps == sorted(timestamps, reverse=True)
