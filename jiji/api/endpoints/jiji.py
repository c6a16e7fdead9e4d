import uuid
from datetime import datetime, timezone
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from jiji.core import schemas
from jiji.core.config import settings
from jiji.core.database import get_db
from jiji.core.query.orchestrator import QueryService
from jiji.core.query.store import QueryStore, SqlAlchemyQueryStore
from jiji.core.security import get_optional_user_id

router = APIRouter(tags=["Jiji"])

db_dep = Annotated[AsyncSession, Depends(get_db)]


def get_query_store(db: db_dep) -> QueryStore:
    return SqlAlchemyQueryStore(db)


def get_query_service(
    store: Annotated[QueryStore, Depends(get_query_store)],
) -> QueryService:
    return QueryService(
        store,
        keyword_config=settings.keyword_config(),
        resource_sample_limit=settings.RESOURCE_SAMPLE_LIMIT,
    )


service_dep = Annotated[QueryService, Depends(get_query_service)]
user_dep = Annotated[Optional[uuid.UUID], Depends(get_optional_user_id)]


@router.post(
    "/ask-jiji",
    response_model=schemas.AskResponse,
    status_code=status.HTTP_200_OK,
    responses={400: {"model": schemas.ErrorResponse}},
)
async def ask_jiji(payload: schemas.AskRequest, service: service_dep, user_id: user_dep):
    # Only a verified identity attributes the query; body userId is not trusted
    answer = await service.process_query(payload.query, user_id)
    return schemas.AskResponse(data=answer)


@router.get(
    "/history",
    response_model=schemas.HistoryResponse,
    responses={401: {"model": schemas.ErrorResponse}},
)
async def query_history(
    service: service_dep,
    user_id: user_dep,
    # Out-of-range or non-numeric limits are a 400, not a silent fallback to 10
    limit: int = Query(10, ge=1, le=100),
):
    records = await service.get_query_history(user_id, limit)
    return schemas.HistoryResponse(
        data=[schemas.QueryHistoryItem.model_validate(r) for r in records]
    )


@router.get("/health", response_model=schemas.HealthResponse)
async def health():
    return schemas.HealthResponse(
        message="Jiji backend is running",
        timestamp=datetime.now(timezone.utc),
        version=settings.API_VERSION,
    )
