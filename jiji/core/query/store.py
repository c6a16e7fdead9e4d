import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Protocol, Union

from sqlalchemy import desc, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jiji.core import models


# -----------------------------------------------------------------------------
# STORE MODULE
# Purpose: the only place the query pipeline touches the relational store.
# The pipeline depends on the QueryStore protocol, so tests can plug in an
# in-memory fake and production uses SqlAlchemyQueryStore.
# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised by store implementations when the backend call fails."""


@dataclass(frozen=True)
class QueryRecord:
    id: uuid.UUID
    query_text: str
    user_id: Optional[uuid.UUID]
    created_at: datetime


@dataclass(frozen=True)
class ResourceRecord:
    id: uuid.UUID
    title: str
    type: str
    url: str
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    is_active: bool = True


# =========================
# Save result (two variants)
# =========================
@dataclass(frozen=True)
class QuerySaved:
    record: QueryRecord


@dataclass(frozen=True)
class QuerySaveFailed:
    reason: str


SaveResult = Union[QuerySaved, QuerySaveFailed]


class QueryStore(Protocol):
    async def insert_query(
        self, text: str, user_id: Optional[uuid.UUID]
    ) -> Optional[QueryRecord]: ...

    async def list_queries(
        self, user_id: uuid.UUID, limit: int
    ) -> List[QueryRecord]: ...

    async def list_active_resources(self, limit: int) -> List[ResourceRecord]: ...


class SqlAlchemyQueryStore:
    """QueryStore backed by an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_query(
        self, text: str, user_id: Optional[uuid.UUID]
    ) -> Optional[QueryRecord]:
        stmt = (
            insert(models.Query)
            .values(query_text=text, user_id=user_id)
            .returning(
                models.Query.id,
                models.Query.query_text,
                models.Query.user_id,
                models.Query.created_at,
            )
        )
        try:
            result = await self.db.execute(stmt)
            row = result.first()
            await self.db.commit()
        except (SQLAlchemyError, OSError) as error:
            await self.db.rollback()
            raise StoreError(f"Failed to insert query: {error}") from error

        if row is None:
            return None
        return QueryRecord(
            id=row.id,
            query_text=row.query_text,
            user_id=row.user_id,
            created_at=row.created_at,
        )

    async def list_queries(self, user_id: uuid.UUID, limit: int) -> List[QueryRecord]:
        query = (
            select(models.Query)
            .where(models.Query.user_id == user_id)
            .order_by(desc(models.Query.created_at))
            .limit(limit)
        )
        try:
            result = await self.db.execute(query)
        except (SQLAlchemyError, OSError) as error:
            await self.db.rollback()
            raise StoreError(f"Failed to load query history: {error}") from error

        return [
            QueryRecord(
                id=q.id,
                query_text=q.query_text,
                user_id=q.user_id,
                created_at=q.created_at,
            )
            for q in result.scalars().all()
        ]

    async def list_active_resources(self, limit: int) -> List[ResourceRecord]:
        # Newest first so the sampling bound is at least deterministic
        query = (
            select(models.Resource)
            .where(models.Resource.is_active.is_(True))
            .order_by(desc(models.Resource.created_at), models.Resource.id)
            .limit(limit)
        )
        try:
            result = await self.db.execute(query)
        except (SQLAlchemyError, OSError) as error:
            await self.db.rollback()
            raise StoreError(f"Failed to load resources: {error}") from error

        return [
            ResourceRecord(
                id=r.id,
                title=r.title,
                type=r.type,
                url=r.url,
                description=r.description,
                tags=list(r.tags or []),
                is_active=r.is_active,
            )
            for r in result.scalars().all()
        ]


async def save_query(
    store: QueryStore, text: str, user_id: Optional[uuid.UUID]
) -> SaveResult:
    """
    Persist a sanitized query and report the outcome instead of raising.
    Store failures and inserts that return no row both become QuerySaveFailed.
    """
    try:
        record = await store.insert_query(text, user_id)
    except StoreError as error:
        logger.error(f"Query insert failed: {error}")
        return QuerySaveFailed(reason=str(error))

    if record is None:
        return QuerySaveFailed(reason="Insert returned no row")
    return QuerySaved(record=record)


async def get_history(
    store: QueryStore, user_id: uuid.UUID, limit: int
) -> List[QueryRecord]:
    """Most recent queries for a user, newest first. Empty on store failure."""
    try:
        records = await store.list_queries(user_id, limit)
    except StoreError as error:
        logger.error(f"Query history lookup failed for user {user_id}: {error}")
        return []
    return records[:limit]
