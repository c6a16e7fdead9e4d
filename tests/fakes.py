import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from jiji.core.query.store import QueryRecord, ResourceRecord, StoreError


def make_resource(
    title: str,
    type: str = "article",
    description: Optional[str] = None,
    tags: Optional[List[str]] = None,
    is_active: bool = True,
) -> ResourceRecord:
    slug = title.lower().replace(" ", "-")
    return ResourceRecord(
        id=uuid.uuid4(),
        title=title,
        type=type,
        url=f"https://learn.example.com/{slug}",
        description=description,
        tags=tags or [],
        is_active=is_active,
    )


class FakeQueryStore:
    """In-memory QueryStore with switches to simulate backend failures."""

    def __init__(self, resources: Optional[List[ResourceRecord]] = None):
        self.resources = list(resources or [])
        self.queries: List[QueryRecord] = []
        self.resource_limits: List[int] = []

        self.fail_insert = False
        self.insert_returns_nothing = False
        self.fail_resources = False
        self.fail_history = False

        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    async def insert_query(self, text, user_id) -> Optional[QueryRecord]:
        if self.fail_insert:
            raise StoreError("connection refused")
        if self.insert_returns_nothing:
            return None

        # Every insert is one second later than the previous one
        self._clock += timedelta(seconds=1)
        record = QueryRecord(
            id=uuid.uuid4(), query_text=text, user_id=user_id, created_at=self._clock
        )
        self.queries.append(record)
        return record

    async def list_queries(self, user_id, limit) -> List[QueryRecord]:
        if self.fail_history:
            raise StoreError("connection reset")
        mine = [q for q in self.queries if q.user_id == user_id]
        mine.sort(key=lambda q: q.created_at, reverse=True)
        return mine[:limit]

    async def list_active_resources(self, limit) -> List[ResourceRecord]:
        self.resource_limits.append(limit)
        if self.fail_resources:
            raise StoreError("statement timeout")
        return [r for r in self.resources if r.is_active][:limit]
