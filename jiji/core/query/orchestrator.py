import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import status

from jiji.core import schemas
from jiji.core.errors import AppError
from jiji.core.query.answer import generate_answer
from jiji.core.query.keywords import DEFAULT_KEYWORD_CONFIG, KeywordConfig
from jiji.core.query.matcher import (
    DEFAULT_RESOURCE_SAMPLE_LIMIT,
    find_matching_resources,
)
from jiji.core.query.sanitizer import sanitize_input
from jiji.core.query.store import (
    QueryRecord,
    QuerySaved,
    QueryStore,
    get_history,
    save_query,
)


# -----------------------------------------------------------------------------
# ORCHESTRATOR
# Purpose: the "ask" and "history" operations the routes call.
# Flow: sanitize -> persist -> match -> answer -> response with metadata.
# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)


class QueryService:
    """Stateless per-request service around a QueryStore."""

    def __init__(
        self,
        store: QueryStore,
        *,
        keyword_config: KeywordConfig = DEFAULT_KEYWORD_CONFIG,
        resource_sample_limit: int = DEFAULT_RESOURCE_SAMPLE_LIMIT,
    ):
        self.store = store
        self.keyword_config = keyword_config
        self.resource_sample_limit = resource_sample_limit

    async def process_query(
        self, query: str, user_id: Optional[uuid.UUID] = None
    ) -> schemas.AnswerResponse:
        """
        Answer a learning query.

        Persistence and matching failures never fail the call: the answer is
        built anyway, with query_id None and/or no resources.

        Args:
            query: Query text that already passed request validation.
            user_id: Verified user id, None for anonymous callers.

        Returns:
            AnswerResponse with answer text, matched resources and metadata.
        """
        sanitized = sanitize_input(query)
        if not sanitized:
            raise AppError("Query cannot be empty", status.HTTP_400_BAD_REQUEST)

        # Both store calls share one session, so they run one after the other
        save_result = await save_query(self.store, sanitized, user_id)
        resources = await find_matching_resources(
            self.store,
            sanitized,
            config=self.keyword_config,
            sample_limit=self.resource_sample_limit,
        )

        query_id = None
        if isinstance(save_result, QuerySaved):
            query_id = save_result.record.id
        else:
            logger.warning(f"Answering without a stored query: {save_result.reason}")

        return schemas.AnswerResponse(
            answer=generate_answer(sanitized, resources),
            resources=[
                schemas.ResourceSummary.model_validate(r) for r in resources
            ],
            metadata=schemas.AnswerMetadata(
                query_id=query_id,
                timestamp=datetime.now(timezone.utc),
                resource_count=len(resources),
            ),
        )

    async def get_query_history(
        self, user_id: Optional[uuid.UUID], limit: int = 10
    ) -> List[QueryRecord]:
        if user_id is None:
            raise AppError("Authentication required", status.HTTP_401_UNAUTHORIZED)
        return await get_history(self.store, user_id, limit)
