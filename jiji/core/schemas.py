import uuid
from datetime import datetime
from typing import Optional, List
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from jiji.core.query.sanitizer import MAX_QUERY_LENGTH, sanitize_input


# =========================
# Enums
# =========================
class ResourceType(str, Enum):
    ARTICLE = "article"
    VIDEO = "video"
    LINK = "link"
    COURSE = "course"


# Wire format for the ask endpoint is camelCase (queryId, resourceCount, userId)
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =========================
# ASK
# =========================
class AskRequest(CamelModel):
    query: str = Field(min_length=3, max_length=MAX_QUERY_LENGTH)
    user_id: Optional[uuid.UUID] = None

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    @field_validator("query")
    @classmethod
    def not_empty_after_sanitizing(cls, value: str) -> str:
        if not sanitize_input(value):
            raise ValueError("Query cannot be empty")
        return value


class ResourceSummary(CamelModel):
    id: uuid.UUID
    title: str
    type: ResourceType
    url: str
    description: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class AnswerMetadata(CamelModel):
    query_id: Optional[uuid.UUID] = None
    timestamp: datetime
    resource_count: int


class AnswerResponse(CamelModel):
    answer: str
    resources: List[ResourceSummary] = []
    metadata: AnswerMetadata


class AskResponse(BaseModel):
    success: bool = True
    data: AnswerResponse


# =========================
# HISTORY
# =========================
class QueryHistoryItem(BaseModel):
    id: uuid.UUID
    query_text: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class HistoryResponse(BaseModel):
    success: bool = True
    data: List[QueryHistoryItem] = []


# =========================
# MISC
# =========================
class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: datetime
    version: str


class ValidationErrorDetail(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[List[ValidationErrorDetail]] = None
