import uuid

from sqlalchemy import (
    Column,
    String,
    Boolean,
    TIMESTAMP,
    Text,
    JSON,
    Uuid,
)
from sqlalchemy.sql import func, expression

from jiji.core.database import Base


# =========================
# Query
# =========================
class Query(Base):
    """
    One row per "ask" call. Written once, never updated or deleted here.
    """

    __tablename__ = "queries"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    query_text = Column(String(500), nullable=False)

    # Verified identity from the auth layer, NULL for anonymous askers
    user_id = Column(Uuid, nullable=True, index=True)

    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )


# =========================
# Resource (catalog)
# =========================
class Resource(Base):
    """
    A learning resource: article, video, link or course.
    The catalog is curated outside this service; the API only reads it.
    """

    __tablename__ = "resources"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    title = Column(String, nullable=False)
    type = Column(String, nullable=False)  # see schemas.ResourceType
    url = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    # ordered list of tag strings
    tags = Column(JSON, nullable=True)

    is_active = Column(
        Boolean, nullable=False, server_default=expression.true(), index=True
    )

    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
