"""
Base model classes shared by all tables.

Datetimes are timezone-aware UTC on write. SQLite hands them back naive, so
readers pass them through ``ensure_utc`` before comparing.
"""
import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field

from moodflow.core.time_utils import utc_now


class BaseModel(SQLModel):
    """
    Base model with a UUID primary key and creation/update timestamps.

    ``updated_at`` is maintained by the services, not by database triggers.
    """
    __abstract__ = True
    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
        description="Unique identifier for this record"
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        nullable=False,
        index=True,
        description="UTC timestamp when this record was created"
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        nullable=False,
        description="UTC timestamp when this record was last updated"
    )
