"""
Base schemas with common functionality.
"""
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, field_serializer


def to_utc_iso(dt: datetime) -> str:
    """Format a datetime as UTC ISO 8601 with a 'Z' suffix; naive means UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')


class TimestampMixin(BaseModel):
    """Mixin for models with created_at/updated_at timestamps.

    SQLite returns naive datetimes, so they are serialized explicitly as UTC.
    """
    model_config = ConfigDict(from_attributes=True)

    @field_serializer('created_at', 'updated_at', check_fields=False)
    def serialize_datetime(self, dt: datetime, _info):
        if dt is None:
            return None
        return to_utc_iso(dt)
