"""Pydantic schemas for health responses."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_serializer

NO_DELAYED_JOBS_MESSAGE = "No delayed jobs found"


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with millisecond precision and a ``Z`` suffix.

    Naive values are taken to already be in UTC, which is how the job-queue
    engine stores ``created_at``.
    """

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class StatusResponse(BaseModel):
    online: bool = Field(default=True, description="Always true while the process serves requests.")


class DelayedJobsStatus(BaseModel):
    """Queue summary; rendered with ``exclude_none`` so absent fields are omitted."""

    count: int | None = Field(default=None, ge=0, description="Number of pending jobs.")
    oldest: datetime | None = Field(default=None, description="Creation time of the oldest pending job.")
    msg: str | None = Field(default=None, description="Set only when the queue is empty.")

    @field_serializer("oldest")
    def _serialize_oldest(self, value: datetime | None) -> str | None:
        if value is None:
            return None
        return format_timestamp(value)
