"""Read-only access to the job-queue store."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StoreUnavailableError
from app.core.logging import get_logger
from app.models.tables import DelayedJob

logger = get_logger(__name__)


class JobQueueGateway(Protocol):
    """The two reads the health checks need from the job queue."""

    async def count(self) -> int:
        """Return the number of pending jobs."""

    async def oldest(self) -> datetime | None:
        """Return the creation time of the oldest pending job, if any."""


class SqlAlchemyJobQueueGateway:
    """Gateway backed by the ``delayed_jobs`` table.

    Each call is an independent query; the count and the oldest read may
    observe different snapshots.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def count(self) -> int:
        stmt = select(func.count()).select_from(DelayedJob)
        try:
            result = await self._session.scalar(stmt)
        except (SQLAlchemyError, OSError) as exc:
            raise _store_unavailable("count", exc) from exc
        return int(result or 0)

    async def oldest(self) -> datetime | None:
        stmt = select(DelayedJob.created_at).order_by(DelayedJob.created_at.asc()).limit(1)
        try:
            return await self._session.scalar(stmt)
        except (SQLAlchemyError, OSError) as exc:
            raise _store_unavailable("oldest", exc) from exc


def _store_unavailable(operation: str, exc: Exception) -> StoreUnavailableError:
    logger.warning(
        "job_queue.store_unavailable",
        operation=operation,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return StoreUnavailableError(operation, str(exc))
