"""Shared FastAPI dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_session
from app.services.job_queue import JobQueueGateway, SqlAlchemyJobQueueGateway


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Provide an async SQLAlchemy session."""

    async with get_session() as session:
        yield session


def get_job_queue_gateway(
    session: AsyncSession = Depends(get_db_session),
) -> JobQueueGateway:
    """Provide the job-queue gateway bound to the request's session."""

    return SqlAlchemyJobQueueGateway(session)
