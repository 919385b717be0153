"""Health status builders."""

from __future__ import annotations

from app.core.logging import get_logger
from app.models.health import NO_DELAYED_JOBS_MESSAGE, DelayedJobsStatus, StatusResponse
from app.services.job_queue import JobQueueGateway

logger = get_logger(__name__)


def status() -> StatusResponse:
    """Liveness payload; makes no external calls."""

    return StatusResponse(online=True)


async def build_delayed_jobs_status(gateway: JobQueueGateway) -> DelayedJobsStatus:
    """Summarize the job queue.

    An empty queue yields only ``msg``. Otherwise the payload carries the
    pending count and the oldest job's creation time; the oldest-job query is
    skipped when the count is zero. Store failures propagate unchanged.
    """

    count = await gateway.count()
    if count == 0:
        logger.debug("delayed_jobs.status", count=0)
        return DelayedJobsStatus(msg=NO_DELAYED_JOBS_MESSAGE)

    oldest = await gateway.oldest()
    logger.debug("delayed_jobs.status", count=count, oldest=oldest.isoformat() if oldest else None)
    return DelayedJobsStatus(count=count, oldest=oldest)
