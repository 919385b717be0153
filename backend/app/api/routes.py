"""Health route definitions."""

from fastapi import APIRouter, Depends

from app.api import deps
from app.models.health import DelayedJobsStatus, StatusResponse
from app.services import health
from app.services.job_queue import JobQueueGateway

health_router = APIRouter()


@health_router.get("/status", response_model=StatusResponse, summary="Liveness probe")
async def status() -> StatusResponse:
    """Report that the process is serving requests."""

    return health.status()


@health_router.get(
    "/delayed_jobs",
    response_model=DelayedJobsStatus,
    response_model_exclude_none=True,
    summary="Pending background job summary",
)
async def delayed_jobs(
    gateway: JobQueueGateway = Depends(deps.get_job_queue_gateway),
) -> DelayedJobsStatus:
    """Report the pending job count and the oldest job's creation time."""

    return await health.build_delayed_jobs_status(gateway)
