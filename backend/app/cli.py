"""Typer-based CLI for checking the job queue outside the HTTP service."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import typer
import uvicorn

from app.core.config import get_settings
from app.core.db import dispose_engine, get_session
from app.core.exceptions import StoreUnavailableError
from app.core.logging import get_logger, setup_logging
from app.models.health import DelayedJobsStatus
from app.services.health import build_delayed_jobs_status
from app.services.job_queue import JobQueueGateway, SqlAlchemyJobQueueGateway

cli = typer.Typer(help="Delayed job queue health utilities")

logger = get_logger(__name__)

EXIT_STORE_UNAVAILABLE = 1
EXIT_STALE_QUEUE = 2


@asynccontextmanager
async def open_gateway() -> AsyncIterator[JobQueueGateway]:
    """Yield a gateway over the configured store, disposing the engine afterwards."""

    try:
        async with get_session() as session:
            yield SqlAlchemyJobQueueGateway(session)
    finally:
        await dispose_engine()


async def _read_status() -> DelayedJobsStatus:
    async with open_gateway() as gateway:
        return await build_delayed_jobs_status(gateway)


def _oldest_age_seconds(oldest: datetime, now: datetime | None = None) -> float:
    if oldest.tzinfo is None:
        oldest = oldest.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    return (now - oldest).total_seconds()


@cli.callback()
def main() -> None:
    """Inspect the delayed jobs table."""

    setup_logging(get_settings().log_level, stream=sys.stderr)


@cli.command()
def check(
    max_age: Optional[float] = typer.Option(
        None,
        "--max-age",
        min=0,
        help="Exit with code 2 when the oldest pending job is older than this many seconds.",
    ),
) -> None:
    """Print the delayed jobs summary as JSON."""

    try:
        summary = asyncio.run(_read_status())
    except StoreUnavailableError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_STORE_UNAVAILABLE) from exc

    typer.echo(summary.model_dump_json(exclude_none=True))

    if max_age is not None and summary.oldest is not None:
        age = _oldest_age_seconds(summary.oldest)
        if age > max_age:
            logger.warning("delayed_jobs.stale", age_seconds=round(age, 3), max_age_seconds=max_age)
            typer.secho(
                f"Oldest pending job is {age:.0f}s old (limit {max_age:.0f}s).",
                fg=typer.colors.YELLOW,
                err=True,
            )
            raise typer.Exit(code=EXIT_STALE_QUEUE)


@cli.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind."),
    port: int = typer.Option(8000, "--port", "-p", help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes (development only)."),
) -> None:
    """Run the HTTP service."""

    typer.secho(f"Serving on http://{host}:{port}", fg=typer.colors.CYAN, err=True)
    # Logging is configured by the app lifespan.
    uvicorn.run("app.main:app", host=host, port=port, reload=reload, log_config=None)


if __name__ == "__main__":
    cli()
