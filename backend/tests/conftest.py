from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime

import pytest
import structlog
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api import deps
from app.core.exceptions import StoreUnavailableError
from app.main import create_app


class FakeJobQueueGateway:
    """Gateway stub returning fixed values and recording which reads ran."""

    def __init__(
        self,
        count: int = 0,
        oldest: datetime | None = None,
        fail_on: str | None = None,
    ) -> None:
        self._count = count
        self._oldest = oldest
        self._fail_on = fail_on
        self.calls: list[str] = []

    async def count(self) -> int:
        self.calls.append("count")
        if self._fail_on == "count":
            raise StoreUnavailableError("count", "connection refused")
        return self._count

    async def oldest(self) -> datetime | None:
        self.calls.append("oldest")
        if self._fail_on == "oldest":
            raise StoreUnavailableError("oldest", "connection refused")
        return self._oldest


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Put back the root logging handlers that setup_logging replaces."""

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()

@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest.fixture
def client_for(app: FastAPI) -> Iterator:
    """Build a client whose job-queue gateway is the given fake."""

    def _build(gateway: FakeJobQueueGateway) -> TestClient:
        app.dependency_overrides[deps.get_job_queue_gateway] = lambda: gateway
        return TestClient(app)

    yield _build
    app.dependency_overrides.clear()
