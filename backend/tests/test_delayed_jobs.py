from datetime import datetime, timedelta, timezone

import pytest

from .conftest import FakeJobQueueGateway


def test_empty_queue_returns_message_only(client_for) -> None:
    gateway = FakeJobQueueGateway(count=0)
    client = client_for(gateway)

    response = client.get("/delayed_jobs")

    assert response.status_code == 200
    assert response.json() == {"msg": "No delayed jobs found"}
    assert gateway.calls == ["count"]


def test_pending_jobs_report_count_and_oldest(client_for) -> None:
    oldest = datetime(2023, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    gateway = FakeJobQueueGateway(count=3, oldest=oldest)
    client = client_for(gateway)

    response = client.get("/delayed_jobs")

    assert response.status_code == 200
    assert response.json() == {"count": 3, "oldest": "2023-01-01T12:00:00.000Z"}
    assert gateway.calls == ["count", "oldest"]


def test_count_is_serialized_as_integer(client_for) -> None:
    client = client_for(FakeJobQueueGateway(count=10_000_000, oldest=datetime(2022, 6, 30, 8, 15)))

    response = client.get("/delayed_jobs")
    body = response.json()

    assert body["count"] == 10_000_000
    assert isinstance(body["count"], int)
    assert '"count":10000000' in response.text


def test_oldest_is_rendered_in_utc_with_milliseconds(client_for) -> None:
    local = timezone(timedelta(hours=2))
    oldest = datetime(2023, 3, 4, 10, 30, 15, 123456, tzinfo=local)
    client = client_for(FakeJobQueueGateway(count=1, oldest=oldest))

    body = client.get("/delayed_jobs").json()

    assert body["oldest"] == "2023-03-04T08:30:15.123Z"


def test_naive_oldest_is_treated_as_utc(client_for) -> None:
    client = client_for(FakeJobQueueGateway(count=2, oldest=datetime(2023, 1, 1, 12, 0, 0)))

    body = client.get("/delayed_jobs").json()

    assert body == {"count": 2, "oldest": "2023-01-01T12:00:00.000Z"}


def test_jobs_removed_between_reads_omit_oldest(client_for) -> None:
    client = client_for(FakeJobQueueGateway(count=1, oldest=None))

    body = client.get("/delayed_jobs").json()

    assert body == {"count": 1}


@pytest.mark.parametrize("fail_on", ["count", "oldest"])
def test_store_failure_returns_service_unavailable(client_for, fail_on: str) -> None:
    client = client_for(FakeJobQueueGateway(count=5, oldest=datetime(2023, 1, 1), fail_on=fail_on))

    response = client.get("/delayed_jobs")

    assert response.status_code == 503
    assert response.json() == {"detail": "Job queue store unavailable"}
