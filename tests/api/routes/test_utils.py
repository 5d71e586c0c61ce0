from collections.abc import Generator
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from mongolink.api.deps import get_connection_manager
from mongolink.core.config import settings
from mongolink.core.connection import ConnectionManager, DatabaseConnectionError
from mongolink.main import app
from tests.utils.mongo import FakeOpener


@pytest.fixture
def opener() -> FakeOpener:
    return FakeOpener()


@pytest.fixture
def manager(opener: FakeOpener) -> Generator[ConnectionManager, None, None]:
    with patch("mongolink.core.connection.manager.open_client", opener):
        m = ConnectionManager("mongodb://db.example:27017", options={})
        app.dependency_overrides[get_connection_manager] = lambda: m
        yield m
    app.dependency_overrides.pop(get_connection_manager, None)


def test_liveness(client: TestClient) -> None:
    r = client.get(f"{settings.API_V1_STR}/utils/liveness/")
    assert r.status_code == 200
    assert r.json() is True


def test_health_check_ok(
    client: TestClient, manager: ConnectionManager, opener: FakeOpener
) -> None:
    r = client.get(f"{settings.API_V1_STR}/utils/health-check/")
    assert r.status_code == 200
    assert r.json() is True
    r = client.get(f"{settings.API_V1_STR}/utils/health-check/")
    assert r.status_code == 200
    assert len(opener.calls) == 1


def test_health_check_unavailable(client: TestClient, manager: ConnectionManager) -> None:
    with patch(
        "mongolink.core.connection.manager.open_client",
        FakeOpener(DatabaseConnectionError("refused")),
    ):
        r = client.get(f"{settings.API_V1_STR}/utils/health-check/")
    assert r.status_code == 503
    assert r.json() == {
        "success": False,
        "message": "Service Unavailable",
        "data": ["mongodb"],
    }


def test_connection_stats(client: TestClient, manager: ConnectionManager) -> None:
    r = client.get(f"{settings.API_V1_STR}/utils/connection/")
    assert r.status_code == 200
    assert r.json() == {"state": "empty", "connects": 0}

    client.get(f"{settings.API_V1_STR}/utils/health-check/")
    r = client.get(f"{settings.API_V1_STR}/utils/connection/")
    assert r.json() == {"state": "connected", "connects": 1}
