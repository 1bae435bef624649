import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from acc_core.api.server import create_app
from acc_core.domain.errors import EngineError, ServerError, SourceUnavailable, TransportError
from acc_core.domain.interfaces import Channel, ICoreFacade, PublisherState, PublisherStatus


@pytest.fixture
def mock_facade():
    facade = MagicMock(spec=ICoreFacade)
    facade.is_tracking.return_value = False
    facade.status.return_value = PublisherStatus(state=PublisherState.IDLE)
    return facade


@pytest.fixture
def mock_directory():
    directory = MagicMock()
    directory.list_channels = AsyncMock(return_value=[Channel(id="a1", name="Endurance")])
    directory.login = AsyncMock()
    directory.close = AsyncMock()
    return directory


@pytest.fixture
def client(mock_facade, mock_directory):
    with TestClient(create_app(mock_facade, mock_directory)) as client:
        yield client


def start(client, channel="a1", password="pw"):
    return client.post("/publisher/start", json={"channel": channel, "password": password})


def test_start_logs_in_and_starts(client, mock_facade, mock_directory):
    response = start(client)

    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Publisher started"}
    mock_directory.login.assert_awaited_once_with("a1", "pw")
    mock_facade.start_tracking.assert_called_once_with("a1", "pw")


def test_start_when_running_is_noop(client, mock_facade, mock_directory):
    mock_facade.is_tracking.return_value = True

    response = start(client)

    assert response.json()["status"] == "noop"
    mock_directory.login.assert_not_awaited()
    mock_facade.start_tracking.assert_not_called()


def test_start_rejects_empty_channel(client, mock_facade):
    response = start(client, channel="")
    assert response.status_code == 422
    mock_facade.start_tracking.assert_not_called()


def test_start_with_wrong_password(client, mock_facade, mock_directory):
    mock_directory.login.side_effect = ServerError(403, "forbidden")

    response = start(client)

    assert response.status_code == 401
    mock_facade.start_tracking.assert_not_called()


def test_start_with_unreachable_server(client, mock_directory):
    mock_directory.login.side_effect = TransportError("connection refused")
    assert start(client).status_code == 502


def test_start_without_shared_memory(client, mock_facade):
    mock_facade.start_tracking.side_effect = SourceUnavailable("not on Windows")
    assert start(client).status_code == 503


def test_start_worker_failure(client, mock_facade):
    mock_facade.start_tracking.side_effect = EngineError("not ready")
    assert start(client).status_code == 500


def test_stop_when_running(client, mock_facade):
    mock_facade.is_tracking.return_value = True

    response = client.post("/publisher/stop")

    assert response.json() == {"status": "success", "message": "Publisher stopped"}
    mock_facade.stop_tracking.assert_called_once()


def test_stop_when_idle_is_noop(client, mock_facade):
    assert client.post("/publisher/stop").json()["status"] == "noop"
    mock_facade.stop_tracking.assert_not_called()


def test_status(client, mock_facade):
    mock_facade.status.return_value = PublisherStatus(
        state=PublisherState.RUNNING, channel="a1", cycles=12, overruns=1
    )

    assert client.get("/publisher/status").json() == {
        "state": "running",
        "channel": "a1",
        "last_error": None,
        "cycles": 12,
        "overruns": 1,
    }


def test_list_channels(client):
    assert client.get("/channels").json() == {"channels": [{"id": "a1", "name": "Endurance"}]}


def test_list_channels_upstream_failure(client, mock_directory):
    mock_directory.list_channels.side_effect = ServerError(404, "missing")
    assert client.get("/channels").status_code == 404


def test_shutdown_closes_directory(mock_facade, mock_directory):
    with TestClient(create_app(mock_facade, mock_directory)):
        pass
    mock_directory.close.assert_awaited_once()
