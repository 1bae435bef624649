import threading
from unittest.mock import MagicMock

import pytest

from acc_core.application.core_facade import RealCoreFacade
from acc_core.config import SamplingConfig, Settings
from acc_core.domain.enums import Status
from acc_core.domain.errors import EngineError, SourceUnavailable
from acc_core.domain.interfaces import ITelemetrySource, PublisherState, Segment
from acc_core.infrastructure.layouts import (
    GRAPHICS_SIZE,
    PHYSICS_SIZE,
    STATIC_SIZE,
    GraphicsPage,
    PhysicsPage,
    StaticPage,
)

PAGE_SIZES = {
    Segment.HUD: GRAPHICS_SIZE,
    Segment.PHYSICS: PHYSICS_SIZE,
    Segment.PROPERTIES: STATIC_SIZE,
}


class FakePublisher:
    def __init__(self):
        self.payloads = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True

    async def publish(self, payload: bytes) -> None:
        self.payloads.append(payload)


@pytest.fixture
def settings():
    return Settings(sampling=SamplingConfig(period=0.05, idle=0.05, ready=2.0, join=2.0))


@pytest.fixture
def source():
    # zeroed pages: the game is off, so the worker idles
    mock = MagicMock(spec=ITelemetrySource)
    mock.read.side_effect = lambda segment: bytes(PAGE_SIZES[segment])
    return mock


@pytest.fixture
def publisher():
    return FakePublisher()


@pytest.fixture
def facade(settings, source, publisher):
    facade = RealCoreFacade(
        settings,
        source_factory=lambda: source,
        publisher_factory=lambda channel, password: publisher,
    )
    yield facade
    facade.cleanup()


def test_start_and_stop(facade, source, publisher):
    facade.start_tracking("chan-1", "pw")

    assert facade.is_tracking()
    status = facade.status()
    assert status.state == PublisherState.RUNNING
    assert status.channel == "chan-1"

    facade.stop_tracking()

    assert not facade.is_tracking()
    assert facade.status().state == PublisherState.IDLE
    assert publisher.payloads == []
    assert publisher.closed
    source.close.assert_called_once()


def test_start_twice_is_ignored(facade):
    facade.start_tracking("chan-1", "pw")
    thread = facade._thread

    facade.start_tracking("chan-2", "pw")

    assert facade._thread is thread
    assert facade.status().channel == "chan-1"


def test_stop_without_start_is_noop(facade):
    facade.stop_tracking()
    assert facade.status().state == PublisherState.IDLE


def test_unavailable_source_fails_start(settings, publisher):
    def unavailable():
        raise SourceUnavailable("ACC shared memory is only published on Windows")

    facade = RealCoreFacade(
        settings,
        source_factory=unavailable,
        publisher_factory=lambda channel, password: publisher,
    )

    with pytest.raises(SourceUnavailable):
        facade.start_tracking("chan-1", "pw")

    status = facade.status()
    assert status.state == PublisherState.ERROR
    assert "Windows" in status.last_error
    facade.cleanup()
    assert not facade.is_tracking()


def live_pages():
    hud = GraphicsPage()
    hud.status = Status.LIVE
    physics = PhysicsPage()
    physics.tyre_pressure[:] = [27.5, 27.5, 27.2, 27.2]
    physics.yaw, physics.pitch, physics.roll = 1.5, 0.01, 0.01
    static = StaticPage()
    static.sector_count = 3
    return {
        Segment.HUD: bytes(hud),
        Segment.PHYSICS: bytes(physics),
        Segment.PROPERTIES: bytes(static),
    }


def test_worker_that_misses_the_ready_deadline_never_publishes(publisher):
    settings = Settings(sampling=SamplingConfig(period=0.05, idle=0.05, ready=0.1, join=0.1))
    pages = live_pages()
    gate = threading.Event()
    source = MagicMock(spec=ITelemetrySource)
    source.read.side_effect = lambda segment: pages[segment]

    def slow_source():
        gate.wait(timeout=5.0)
        return source

    facade = RealCoreFacade(
        settings,
        source_factory=slow_source,
        publisher_factory=lambda channel, password: publisher,
    )

    with pytest.raises(EngineError):
        facade.start_tracking("chan-1", "pw")

    # initialisation finishes after start_tracking gave up
    gate.set()
    facade._thread.join(timeout=2.0)

    assert not facade.is_tracking()
    assert publisher.payloads == []
    assert facade.status().state == PublisherState.IDLE
    source.close.assert_called_once()
    facade.cleanup()
