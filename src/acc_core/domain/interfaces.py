from enum import Enum
from typing import List, Optional, Protocol

import dataclasses


class Segment(str, Enum):
    """Shared memory segments written by the game."""
    HUD = "hud"
    PHYSICS = "physics"
    PROPERTIES = "properties"


@dataclasses.dataclass(frozen=True)
class Channel:
    id: str
    name: str


class ITelemetrySource(Protocol):
    """
    Interface for reading raw shared memory segments.
    Read-Only (ISP).
    """
    def read(self, segment: Segment) -> bytes:
        """
        Return a single-pass copy of the segment's fixed-size layout.
        """
        ...

    def close(self) -> None:
        ...


class IPublisher(Protocol):
    """
    Interface for delivering serialized events.
    """
    async def publish(self, payload: bytes) -> None:
        """
        Deliver one event. Raises TransportError or ServerError on failure.
        """
        ...


class IChannelDirectory(Protocol):
    """
    Interface for browsing and unlocking publish channels.
    """
    async def list_channels(self) -> List[Channel]:
        ...

    async def login(self, channel: str, password: str) -> None:
        """
        Verify the channel password. Raises ServerError when rejected.
        """
        ...

    async def close(self) -> None:
        ...


class ICoreFacade(Protocol):
    """
    Interface for controlling the sampling worker.
    Decouples the control API from the threading details.
    """
    def start_tracking(self, channel: str, password: str) -> None:
        """Starts sampling and publishing to the given channel."""
        ...

    def stop_tracking(self) -> None:
        """Stops the worker and waits for it to exit."""
        ...

    def cleanup(self) -> None:
        """Performs cleanup operations for graceful shutdown."""
        ...

    def is_tracking(self) -> bool:
        """Returns True while the worker is running."""
        ...

    def status(self) -> "PublisherStatus":
        ...


class PublisherState(Enum):
    """
    Lifecycle of the sampling worker.
    """
    IDLE = "idle"          # Worker not started or stopped cleanly
    STARTING = "starting"  # Thread spawned, waiting for the ready signal
    RUNNING = "running"    # Sampling loop active
    ERROR = "error"        # Worker exited with an engine error


@dataclasses.dataclass(frozen=True)
class PublisherStatus:
    state: PublisherState
    channel: Optional[str] = None
    last_error: Optional[str] = None
    cycles: int = 0
    overruns: int = 0
