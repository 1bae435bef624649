class EngineError(Exception):
    """
    Base class for failures that stop the sampling engine.
    """


class OutOfMemory(EngineError):
    """Allocation failed while copying a snapshot or building an event."""


class SourceUnavailable(EngineError):
    """A shared memory segment could not be opened or read."""


class TransportError(EngineError):
    """The publish request never produced an HTTP response (connection, timeout)."""


class ServerError(EngineError):
    """The server answered with an HTTP error status."""

    def __init__(self, status: int, body: str = ""):
        super().__init__(f"server responded with {status}: {body}")
        self.status = status
        self.body = body


class Cancelled(EngineError):
    """Raised at a checkpoint once the controller asked the worker to stop."""
