import asyncio
from threading import Event, Lock, Thread
from typing import Callable, Optional

import structlog

from ..config import Settings
from ..domain.errors import EngineError
from ..domain.interfaces import IPublisher, ITelemetrySource, PublisherState, PublisherStatus
from ..infrastructure.http_publisher import AiohttpPublisher
from ..infrastructure.shared_memory import SharedMemorySource
from .sample_scheduler import SampleScheduler
from .snapshot_buffer import SnapshotBuffer

logger = structlog.get_logger()

SourceFactory = Callable[[], ITelemetrySource]
PublisherFactory = Callable[[str, str], IPublisher]


class RealCoreFacade:
    """
    Concrete implementation of the ICoreFacade.

    Runs the sample scheduler on a dedicated worker thread with its own event
    loop. The worker is the only owner of the memory source, the snapshot
    buffer and the sector tracker.
    """

    def __init__(
        self,
        settings: Settings,
        source_factory: Optional[SourceFactory] = None,
        publisher_factory: Optional[PublisherFactory] = None,
    ):
        self._settings = settings
        self._source_factory = source_factory or (lambda: SharedMemorySource(settings.memory).open())
        self._publisher_factory = publisher_factory or (
            lambda channel, password: AiohttpPublisher(settings.publisher, channel, password)
        )
        self._lock = Lock()
        self._ready = Event()
        self._stop_requested = Event()
        self._thread: Optional[Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._scheduler: Optional[SampleScheduler] = None
        self._state = PublisherState.IDLE
        self._channel: Optional[str] = None
        self._error: Optional[BaseException] = None

    def start_tracking(self, channel: str, password: str) -> None:
        with self._lock:
            if self.is_tracking():
                logger.warning("start_ignored_already_running", channel=self._channel)
                return

            logger.info("worker_starting", channel=channel)
            self._ready.clear()
            self._stop_requested.clear()
            self._error = None
            self._channel = channel
            self._state = PublisherState.STARTING
            self._thread = Thread(
                target=self._run_worker, args=(channel, password), name="acc-sampler", daemon=True
            )
            self._thread.start()

        if not self._ready.wait(timeout=self._settings.sampling.ready):
            logger.error("worker_not_ready", timeout=self._settings.sampling.ready)
            self.stop_tracking()
            raise EngineError("sampling worker did not become ready in time")

        if self._error is not None:
            raise self._error

    def stop_tracking(self) -> None:
        thread = self._thread
        if thread is None:
            return

        logger.info("worker_stopping")
        # seen by a worker that has not published its loop yet
        self._stop_requested.set()
        loop, scheduler = self._loop, self._scheduler
        if loop is not None and scheduler is not None and thread.is_alive():
            try:
                loop.call_soon_threadsafe(scheduler.stop)
            except RuntimeError:
                # loop already closed
                pass
        thread.join(timeout=self._settings.sampling.join)
        if thread.is_alive():
            logger.warning("worker_join_timeout", timeout=self._settings.sampling.join)
            return

        self._thread = None
        if self._state is not PublisherState.ERROR:
            self._state = PublisherState.IDLE
        logger.info("worker_stopped")

    def cleanup(self) -> None:
        logger.info("core_cleanup")
        self.stop_tracking()

    def is_tracking(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def status(self) -> PublisherStatus:
        stats = self._scheduler.stats if self._scheduler is not None else None
        return PublisherStatus(
            state=self._state,
            channel=self._channel,
            last_error=str(self._error) if self._error is not None else None,
            cycles=stats.cycles if stats else 0,
            overruns=stats.overruns if stats else 0,
        )

    def _run_worker(self, channel: str, password: str) -> None:
        try:
            asyncio.run(self._serve(channel, password))
        except EngineError as e:
            logger.error("worker_failed", error=str(e), error_type=type(e).__name__)
            self._error = e
            self._state = PublisherState.ERROR
        except Exception as e:
            logger.exception("worker_crashed", error=str(e))
            self._error = e
            self._state = PublisherState.ERROR
        else:
            self._state = PublisherState.IDLE
        finally:
            self._loop = None
            # unblock start_tracking if initialisation failed
            self._ready.set()

    async def _serve(self, channel: str, password: str) -> None:
        source = self._source_factory()
        try:
            async with self._publisher_factory(channel, password) as publisher:
                self._scheduler = SampleScheduler(SnapshotBuffer(source), publisher, self._settings.sampling)
                self._loop = asyncio.get_running_loop()
                if self._stop_requested.is_set():
                    logger.info("worker_start_abandoned", channel=channel)
                    return
                self._state = PublisherState.RUNNING
                self._ready.set()
                logger.info("worker_ready", channel=channel)
                await self._scheduler.run()
        finally:
            source.close()
