import asyncio
import dataclasses
import time
from typing import Callable, Optional

import structlog

from ..config import SamplingConfig
from ..domain.errors import Cancelled, OutOfMemory
from ..domain.events import PlayerEnteredCar, PlayerLeftCar, SessionChanged
from ..domain.interfaces import IPublisher
from .event_builder import EventBuilder, serialize
from .sector_tracker import SectorTracker
from .session_monitor import SessionMonitor
from .snapshot_buffer import SnapshotBuffer

logger = structlog.get_logger()


@dataclasses.dataclass
class SchedulerStats:
    cycles: int = 0
    complete_cycles: int = 0
    overruns: int = 0
    last_payload_bytes: int = 0


class SampleScheduler:
    """
    Drives the fixed-cadence sampling loop: capture, build, publish, commit,
    then sleep for whatever is left of the period.
    """
    def __init__(
        self,
        buffer: SnapshotBuffer,
        publisher: IPublisher,
        config: SamplingConfig,
        tracker: Optional[SectorTracker] = None,
        monitor: Optional[SessionMonitor] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._buffer = buffer
        self._publisher = publisher
        self._config = config
        self._tracker = tracker or SectorTracker()
        self._builder = EventBuilder(self._tracker)
        self._monitor = monitor or SessionMonitor()
        self._clock = clock
        self._stop_event = asyncio.Event()
        self._running = False
        self.stats = SchedulerStats()

    @property
    def tracker(self) -> SectorTracker:
        return self._tracker

    def is_running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask the loop to exit at its next checkpoint. Must run on the loop's thread."""
        self._stop_event.set()

    async def run(self) -> None:
        """
        Main run loop. Returns normally once stopped; engine errors propagate.
        """
        self._running = True
        logger.info("sample_scheduler_started", period=self._config.period)

        try:
            while self._running:
                self._checkpoint()
                started = self._clock()

                if not await self.run_cycle():
                    await self._sleep(self._config.idle)
                    continue

                remaining = self._config.period - (self._clock() - started)
                if remaining <= 0:
                    self.stats.overruns += 1
                    logger.warning("cycle_overrun", overrun=round(-remaining, 3), overruns=self.stats.overruns)
                    continue
                await self._sleep(remaining)

        except (Cancelled, asyncio.CancelledError):
            logger.info("sample_scheduler_cancelled")
        finally:
            self._running = False
            logger.info("sample_scheduler_stopped", cycles=self.stats.cycles, overruns=self.stats.overruns)

    async def run_cycle(self) -> bool:
        """
        Sample once and publish the resulting event.
        Returns False when the player is not driving and nothing was sent.
        """
        snapshot = self._buffer.capture()
        session_changed = False

        for event in self._monitor.detect_events(snapshot):
            if isinstance(event, PlayerLeftCar):
                logger.info("player_left_car", **dataclasses.asdict(event))
                self._buffer.reset()
            elif isinstance(event, SessionChanged):
                logger.info("session_changed", **dataclasses.asdict(event))
                self._tracker.set_sector_count(event.sector_count)
                session_changed = True
            elif isinstance(event, PlayerEnteredCar):
                logger.info("player_entered_car", **dataclasses.asdict(event))

        if not snapshot.is_live:
            return False

        previous = self._buffer.previous
        if session_changed:
            self._buffer.reset()
        complete = previous is None or session_changed

        try:
            event = self._builder.build(snapshot, previous, complete=complete)
            payload = serialize(event)
        except MemoryError as e:
            raise OutOfMemory("could not build telemetry event") from e

        await self._publisher.publish(payload)
        self._buffer.commit()

        self.stats.cycles += 1
        self.stats.last_payload_bytes = len(payload)
        if complete:
            self.stats.complete_cycles += 1
            logger.info("complete_event_published", bytes=len(payload))
        return True

    def _checkpoint(self) -> None:
        if self._stop_event.is_set():
            raise Cancelled()

    async def _sleep(self, seconds: float) -> None:
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return
        raise Cancelled()
