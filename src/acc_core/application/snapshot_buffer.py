from typing import Optional

import structlog

from ..domain.errors import OutOfMemory
from ..domain.interfaces import ITelemetrySource, Segment
from ..domain.models import Snapshot
from .frame_parser import FrameParser

logger = structlog.get_logger()


class SnapshotBuffer:
    """
    Holds the latest captured snapshot and the previously published one.

    ``capture`` copies every segment out of the live source in one pass each;
    ``commit`` promotes that capture to ``previous`` so the next delta is
    computed against exactly what was sent.
    """

    def __init__(self, source: ITelemetrySource, parser: type = FrameParser):
        self._source = source
        self._parser = parser
        self._current: Optional[Snapshot] = None
        self._previous: Optional[Snapshot] = None

    @property
    def current(self) -> Optional[Snapshot]:
        return self._current

    @property
    def previous(self) -> Optional[Snapshot]:
        return self._previous

    def capture(self) -> Snapshot:
        try:
            snapshot = Snapshot(
                hud=self._parser.parse_hud(self._source.read(Segment.HUD)),
                physics=self._parser.parse_physics(self._source.read(Segment.PHYSICS)),
                properties=self._parser.parse_properties(self._source.read(Segment.PROPERTIES)),
            )
        except MemoryError as e:
            raise OutOfMemory("could not copy shared memory") from e

        self._current = snapshot
        return snapshot

    def commit(self) -> None:
        """
        Make the last capture the previous snapshot. All or nothing: a failed
        capture leaves the existing previous snapshot in place.
        """
        snapshot = self._current if self._current is not None else self.capture()
        self._previous = snapshot

    def has_previous(self) -> bool:
        return self._previous is not None

    def reset(self) -> None:
        if self._previous is not None:
            logger.debug("snapshot_buffer_reset")
        self._previous = None
