from typing import List, Optional

import structlog

logger = structlog.get_logger()

DEFAULT_SECTOR_COUNT = 3


class SectorTracker:
    """
    Turns cumulative sector readings into per-sector durations.

    ``sector_times[i]`` for ``i < cursor`` holds the duration of sector ``i``;
    a reading taken at the end of sector ``cursor`` is the time since the lap
    started, so the new duration is the reading minus all stored durations.
    """

    def __init__(self, sector_count: int = DEFAULT_SECTOR_COUNT):
        self._times: List[int] = []
        self._cursor = 0
        self.set_sector_count(sector_count)

    @property
    def sector_count(self) -> int:
        return len(self._times)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def sector_times(self) -> List[int]:
        return list(self._times)

    @property
    def lap_complete(self) -> bool:
        return self._cursor == len(self._times)

    def set_sector_count(self, count: int) -> None:
        """Resize the storage for a new track layout and start over."""
        if count <= 0:
            logger.warning("invalid_sector_count", count=count, fallback=DEFAULT_SECTOR_COUNT)
            count = DEFAULT_SECTOR_COUNT
        self._times = [0] * count
        self._cursor = 0

    def reset(self) -> None:
        self._times = [0] * len(self._times)
        self._cursor = 0

    def add_sector(self, reading: int) -> int:
        if self.lap_complete:
            # lap boundary was never observed
            self.reset()
        duration = reading - sum(self._times[:self._cursor])
        self._times[self._cursor] = duration
        self._cursor += 1
        return duration

    def record(self, index: int, reading: int) -> Optional[int]:
        """
        Record the end of sector ``index``. Returns its duration, or ``None``
        when the tracker had to resynchronise because it missed earlier
        boundaries (joined mid-lap, sector count changed).
        """
        if not 0 <= index < len(self._times):
            logger.warning("sector_index_out_of_range", index=index, sector_count=len(self._times))
            return None

        if index != self._cursor:
            logger.info("sector_tracker_resync", index=index, cursor=self._cursor)
            self.reset()
            # the cumulative reading stands in for the unknown earlier sectors
            self._times[index] = reading
            self._cursor = index + 1
            # a first sector reading is its own duration
            return reading if index == 0 else None

        return self.add_sector(reading)
