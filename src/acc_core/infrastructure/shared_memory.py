import mmap
import sys
from typing import Dict, Tuple

import structlog

from ..config import MemoryConfig
from ..domain.errors import SourceUnavailable
from ..domain.interfaces import Segment
from .layouts import GRAPHICS_SIZE, PHYSICS_SIZE, STATIC_SIZE

logger = structlog.get_logger()


class SharedMemorySource:
    """
    Read-only view of the named shared memory pages ACC publishes on Windows.
    """

    def __init__(self, config: MemoryConfig):
        self._layout: Dict[Segment, Tuple[str, int]] = {
            Segment.HUD: (config.graphics, GRAPHICS_SIZE),
            Segment.PHYSICS: (config.physics, PHYSICS_SIZE),
            Segment.PROPERTIES: (config.static, STATIC_SIZE),
        }
        self._maps: Dict[Segment, mmap.mmap] = {}

    def open(self) -> "SharedMemorySource":
        if sys.platform != "win32":
            raise SourceUnavailable("ACC shared memory is only published on Windows")

        for segment, (name, size) in self._layout.items():
            try:
                self._maps[segment] = mmap.mmap(0, size, tagname=name, access=mmap.ACCESS_READ)
            except OSError as e:
                self.close()
                raise SourceUnavailable(f"could not map {name}: {e}") from e
        logger.info("shared_memory_opened", segments=[name for name, _ in self._layout.values()])
        return self

    def read(self, segment: Segment) -> bytes:
        view = self._maps.get(segment)
        if view is None:
            raise SourceUnavailable(f"segment {segment.value} is not mapped")
        # slicing copies the whole page in one pass
        return view[:]

    def close(self) -> None:
        for view in self._maps.values():
            view.close()
        self._maps.clear()
