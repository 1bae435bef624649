import math
from typing import Any, Dict, Optional

import orjson
import structlog

from ..domain.models import Snapshot
from .field_diff import attach, is_invalid_time
from .sections import SECTIONS, properties, root
from .sector_tracker import SectorTracker

logger = structlog.get_logger()

Event = Dict[str, Any]


def is_new_session(current: Snapshot, previous: Snapshot) -> bool:
    return (
        current.hud.session_index != previous.hud.session_index
        or current.properties.track != previous.properties.track
        or current.properties.car_model != previous.properties.car_model
    )


class EventBuilder:
    """
    Assembles one event from the section builders and feeds sector boundaries
    into the tracker.
    """

    def __init__(self, tracker: SectorTracker):
        self._tracker = tracker

    def build(self, current: Snapshot, previous: Optional[Snapshot], complete: bool = False) -> Event:
        baseline = None if complete else previous
        event: Event = root(current, baseline)
        for key, builder in SECTIONS:
            attach(event, key, builder(current, baseline))

        if complete:
            event["properties"] = properties(current)

        if previous is None:
            return event

        if is_new_session(current, previous):
            event["newSession"] = True
            self._tracker.reset()
        elif not complete:
            self._previous_sector(event, current, previous)
        return event

    def _previous_sector(self, event: Event, current: Snapshot, previous: Snapshot) -> None:
        index = previous.hud.current_sector_index
        if index < 0 or index == current.hud.current_sector_index:
            return

        if current.hud.completed_laps > previous.hud.completed_laps:
            # final sector comes from the lap total; reset only after recording it
            duration = self._tracker.record(index, current.hud.last_time)
            self._tracker.reset()
        else:
            duration = self._tracker.record(index, current.hud.last_sector_time)

        if duration is None or duration < 0 or is_invalid_time(duration):
            return

        logger.debug("sector_completed", sector=index, duration=duration)
        event.setdefault("laptimes", {})["prevSector"] = duration


def _fixed_point(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _fixed_point(item) for key, item in value.items()}
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        # adding 0.0 turns a rounded -0.0 into 0.0
        return orjson.Fragment(f"{round(value, 3) + 0.0:.3f}")
    return value


def serialize(event: Event) -> bytes:
    """Encode an event as UTF-8 JSON with every float written to three decimals."""
    return orjson.dumps(_fixed_point(event))
