"""
Change-gated emission of record fields into event dictionaries.

A field is written when there is no previous record or when its encoded
value differs from the encoded previous value. Floats are rounded to three
decimals before both the comparison and the emission. Lap and sector times
holding the "no reading" sentinel are never written.
"""
from operator import attrgetter
from typing import Any, Callable, Dict, Optional, Sequence

Encoder = Callable[[Any], Any]

SENTINEL_TIME = 2 ** 31 - 1
MAX_VALID_TIME_MS = 600_000
WHEELS = ("fl", "fr", "rl", "rr")

ABSENT = object()


def round3(value: float) -> float:
    return round(float(value), 3)


def is_invalid_time(value: int) -> bool:
    return value == SENTINEL_TIME or value >= MAX_VALID_TIME_MS


def emit(out: Dict[str, Any], key: str, current: Any, previous: Any = ABSENT,
         encode: Optional[Encoder] = None) -> bool:
    value = encode(current) if encode else current
    if previous is not ABSENT:
        before = encode(previous) if encode else previous
        if before == value:
            return False
    out[key] = value
    return True


def attach(parent: Dict[str, Any], key: str, child: Dict[str, Any]) -> None:
    """Nest ``child`` under ``key`` unless it is empty."""
    if child:
        parent[key] = child


class FieldDiff:
    """
    Compares one attribute path of the current record against the previous
    record and emits it with the matching encoder. Paths may be dotted
    (``"hud.position"``) and may index into tuples.
    """

    def __init__(self, current: Any, previous: Optional[Any] = None):
        self._current = current
        self._previous = previous

    def _values(self, path: str, index: Optional[int]):
        get = attrgetter(path)
        current = get(self._current)
        previous = ABSENT if self._previous is None else get(self._previous)
        if index is not None:
            current = current[index]
            if previous is not ABSENT:
                previous = previous[index]
        return current, previous

    def value(self, out: Dict[str, Any], key: str, path: str, encode: Encoder,
              index: Optional[int] = None) -> bool:
        current, previous = self._values(path, index)
        return emit(out, key, current, previous, encode)

    def integer(self, out, key, path, index=None) -> bool:
        return self.value(out, key, path, int, index)

    def real(self, out, key, path, index=None) -> bool:
        return self.value(out, key, path, round3, index)

    def boolean(self, out, key, path, index=None) -> bool:
        return self.value(out, key, path, bool, index)

    def text(self, out, key, path) -> bool:
        return self.value(out, key, path, str)

    def enum(self, out, key, path, vocabulary: Encoder) -> bool:
        return self.value(out, key, path, vocabulary)

    def time(self, out, key, path) -> bool:
        current, previous = self._values(path, None)
        if is_invalid_time(current):
            return False
        return emit(out, key, int(current), previous, int)

    def always_time(self, out, key, path) -> bool:
        current, _ = self._values(path, None)
        if is_invalid_time(current):
            return False
        out[key] = int(current)
        return True

    def computed(self, out, key, derive: Callable[[Any], Any], encode: Encoder = round3) -> bool:
        """Emit a value derived from the whole record rather than one attribute."""
        current = derive(self._current)
        previous = ABSENT if self._previous is None else derive(self._previous)
        return emit(out, key, current, previous, encode)

    def wheels(self, path: str, keys: Sequence[str] = WHEELS) -> Dict[str, Any]:
        child: Dict[str, Any] = {}
        for index, key in enumerate(keys):
            self.real(child, key, path, index)
        return child

    def reals(self, pairs: Sequence[tuple]) -> Dict[str, Any]:
        child: Dict[str, Any] = {}
        for key, path in pairs:
            self.real(child, key, path)
        return child
