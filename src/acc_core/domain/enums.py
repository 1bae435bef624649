from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Type


class Status(IntEnum):
    """Game status as reported by the HUD segment."""
    OFF = 0
    REPLAY = 1
    LIVE = 2
    PAUSE = 3


class SessionType(IntEnum):
    UNKNOWN = -1
    PRACTICE = 0
    QUALIFY = 1
    RACE = 2
    HOTLAP = 3
    TIME_ATTACK = 4
    DRIFT = 5
    DRAG = 6
    HOTSTINT = 7
    SUPERPOLE = 8


class FlagType(IntEnum):
    NONE = 0
    BLUE = 1
    YELLOW = 2
    BLACK = 3
    WHITE = 4
    CHEQUERED = 5
    PENALTY = 6
    GREEN = 7
    ORANGE = 8


class PenaltyType(IntEnum):
    NONE = 0
    # track cutting
    CUTTING_DRIVE_THROUGH = 1
    CUTTING_STOP_GO_10 = 2
    CUTTING_STOP_GO_20 = 3
    CUTTING_STOP_GO_30 = 4
    CUTTING_DSQ = 5
    CUTTING_REMOVE_BEST_LAP = 6
    # pit lane speeding
    SPEEDING_DRIVE_THROUGH = 7
    SPEEDING_STOP_GO_10 = 8
    SPEEDING_STOP_GO_20 = 9
    SPEEDING_STOP_GO_30 = 10
    SPEEDING_DSQ = 11
    SPEEDING_REMOVE_BEST_LAP = 12
    MANDATORY_PIT_DSQ = 13
    POST_RACE_TIME = 14
    DSQ_TROLLING = 15
    DSQ_PIT_ENTRY = 16
    DSQ_PIT_EXIT = 17
    DSQ_WRONG_WAY = 18
    DRIVE_THROUGH_IGNORED_DRIVER_STINT = 19
    DSQ_IGNORED_DRIVER_STINT = 20
    DSQ_EXCEEDED_DRIVER_STINT = 21


class TrackGrip(IntEnum):
    GREEN = 0
    FAST = 1
    OPTIMUM = 2
    GREASY = 3
    DAMP = 4
    WET = 5
    FLOODED = 6


class RainIntensity(IntEnum):
    NONE = 0
    DRIZZLE = 1
    LIGHT = 2
    MEDIUM = 3
    HEAVY = 4
    THUNDERSTORM = 5


class Vocabulary:
    """
    Fixed translation of raw enum integers to the strings published on the wire.
    Values outside the table resolve to the fallback instead of raising.
    """

    def __init__(self, enum_cls: Type[IntEnum], names: Mapping[IntEnum, str], fallback: str):
        missing = set(enum_cls) - set(names)
        if missing:
            raise ValueError(f"vocabulary for {enum_cls.__name__} misses {sorted(missing)}")
        self._names = MappingProxyType({int(member): label for member, label in names.items()})
        self.fallback = fallback

    def __call__(self, raw: int) -> str:
        return self._names.get(int(raw), self.fallback)


GAME_STATUS = Vocabulary(Status, {
    Status.OFF: "Off",
    Status.REPLAY: "Replay",
    Status.LIVE: "Live",
    Status.PAUSE: "Pause",
}, fallback="Unknown")

SESSION_TYPE = Vocabulary(SessionType, {
    SessionType.UNKNOWN: "Unknown",
    SessionType.PRACTICE: "Practice",
    SessionType.QUALIFY: "Qualify",
    SessionType.RACE: "Race",
    SessionType.HOTLAP: "Hotlap",
    SessionType.TIME_ATTACK: "Time Attack",
    SessionType.DRIFT: "Drift",
    SessionType.DRAG: "Drag",
    SessionType.HOTSTINT: "Hotstint",
    SessionType.SUPERPOLE: "Superpole",
}, fallback="Unknown")

FLAG_TYPE = Vocabulary(FlagType, {
    FlagType.NONE: "None",
    FlagType.BLUE: "Blue",
    FlagType.YELLOW: "Yellow",
    FlagType.BLACK: "Black",
    FlagType.WHITE: "White",
    FlagType.CHEQUERED: "Chequered",
    FlagType.PENALTY: "Penalty",
    FlagType.GREEN: "Green",
    FlagType.ORANGE: "Orange",
}, fallback="None")

PENALTY_TYPE = Vocabulary(PenaltyType, {
    PenaltyType.NONE: "None",
    PenaltyType.CUTTING_DRIVE_THROUGH: "Cutting Drive Through",
    PenaltyType.CUTTING_STOP_GO_10: "Cutting Stop and Go 10",
    PenaltyType.CUTTING_STOP_GO_20: "Cutting Stop and Go 20",
    PenaltyType.CUTTING_STOP_GO_30: "Cutting Stop and Go 30",
    PenaltyType.CUTTING_DSQ: "Cutting Disqualified",
    PenaltyType.CUTTING_REMOVE_BEST_LAP: "Cutting Remove Best Lap",
    PenaltyType.SPEEDING_DRIVE_THROUGH: "Speeding Drive Through",
    PenaltyType.SPEEDING_STOP_GO_10: "Speeding Stop and Go 10",
    PenaltyType.SPEEDING_STOP_GO_20: "Speeding Stop and Go 20",
    PenaltyType.SPEEDING_STOP_GO_30: "Speeding Stop and Go 30",
    PenaltyType.SPEEDING_DSQ: "Speeding Disqualified",
    PenaltyType.SPEEDING_REMOVE_BEST_LAP: "Speeding Remove Best Lap",
    PenaltyType.MANDATORY_PIT_DSQ: "Mandatory Pit Disqualified",
    PenaltyType.POST_RACE_TIME: "Post Race Time",
    PenaltyType.DSQ_TROLLING: "Disqualified Trolling",
    PenaltyType.DSQ_PIT_ENTRY: "Disqualified Pit Entry",
    PenaltyType.DSQ_PIT_EXIT: "Disqualified Pit Exit",
    PenaltyType.DSQ_WRONG_WAY: "Disqualified Wrong Way",
    PenaltyType.DRIVE_THROUGH_IGNORED_DRIVER_STINT: "Drive Through Ignored Driver Stint",
    PenaltyType.DSQ_IGNORED_DRIVER_STINT: "Disqualified Ignored Driver Stint",
    PenaltyType.DSQ_EXCEEDED_DRIVER_STINT: "Disqualified Exceeded Driver Stint",
}, fallback="None")

TRACK_GRIP = Vocabulary(TrackGrip, {
    TrackGrip.GREEN: "Green",
    TrackGrip.FAST: "Fast",
    TrackGrip.OPTIMUM: "Optimum",
    TrackGrip.GREASY: "Greasy",
    TrackGrip.DAMP: "Damp",
    TrackGrip.WET: "Wet",
    TrackGrip.FLOODED: "Flooded",
}, fallback="Unknown")

RAIN_INTENSITY = Vocabulary(RainIntensity, {
    RainIntensity.NONE: "None",
    RainIntensity.DRIZZLE: "Drizzle",
    RainIntensity.LIGHT: "Light",
    RainIntensity.MEDIUM: "Medium",
    RainIntensity.HEAVY: "Heavy",
    RainIntensity.THUNDERSTORM: "Thunderstorm",
}, fallback="None")
