import dataclasses


@dataclasses.dataclass(frozen=True)
class PlayerEnteredCar:
    """
    Event triggered when the game goes live with the player driving.
    """
    session_index: int
    track: str
    car_model: str


@dataclasses.dataclass(frozen=True)
class PlayerLeftCar:
    """
    Event triggered when the player stops driving (menus, replay, spectating).
    """
    completed_laps: int


@dataclasses.dataclass(frozen=True)
class SessionChanged:
    """
    Event triggered when the static properties differ from the last known ones.
    """
    track: str
    car_model: str
    sector_count: int
