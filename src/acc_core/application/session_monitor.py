from typing import List, Optional

from ..domain.events import PlayerEnteredCar, PlayerLeftCar, SessionChanged
from ..domain.models import Properties, Snapshot


class SessionMonitor:
    """
    Detects driving and session transitions between consecutive captures.
    SRP: Handles only state detection logic.

    Being in the car is decided by the physics page alone; a paused game keeps
    the player seated and is not a transition.
    """
    def __init__(self):
        self._was_in_car = False
        self._properties: Optional[Properties] = None

    def detect_events(self, snapshot: Snapshot) -> List:
        """
        Check for state transitions based on the current capture.
        Returns a list of domain events in the order they happened.
        """
        events = []
        in_car = snapshot.physics.in_car()

        # Driving -> menus/replay/spectating
        if self._was_in_car and not in_car:
            events.append(PlayerLeftCar(completed_laps=snapshot.hud.completed_laps))

        # Static data is only trusted while the session is running
        if snapshot.is_live and snapshot.properties != self._properties:
            props = snapshot.properties
            events.append(SessionChanged(
                track=props.track,
                car_model=props.car_model,
                sector_count=props.sector_count,
            ))
            self._properties = props

        if in_car and not self._was_in_car:
            events.append(PlayerEnteredCar(
                session_index=snapshot.hud.session_index,
                track=snapshot.properties.track,
                car_model=snapshot.properties.car_model,
            ))

        self._was_in_car = in_car
        return events
