from acc_core.application.session_monitor import SessionMonitor
from acc_core.domain.enums import Status
from acc_core.domain.events import PlayerEnteredCar, PlayerLeftCar, SessionChanged


def test_first_live_snapshot_reports_session_and_entry(snapshot):
    events = SessionMonitor().detect_events(snapshot)
    assert events == [
        SessionChanged(track="monza", car_model="ferrari_488_gt3_evo", sector_count=3),
        PlayerEnteredCar(session_index=1, track="monza", car_model="ferrari_488_gt3_evo"),
    ]


def test_steady_state_has_no_events(snapshot):
    monitor = SessionMonitor()
    monitor.detect_events(snapshot)
    assert monitor.detect_events(snapshot) == []


def test_leaving_and_returning_to_same_session(snapshot, parked):
    monitor = SessionMonitor()
    monitor.detect_events(snapshot)

    assert monitor.detect_events(parked) == [PlayerLeftCar(completed_laps=0)]
    assert monitor.detect_events(parked) == []
    assert monitor.detect_events(snapshot) == [
        PlayerEnteredCar(session_index=1, track="monza", car_model="ferrari_488_gt3_evo"),
    ]


def test_property_change_while_driving(snapshot, evolve):
    monitor = SessionMonitor()
    monitor.detect_events(snapshot)

    events = monitor.detect_events(evolve(snapshot, properties={"track": "spa", "sector_count": 3}))
    assert events == [SessionChanged(track="spa", car_model="ferrari_488_gt3_evo", sector_count=3)]


def test_not_live_snapshot_never_changes_session(parked):
    assert SessionMonitor().detect_events(parked) == []


def test_pause_keeps_the_player_in_the_car(snapshot, evolve):
    monitor = SessionMonitor()
    monitor.detect_events(snapshot)

    paused = evolve(snapshot, hud={"status": Status.PAUSE})
    assert paused.physics.in_car()
    assert monitor.detect_events(paused) == []
    assert monitor.detect_events(snapshot) == []
