import dataclasses

import pytest

from acc_core.domain.enums import SessionType, Status
from acc_core.domain.models import Hud, Physics, Properties, Snapshot


def _live_hud() -> Hud:
    return Hud(
        packet_id=1200,
        status=Status.LIVE,
        session=SessionType.RACE,
        completed_laps=0,
        position=3,
        current_time=45250,
        last_time=92000,
        best_time=91500,
        session_time_left=1800000.0,
        distance_traveled=1520.5,
        current_sector_index=2,
        last_sector_time=61000,
        tyre_compound="dry_compound",
        active_cars=24,
        track_status="Optimum",
        session_index=1,
        fuel_used=3.25,
        fuel_per_lap=2.9,
        estimated_lap_time=92100,
        last_split=61000,
        delta=-120,
        estimated_laps_remaining=18.4,
        clock=46800.0,
        tc=3,
        engine_map=1,
        abs=2,
        wind_speed=2.5,
        wind_direction=1.2,
        pit_stop_fuel=40.0,
        pit_stop_fl=27.5,
        pit_stop_fr=27.5,
        pit_stop_rl=27.1,
        pit_stop_rr=27.1,
        track_grip=2,
        rain_intensity_current=0,
        is_valid_lap=True,
        global_green=True,
    )


def _live_physics() -> Physics:
    return Physics(
        packet_id=5400,
        accelerator=0.85,
        brake=0.0,
        fuel_remaining=54.321,
        gear=5,
        rpm=7100,
        steering=-0.05,
        speed=212.4567,
        tyre_pressure=(27.61, 27.58, 27.42, 27.4),
        tyre_core_temp=(84.2, 85.1, 80.3, 81.0),
        suspension_travel=(0.031, 0.032, 0.045, 0.044),
        yaw=1.57,
        pitch=0.012,
        roll=-0.004,
        brake_bias=0.68,
        ambient_temp=22.0,
        track_temp=31.5,
        brake_temp=(410.0, 412.0, 380.0, 381.0),
        brake_pressure=(0.0, 0.0, 0.0, 0.0),
        pad_wear=(29.0, 29.0, 29.0, 29.0),
        disc_wear=(32.0, 32.0, 32.0, 32.0),
        water_temp=88.0,
        ignition_on=True,
        engine_running=True,
    )


def _properties() -> Properties:
    return Properties(
        shared_mem_version="1.9",
        acc_version="1.9.8",
        sessions=3,
        cars=24,
        car_model="ferrari_488_gt3_evo",
        track="monza",
        first_name="Alex",
        surname="Driver",
        nickname="ADR",
        sector_count=3,
        max_rpm=7800,
        tank_capacity=120.0,
        pit_window_start=600000,
        pit_window_end=1200000,
        is_multiplayer=True,
        dry_tyre_name="DHF",
        wet_tyre_name="WH",
    )


def replace_snapshot(snapshot: Snapshot, hud=None, physics=None, properties=None) -> Snapshot:
    return Snapshot(
        hud=dataclasses.replace(snapshot.hud, **(hud or {})),
        physics=dataclasses.replace(snapshot.physics, **(physics or {})),
        properties=dataclasses.replace(snapshot.properties, **(properties or {})),
    )


@pytest.fixture
def snapshot() -> Snapshot:
    """A live, in-car snapshot with valid lap times."""
    return Snapshot(hud=_live_hud(), physics=_live_physics(), properties=_properties())


@pytest.fixture
def evolve():
    """Derive a snapshot from another one by overriding record fields."""
    return replace_snapshot


@pytest.fixture
def parked(snapshot, evolve) -> Snapshot:
    """The same session with the player back in the menus."""
    return evolve(snapshot, physics={"tyre_pressure": (0.0, 0.0, 0.0, 0.0), "yaw": 0.0, "pitch": 0.0, "roll": 0.0})
