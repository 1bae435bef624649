"""
Section builders: pure functions of ``(current, previous)`` snapshots that
return the changed fields of one event section. ``previous`` is ``None`` in
complete mode, which makes every builder emit all of its fields.
"""
from typing import Any, Callable, Dict, Optional, Tuple

from ..domain.enums import (
    FLAG_TYPE,
    GAME_STATUS,
    PENALTY_TYPE,
    RAIN_INTENSITY,
    SESSION_TYPE,
    TRACK_GRIP,
)
from ..domain.models import Snapshot, displayed_brake_bias
from .field_diff import FieldDiff, attach, round3

Section = Dict[str, Any]
Builder = Callable[[Snapshot, Optional[Snapshot]], Section]


def laptimes(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    # the running lap time changes every frame
    diff.always_time(out, "current", "hud.current_time")
    diff.time(out, "last", "hud.last_time")
    diff.time(out, "best", "hud.best_time")
    diff.time(out, "estimated", "hud.estimated_lap_time")
    diff.time(out, "lastSplit", "hud.last_split")
    diff.integer(out, "delta", "hud.delta")
    diff.boolean(out, "isDeltaPositive", "hud.is_delta_positive")
    diff.boolean(out, "isValidLap", "hud.is_valid_lap")
    return out


def electronics(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.integer(out, "tc", "hud.tc")
    diff.integer(out, "tcCut", "hud.tc_cut")
    diff.integer(out, "engineMap", "hud.engine_map")
    diff.integer(out, "abs", "hud.abs")
    diff.integer(out, "lights", "hud.lights")
    diff.integer(out, "wiperLevel", "hud.wiper_level")
    diff.boolean(out, "rainLight", "hud.rain_light")
    diff.boolean(out, "flashingLights", "hud.flashing_lights")
    diff.boolean(out, "leftIndicator", "hud.left_indicator")
    diff.boolean(out, "rightIndicator", "hud.right_indicator")
    return out


def session(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.enum(out, "type", "hud.session", SESSION_TYPE)
    diff.integer(out, "index", "hud.session_index")
    diff.real(out, "sessionTimeLeft", "hud.session_time_left")
    diff.integer(out, "activeCars", "hud.active_cars")
    diff.real(out, "clock", "hud.clock")
    return out


def conditions(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.real(out, "surfaceGrip", "hud.surface_grip")
    diff.real(out, "windSpeed", "hud.wind_speed")
    diff.real(out, "windDirection", "hud.wind_direction")
    diff.enum(out, "track", "hud.track_grip", TRACK_GRIP)

    rain: Section = {}
    diff.enum(rain, "current", "hud.rain_intensity_current", RAIN_INTENSITY)
    diff.enum(rain, "in10", "hud.rain_intensity_10", RAIN_INTENSITY)
    diff.enum(rain, "in30", "hud.rain_intensity_30", RAIN_INTENSITY)
    attach(out, "rain", rain)
    return out


def pitstop(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.integer(out, "tyreSet", "hud.pit_stop_tyre_set")
    diff.real(out, "fuel", "hud.pit_stop_fuel")
    diff.integer(out, "remaining", "hud.remaining_mandatory_pitstops")
    attach(out, "pressure", diff.reals((
        ("fl", "hud.pit_stop_fl"),
        ("fr", "hud.pit_stop_fr"),
        ("rl", "hud.pit_stop_rl"),
        ("rr", "hud.pit_stop_rr"),
    )))
    return out


def penalty(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.enum(out, "type", "hud.penalty", PENALTY_TYPE)
    diff.real(out, "duration", "hud.penalty_time")
    return out


def driving_time(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.integer(out, "totalRemaining", "hud.total_time_left")
    diff.integer(out, "stintRemaining", "hud.stint_time_left")
    return out


def fuel(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.real(out, "remaining", "physics.fuel_remaining")
    diff.real(out, "used", "hud.fuel_used")
    diff.real(out, "rate", "hud.fuel_per_lap")
    diff.real(out, "estimatedLaps", "hud.estimated_laps_remaining")
    return out


def flag(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.enum(out, "current", "hud.flag", FLAG_TYPE)
    diff.boolean(out, "green", "hud.global_green")
    diff.boolean(out, "chequered", "hud.chequered")
    diff.boolean(out, "red", "hud.global_red")
    diff.boolean(out, "white", "hud.global_white")

    yellow: Section = {}
    diff.boolean(yellow, "global", "hud.global_yellow")
    diff.boolean(yellow, "sector1", "hud.yellow1")
    diff.boolean(yellow, "sector2", "hud.yellow2")
    diff.boolean(yellow, "sector3", "hud.yellow3")
    attach(out, "yellow", yellow)
    return out


def input_(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.real(out, "accelerator", "physics.accelerator")
    diff.real(out, "brake", "physics.brake")
    diff.real(out, "clutch", "physics.clutch")
    diff.real(out, "steeringAngle", "physics.steering")
    diff.boolean(out, "pitLimiter", "physics.pit_limiter")
    return out


def _brake_bias(snapshot: Snapshot) -> float:
    return displayed_brake_bias(snapshot.physics.brake_bias, snapshot.properties.car_model)


def brakes(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.computed(out, "bias", _brake_bias, round3)
    attach(out, "pressure", diff.wheels("physics.brake_pressure"))

    compound: Section = {}
    diff.integer(compound, "front", "physics.front_brake_compound")
    diff.integer(compound, "rear", "physics.rear_brake_compound")
    attach(out, "compound", compound)

    attach(out, "padWear", diff.wheels("physics.pad_wear"))
    attach(out, "discWear", diff.wheels("physics.disc_wear"))
    attach(out, "temp", diff.wheels("physics.brake_temp"))
    return out


def temperature(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    return diff.reals((
        ("ambient", "physics.ambient_temp"),
        ("track", "physics.track_temp"),
    ))


def motor(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.integer(out, "rpm", "physics.rpm")
    diff.real(out, "waterTemp", "physics.water_temp")
    diff.real(out, "boostPressure", "physics.boost_pressure")
    diff.boolean(out, "running", "physics.engine_running")
    diff.boolean(out, "starter", "physics.starter_motor_on")
    diff.boolean(out, "ignition", "physics.ignition_on")
    return out


def tyres(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    out: Section = {}
    attach(out, "pressure", diff.wheels("physics.tyre_pressure"))
    attach(out, "temp", diff.wheels("physics.tyre_core_temp"))
    return out


def angle(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    return diff.reals((
        ("pitch", "physics.pitch"),
        ("roll", "physics.roll"),
        ("yaw", "physics.yaw"),
    ))


def damage(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    diff = FieldDiff(current, previous)
    return diff.wheels("physics.car_damage", ("front", "rear", "left", "right", "centre"))


def suspension_travel(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    return FieldDiff(current, previous).wheels("physics.suspension_travel")


def root(current: Snapshot, previous: Optional[Snapshot]) -> Section:
    """Scalars published at the top level of the event rather than nested."""
    diff = FieldDiff(current, previous)
    out: Section = {}
    diff.text(out, "trackStatus", "hud.track_status")
    diff.text(out, "tyreCompound", "hud.tyre_compound")
    diff.integer(out, "position", "hud.position")
    diff.real(out, "distanceTraveled", "hud.distance_traveled")
    diff.enum(out, "gameStatus", "hud.status", GAME_STATUS)
    diff.integer(out, "laps", "hud.completed_laps")
    diff.boolean(out, "isBoxed", "hud.is_boxed")
    diff.boolean(out, "isInPitLane", "hud.is_in_pit_lane")
    diff.boolean(out, "mandatoryPitDone", "hud.mandatory_pit_done")
    diff.boolean(out, "rainTyres", "hud.rain_tyres")
    diff.real(out, "speed", "physics.speed")
    diff.integer(out, "gear", "physics.gear")
    diff.real(out, "tc", "physics.tc_intervention")
    diff.real(out, "abs", "physics.abs_intervention")
    return out


SECTIONS: Tuple[Tuple[str, Builder], ...] = (
    ("laptimes", laptimes),
    ("electronics", electronics),
    ("session", session),
    ("conditions", conditions),
    ("pitstop", pitstop),
    ("penalty", penalty),
    ("drivingTime", driving_time),
    ("fuel", fuel),
    ("flag", flag),
    ("input", input_),
    ("brakes", brakes),
    ("temp", temperature),
    ("motor", motor),
    ("tyres", tyres),
    ("angle", angle),
    ("damage", damage),
    ("suspensionTravel", suspension_travel),
)


def properties(current: Snapshot) -> Section:
    """Static session data. Only sent in complete mode, never diffed."""
    props = current.properties
    return {
        "sessions": props.sessions,
        "cars": props.cars,
        "sharedMemVer": props.shared_mem_version,
        "accVer": props.acc_version,
        "isMultiplayer": props.is_multiplayer,
        "player": {
            "firstname": props.first_name,
            "surname": props.surname,
            "nickname": props.nickname,
        },
        "car": {
            "model": props.car_model,
            "maxRPM": props.max_rpm,
            "tankCap": round3(props.tank_capacity),
        },
        "track": {
            "name": props.track,
            "configuration": props.track_configuration,
            "sectors": props.sector_count,
        },
        "pitWindow": {
            "start": props.pit_window_start,
            "end": props.pit_window_end,
        },
        "tyres": {
            "dry": props.dry_tyre_name,
            "wet": props.wet_tyre_name,
        },
        "rates": {
            "fuel": round3(props.fuel_rate),
            "tyre": round3(props.tyre_rate),
            "damage": round3(props.damage_rate),
        },
    }
