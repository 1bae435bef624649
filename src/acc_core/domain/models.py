import dataclasses
from types import MappingProxyType
from typing import Tuple

from .enums import Status

Wheels = Tuple[float, float, float, float]

_NO_WHEELS: Wheels = (0.0, 0.0, 0.0, 0.0)


@dataclasses.dataclass(frozen=True)
class Hud:
    """
    HUD and session state of the player car. Updated once per game frame.
    Lap and sector times are expressed in milliseconds.
    """
    packet_id: int = 0
    status: int = Status.OFF
    session: int = -1
    completed_laps: int = 0
    position: int = 0
    current_time: int = 0
    last_time: int = 0
    best_time: int = 0
    session_time_left: float = 0.0
    distance_traveled: float = 0.0
    is_boxed: bool = False
    current_sector_index: int = 0
    last_sector_time: int = 0
    number_of_laps: int = 0
    tyre_compound: str = ""
    active_cars: int = 0
    penalty_time: float = 0.0
    flag: int = 0
    penalty: int = 0
    is_in_pit_lane: bool = False
    surface_grip: float = 0.0
    mandatory_pit_done: bool = False
    wind_speed: float = 0.0
    wind_direction: float = 0.0
    tc: int = 0
    tc_cut: int = 0
    engine_map: int = 0
    abs: int = 0
    fuel_per_lap: float = 0.0
    rain_light: int = 0
    flashing_lights: int = 0
    lights: int = 0
    wiper_level: int = 0
    total_time_left: int = 0
    stint_time_left: int = 0
    rain_tyres: bool = False
    session_index: int = 0
    fuel_used: float = 0.0
    delta: int = 0
    estimated_lap_time: int = 0
    is_delta_positive: bool = False
    last_split: int = 0
    is_valid_lap: bool = False
    estimated_laps_remaining: float = 0.0
    track_status: str = ""
    remaining_mandatory_pitstops: int = 0
    clock: float = 0.0
    left_indicator: bool = False
    right_indicator: bool = False
    global_yellow: bool = False
    yellow1: bool = False
    yellow2: bool = False
    yellow3: bool = False
    global_white: bool = False
    global_green: bool = False
    chequered: bool = False
    global_red: bool = False
    pit_stop_tyre_set: int = 0
    pit_stop_fuel: float = 0.0
    pit_stop_fl: float = 0.0
    pit_stop_fr: float = 0.0
    pit_stop_rl: float = 0.0
    pit_stop_rr: float = 0.0
    track_grip: int = 0
    rain_intensity_current: int = 0
    rain_intensity_10: int = 0
    rain_intensity_30: int = 0
    current_tyre_set: int = 0
    strategy_tyre_set: int = 0


@dataclasses.dataclass(frozen=True)
class Physics:
    """
    Physics state of the player car. Wheel tuples are ordered FL, FR, RL, RR;
    car damage is ordered front, rear, left, right, centre.
    """
    packet_id: int = 0
    accelerator: float = 0.0
    brake: float = 0.0
    fuel_remaining: float = 0.0
    gear: int = 0
    rpm: int = 0
    steering: float = 0.0
    speed: float = 0.0
    tyre_pressure: Wheels = _NO_WHEELS
    tyre_core_temp: Wheels = _NO_WHEELS
    suspension_travel: Wheels = _NO_WHEELS
    tc_intervention: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    car_damage: Tuple[float, float, float, float, float] = (0.0, 0.0, 0.0, 0.0, 0.0)
    pit_limiter: bool = False
    abs_intervention: float = 0.0
    boost_pressure: float = 0.0
    ambient_temp: float = 0.0
    track_temp: float = 0.0
    brake_temp: Wheels = _NO_WHEELS
    clutch: float = 0.0
    brake_bias: float = 0.0
    water_temp: float = 0.0
    brake_pressure: Wheels = _NO_WHEELS
    front_brake_compound: int = 0
    rear_brake_compound: int = 0
    pad_wear: Wheels = _NO_WHEELS
    disc_wear: Wheels = _NO_WHEELS
    ignition_on: bool = False
    starter_motor_on: bool = False
    engine_running: bool = False

    def in_car(self) -> bool:
        """
        The game zeroes tyre pressures and orientation while the player is in
        menus or spectating, so any zero among them means nobody is driving.
        """
        return all(self.tyre_pressure) and all((self.yaw, self.pitch, self.roll))


@dataclasses.dataclass(frozen=True)
class Properties:
    """
    Session-invariant data written once when the player joins a server.
    Any field difference means a new session or weekend began.
    """
    shared_mem_version: str = ""
    acc_version: str = ""
    sessions: int = 0
    cars: int = 0
    car_model: str = ""
    track: str = ""
    first_name: str = ""
    surname: str = ""
    nickname: str = ""
    sector_count: int = 0
    max_rpm: int = 0
    tank_capacity: float = 0.0
    penalties_enabled: bool = False
    fuel_rate: float = 0.0
    tyre_rate: float = 0.0
    damage_rate: float = 0.0
    track_configuration: str = ""
    pit_window_start: int = 0
    pit_window_end: int = 0
    is_multiplayer: bool = False
    dry_tyre_name: str = ""
    wet_tyre_name: str = ""


@dataclasses.dataclass(frozen=True)
class Snapshot:
    """One by-value copy of all three shared memory segments."""
    hud: Hud
    physics: Physics
    properties: Properties

    @property
    def is_live(self) -> bool:
        return self.hud.status == Status.LIVE and self.physics.in_car()


# Offset between the raw front brake bias and the value shown in the car,
# in tenths of a percent.
BRAKE_BIAS_OFFSETS = MappingProxyType({
    "amr_v12_vantage_gt3": -7,
    "audi_r8_lms": -14,
    "bentley_continental_gt3_2016": -7,
    "bentley_continental_gt3_2018": -7,
    "bmw_m6_gt3": -15,
    "jaguar_g3": -7,
    "ferrari_488_gt3": -17,
    "honda_nsx_gt3": -14,
    "lamborghini_gallardo_rex": -14,
    "lamborghini_huracan_gt3": -14,
    "lamborghini_huracan_st": -14,
    "lexus_rc_f_gt3": -14,
    "mclaren_650s_gt3": -17,
    "mercedes_amg_gt3": -14,
    "nissan_gt_r_gt3_2017": -15,
    "nissan_gt_r_gt3_2018": -15,
    "porsche_991_gt3_r": -21,
    "porsche_991ii_gt3_cup": -5,
    "amr_v8_vantage_gt3": -7,
    "audi_r8_lms_evo": -14,
    "honda_nsx_gt3_evo": -14,
    "lamborghini_huracan_gt3_evo": -14,
    "mclaren_720s_gt3": -17,
    "porsche_991ii_gt3_r": -21,
    "alpine_a110_gt4": -15,
    "amr_v8_vantage_gt4": -20,
    "audi_r8_gt4": -15,
    "bmw_m4_gt4": -22,
    "chevrolet_camaro_gt4r": -18,
    "ginetta_g55_gt4": -18,
    "ktm_xbow_gt4": -20,
    "maserati_mc_gt4": -15,
    "mclaren_570s_gt4": -9,
    "mercedes_amg_gt4": -20,
    "porsche_718_cayman_gt4_mr": -20,
    "ferrari_488_gt3_evo": -17,
    "mercedes_amg_gt3_evo": -14,
})


def displayed_brake_bias(raw_bias: float, car_model: str) -> float:
    """Front brake bias in percent as the car's display shows it."""
    return raw_bias * 100 + BRAKE_BIAS_OFFSETS.get(car_model, 0) / 10
