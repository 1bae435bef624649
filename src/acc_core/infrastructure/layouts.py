"""
ctypes mirrors of the three ACC shared memory pages.

Field order and types follow the game's SPageFileGraphic, SPageFilePhysics
and SPageFileStatic structures. ``wchar_t`` is two bytes on Windows, so text
fields are declared as ``c_uint16`` arrays and decoded as UTF-16-LE by the
frame parser. Field names match the attribute names of the domain records
wherever a value is carried over.
"""
import ctypes as ct

WCHAR = ct.c_uint16
WHEELS = ct.c_float * 4
VECTOR = ct.c_float * 3


class GraphicsPage(ct.Structure):
    _fields_ = [
        ("packet_id", ct.c_int),
        ("status", ct.c_int),
        ("session", ct.c_int),
        ("str_current_time", WCHAR * 15),
        ("str_last_time", WCHAR * 15),
        ("str_best_time", WCHAR * 15),
        ("str_split", WCHAR * 15),
        ("completed_laps", ct.c_int),
        ("position", ct.c_int),
        ("current_time", ct.c_int),
        ("last_time", ct.c_int),
        ("best_time", ct.c_int),
        ("session_time_left", ct.c_float),
        ("distance_traveled", ct.c_float),
        ("is_boxed", ct.c_int),
        ("current_sector_index", ct.c_int),
        ("last_sector_time", ct.c_int),
        ("number_of_laps", ct.c_int),
        ("tyre_compound", WCHAR * 33),
        ("replay_time_multiplier", ct.c_float),
        ("normalized_car_position", ct.c_float),
        ("active_cars", ct.c_int),
        ("car_coordinates", VECTOR * 60),
        ("car_id", ct.c_int * 60),
        ("player_car_id", ct.c_int),
        ("penalty_time", ct.c_float),
        ("flag", ct.c_int),
        ("penalty", ct.c_int),
        ("ideal_line_on", ct.c_int),
        ("is_in_pit_lane", ct.c_int),
        ("surface_grip", ct.c_float),
        ("mandatory_pit_done", ct.c_int),
        ("wind_speed", ct.c_float),
        ("wind_direction", ct.c_float),
        ("is_setup_menu_visible", ct.c_int),
        ("main_display_index", ct.c_int),
        ("secondary_display_index", ct.c_int),
        ("tc", ct.c_int),
        ("tc_cut", ct.c_int),
        ("engine_map", ct.c_int),
        ("abs", ct.c_int),
        ("fuel_per_lap", ct.c_float),
        ("rain_light", ct.c_int),
        ("flashing_lights", ct.c_int),
        ("lights", ct.c_int),
        ("exhaust_temperature", ct.c_float),
        ("wiper_level", ct.c_int),
        ("total_time_left", ct.c_int),
        ("stint_time_left", ct.c_int),
        ("rain_tyres", ct.c_int),
        ("session_index", ct.c_int),
        ("fuel_used", ct.c_float),
        ("str_delta", WCHAR * 15),
        ("delta", ct.c_int),
        ("str_estimated_lap", WCHAR * 15),
        ("estimated_lap_time", ct.c_int),
        ("is_delta_positive", ct.c_int),
        ("last_split", ct.c_int),
        ("is_valid_lap", ct.c_int),
        ("estimated_laps_remaining", ct.c_float),
        ("track_status", WCHAR * 33),
        ("remaining_mandatory_pitstops", ct.c_int),
        ("clock", ct.c_float),
        ("left_indicator", ct.c_int),
        ("right_indicator", ct.c_int),
        ("global_yellow", ct.c_int),
        ("yellow1", ct.c_int),
        ("yellow2", ct.c_int),
        ("yellow3", ct.c_int),
        ("global_white", ct.c_int),
        ("global_green", ct.c_int),
        ("chequered", ct.c_int),
        ("global_red", ct.c_int),
        ("pit_stop_tyre_set", ct.c_int),
        ("pit_stop_fuel", ct.c_float),
        ("pit_stop_fl", ct.c_float),
        ("pit_stop_fr", ct.c_float),
        ("pit_stop_rl", ct.c_float),
        ("pit_stop_rr", ct.c_float),
        ("track_grip", ct.c_int),
        ("rain_intensity_current", ct.c_int),
        ("rain_intensity_10", ct.c_int),
        ("rain_intensity_30", ct.c_int),
        ("current_tyre_set", ct.c_int),
        ("strategy_tyre_set", ct.c_int),
    ]


class PhysicsPage(ct.Structure):
    _fields_ = [
        ("packet_id", ct.c_int),
        ("accelerator", ct.c_float),
        ("brake", ct.c_float),
        ("fuel_remaining", ct.c_float),
        ("gear", ct.c_int),
        ("rpm", ct.c_int),
        ("steering", ct.c_float),
        ("speed", ct.c_float),
        ("velocity", VECTOR),
        ("acceleration", VECTOR),
        ("wheel_slip", WHEELS),
        ("wheel_load", WHEELS),
        ("tyre_pressure", WHEELS),
        ("wheel_angular_speed", WHEELS),
        ("tyre_wear", WHEELS),
        ("tyre_dirty_level", WHEELS),
        ("tyre_core_temp", WHEELS),
        ("camber_rad", WHEELS),
        ("suspension_travel", WHEELS),
        ("drs", ct.c_float),
        ("tc_intervention", ct.c_float),
        ("yaw", ct.c_float),
        ("pitch", ct.c_float),
        ("roll", ct.c_float),
        ("cg_height", ct.c_float),
        ("car_damage", ct.c_float * 5),
        ("number_of_tyres_out", ct.c_int),
        ("pit_limiter", ct.c_int),
        ("abs_intervention", ct.c_float),
        ("kers_charge", ct.c_float),
        ("kers_input", ct.c_float),
        ("auto_shifter_on", ct.c_int),
        ("ride_height", ct.c_float * 2),
        ("boost_pressure", ct.c_float),
        ("ballast", ct.c_float),
        ("air_density", ct.c_float),
        ("ambient_temp", ct.c_float),
        ("track_temp", ct.c_float),
        ("local_angular_velocity", VECTOR),
        ("final_ff", ct.c_float),
        ("performance_meter", ct.c_float),
        ("engine_brake", ct.c_int),
        ("ers_recovery_level", ct.c_int),
        ("ers_power_level", ct.c_int),
        ("ers_heat_charging", ct.c_int),
        ("ers_is_charging", ct.c_int),
        ("kers_current_kj", ct.c_float),
        ("drs_available", ct.c_int),
        ("drs_enabled", ct.c_int),
        ("brake_temp", WHEELS),
        ("clutch", ct.c_float),
        ("tyre_temp_inner", WHEELS),
        ("tyre_temp_middle", WHEELS),
        ("tyre_temp_outer", WHEELS),
        ("is_ai_controlled", ct.c_int),
        ("tyre_contact_point", VECTOR * 4),
        ("tyre_contact_normal", VECTOR * 4),
        ("tyre_contact_heading", VECTOR * 4),
        ("brake_bias", ct.c_float),
        ("local_velocity", VECTOR),
        ("p2p_activations", ct.c_int),
        ("p2p_status", ct.c_int),
        ("current_max_rpm", ct.c_float),
        ("mz", WHEELS),
        ("fx", WHEELS),
        ("fy", WHEELS),
        ("slip_ratio", WHEELS),
        ("slip_angle", WHEELS),
        ("tc_in_action", ct.c_int),
        ("abs_in_action", ct.c_int),
        ("suspension_damage", WHEELS),
        ("tyre_temp", WHEELS),
        ("water_temp", ct.c_float),
        ("brake_pressure", WHEELS),
        ("front_brake_compound", ct.c_int),
        ("rear_brake_compound", ct.c_int),
        ("pad_wear", WHEELS),
        ("disc_wear", WHEELS),
        ("ignition_on", ct.c_int),
        ("starter_motor_on", ct.c_int),
        ("engine_running", ct.c_int),
        ("kerb_vibration", ct.c_float),
        ("slip_vibration", ct.c_float),
        ("g_vibration", ct.c_float),
        ("abs_vibration", ct.c_float),
    ]


class StaticPage(ct.Structure):
    _fields_ = [
        ("shared_mem_version", WCHAR * 15),
        ("acc_version", WCHAR * 15),
        ("sessions", ct.c_int),
        ("cars", ct.c_int),
        ("car_model", WCHAR * 33),
        ("track", WCHAR * 33),
        ("first_name", WCHAR * 33),
        ("surname", WCHAR * 33),
        ("nickname", WCHAR * 33),
        ("sector_count", ct.c_int),
        ("max_torque", ct.c_float),
        ("max_power", ct.c_float),
        ("max_rpm", ct.c_int),
        ("tank_capacity", ct.c_float),
        ("suspension_max_travel", WHEELS),
        ("tyre_radius", WHEELS),
        ("max_turbo_boost", ct.c_float),
        ("deprecated_1", ct.c_float),
        ("deprecated_2", ct.c_float),
        ("penalties_enabled", ct.c_int),
        ("fuel_rate", ct.c_float),
        ("tyre_rate", ct.c_float),
        ("damage_rate", ct.c_float),
        ("allow_tyre_blankets", ct.c_float),
        ("aid_stability", ct.c_float),
        ("aid_auto_clutch", ct.c_int),
        ("aid_auto_blip", ct.c_int),
        ("has_drs", ct.c_int),
        ("has_ers", ct.c_int),
        ("has_kers", ct.c_int),
        ("kers_max_j", ct.c_float),
        ("engine_brake_settings_count", ct.c_int),
        ("ers_power_controller_count", ct.c_int),
        ("track_spline_length", ct.c_float),
        ("track_configuration", WCHAR * 33),
        ("ers_max_j", ct.c_float),
        ("is_timed_race", ct.c_int),
        ("has_extra_lap", ct.c_int),
        ("car_skin", WCHAR * 33),
        ("reversed_grid_positions", ct.c_int),
        ("pit_window_start", ct.c_int),
        ("pit_window_end", ct.c_int),
        ("is_multiplayer", ct.c_int),
        ("dry_tyre_name", WCHAR * 33),
        ("wet_tyre_name", WCHAR * 33),
    ]


GRAPHICS_SIZE = ct.sizeof(GraphicsPage)
PHYSICS_SIZE = ct.sizeof(PhysicsPage)
STATIC_SIZE = ct.sizeof(StaticPage)
