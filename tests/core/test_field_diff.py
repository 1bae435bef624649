import pytest
from types import SimpleNamespace

from acc_core.application.field_diff import (
    FieldDiff,
    MAX_VALID_TIME_MS,
    SENTINEL_TIME,
    attach,
    emit,
    is_invalid_time,
    round3,
)
from acc_core.domain.enums import RAIN_INTENSITY, SESSION_TYPE, FLAG_TYPE


def record(**fields):
    return SimpleNamespace(**fields)


def test_emit_without_previous_always_writes():
    out = {}
    assert emit(out, "position", 3)
    assert out == {"position": 3}


def test_emit_skips_equal_values():
    out = {}
    assert not emit(out, "position", 3, 3)
    assert out == {}


def test_emit_compares_encoded_values():
    out = {}
    assert not emit(out, "speed", 100.0001, 100.0004, round3)
    assert emit(out, "speed", 100.002, 100.001, round3)
    assert out == {"speed": 100.002}


def test_rounding_is_not_truncation():
    assert round3(0.1236) == 0.124
    assert round3(-2.9996) == -3.0


@pytest.mark.parametrize("current,previous,emitted", [
    (0.12340001, 0.1234, False),
    (27.6104, 27.6101, False),
    (27.611, 27.610, True),
    (1.2, 1.3, True),
])
def test_rounding_stability(current, previous, emitted):
    diff = FieldDiff(record(value=current), record(value=previous))
    out = {}
    assert diff.real(out, "value", "value") is emitted
    assert ("value" in out) is emitted


def test_sentinel_detection():
    assert is_invalid_time(SENTINEL_TIME)
    assert is_invalid_time(MAX_VALID_TIME_MS)
    assert not is_invalid_time(MAX_VALID_TIME_MS - 1)
    assert not is_invalid_time(0)


def test_sentinel_time_suppressed_in_complete_mode():
    diff = FieldDiff(record(best=SENTINEL_TIME))
    out = {}
    assert not diff.time(out, "best", "best")
    assert not diff.always_time(out, "current", "best")
    assert out == {}


def test_sentinel_time_suppressed_even_when_changed():
    diff = FieldDiff(record(last=700000), record(last=92000))
    out = {}
    diff.time(out, "last", "last")
    assert out == {}


def test_valid_time_after_sentinel_is_emitted():
    diff = FieldDiff(record(best=91500), record(best=SENTINEL_TIME))
    out = {}
    diff.time(out, "best", "best")
    assert out == {"best": 91500}


def test_enum_falls_back_for_unknown_values():
    diff = FieldDiff(record(session=42, flag=-3, rain=9))
    out = {}
    diff.enum(out, "type", "session", SESSION_TYPE)
    diff.enum(out, "flag", "flag", FLAG_TYPE)
    diff.enum(out, "rain", "rain", RAIN_INTENSITY)
    assert out == {"type": "Unknown", "flag": "None", "rain": "None"}


def test_enum_translates_known_values():
    diff = FieldDiff(record(rain=2), record(rain=1))
    out = {}
    diff.enum(out, "current", "rain", RAIN_INTENSITY)
    assert out == {"current": "Light"}


def test_dotted_paths_and_wheel_indices():
    current = record(physics=record(pressure=(27.5, 27.6, 27.4, 27.5)))
    previous = record(physics=record(pressure=(27.5, 27.7, 27.4, 27.5)))
    assert FieldDiff(current, previous).wheels("physics.pressure") == {"fr": 27.6}


def test_boolean_is_normalised():
    out = {}
    FieldDiff(record(flag=1)).boolean(out, "flag", "flag")
    assert out == {"flag": True}


def test_attach_prunes_empty_children():
    parent = {}
    attach(parent, "rain", {})
    attach(parent, "pressure", {"fl": 27.5})
    assert parent == {"pressure": {"fl": 27.5}}
