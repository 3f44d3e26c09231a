from __future__ import annotations

import math

import pytest

from trailog.workout.validation import (
    WorkoutInputError,
    all_finite,
    all_positive,
    cycling_input_ok,
    parse_number,
    running_input_ok,
    validate_workout_input,
)


def test_predicates() -> None:
    assert all_finite(1.0, 0.0, -3.5)
    assert not all_finite(1.0, math.nan)
    assert not all_finite(math.inf)
    assert all_positive(1.0, 0.1)
    assert not all_positive(1.0, 0.0)
    assert all_finite()
    assert all_positive()


@pytest.mark.parametrize(
    ("distance", "duration", "cadence"),
    [(0, 5, 150), (10, -1, 150), (10, 5, math.nan)],
)
def test_running_rejects_bad_fields(distance: float, duration: float, cadence: float) -> None:
    assert not running_input_ok(distance, duration, cadence)


def test_cycling_accepts_negative_elevation() -> None:
    assert cycling_input_ok(20, 60, -5)
    assert cycling_input_ok(20, 60, 0)
    assert not cycling_input_ok(20, 0, 100)
    assert not cycling_input_ok(20, 60, math.nan)


def test_parse_number() -> None:
    assert parse_number("12.5") == 12.5
    assert parse_number(" 7 ") == 7.0
    assert parse_number(3) == 3.0
    assert math.isnan(parse_number(""))
    assert math.isnan(parse_number(None))
    assert math.isnan(parse_number("abc"))
    assert math.isnan(parse_number(True))


def test_validate_workout_input() -> None:
    run = validate_workout_input("running", distance="12", duration=5, cadence=15)
    ride = validate_workout_input("cycling", distance=40, duration=80, elevation=-12)

    assert (run.kind, run.distance_km, run.duration_min, run.extra) == ("running", 12, 5, 15)
    assert ride.extra == -12


def test_validate_workout_input_errors() -> None:
    with pytest.raises(WorkoutInputError):
        validate_workout_input("running", distance=-3, duration=5, cadence=15)
    with pytest.raises(WorkoutInputError):
        validate_workout_input("running", distance=3, duration=5, cadence=None)
    with pytest.raises(WorkoutInputError):
        validate_workout_input("cycling", distance=3, duration=5, elevation="")
    with pytest.raises(WorkoutInputError, match="Unsupported"):
        validate_workout_input("rowing", distance=3, duration=5)
