"""Form input checks for new workouts."""

from __future__ import annotations

import math
from dataclasses import dataclass

from trailog.workout.model import WorkoutKind


class WorkoutInputError(ValueError):
    """Raised when submitted workout fields are invalid."""


@dataclass(frozen=True)
class WorkoutInput:
    kind: WorkoutKind
    distance_km: float
    duration_min: float
    extra: float


def all_finite(*values: float) -> bool:
    return all(math.isfinite(value) for value in values)


def all_positive(*values: float) -> bool:
    return all(value > 0 for value in values)


def parse_number(raw: object) -> float:
    """Convert a raw form value to float, ``nan`` when it is blank or garbage."""
    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip()
    if not text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def running_input_ok(distance: float, duration: float, cadence: float) -> bool:
    return all_finite(distance, duration, cadence) and all_positive(
        distance, duration, cadence
    )


def cycling_input_ok(distance: float, duration: float, elevation: float) -> bool:
    # Elevation may be zero or negative for descents.
    return all_finite(distance, duration, elevation) and all_positive(distance, duration)


def validate_workout_input(
    kind: str,
    *,
    distance: object,
    duration: object,
    cadence: object = None,
    elevation: object = None,
) -> WorkoutInput:
    distance_km = parse_number(distance)
    duration_min = parse_number(duration)

    if kind == "running":
        cadence_spm = parse_number(cadence)
        if not running_input_ok(distance_km, duration_min, cadence_spm):
            raise WorkoutInputError(
                "Distance, duration and cadence must be positive numbers"
            )
        return WorkoutInput("running", distance_km, duration_min, cadence_spm)

    if kind == "cycling":
        elevation_m = parse_number(elevation)
        if not cycling_input_ok(distance_km, duration_min, elevation_m):
            raise WorkoutInputError(
                "Distance and duration must be positive numbers, elevation must be a number"
            )
        return WorkoutInput("cycling", distance_km, duration_min, elevation_m)

    raise WorkoutInputError(f"Unsupported workout type '{kind}'")
