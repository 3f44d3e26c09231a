"""Events fed into the workout log controller."""

from __future__ import annotations

from dataclasses import dataclass

from trailog.workout.model import WorkoutKind


@dataclass(frozen=True)
class LocationAcquired:
    lat: float
    lng: float


@dataclass(frozen=True)
class LocationFailed:
    reason: str = "Could not get your position"


@dataclass(frozen=True)
class MapClicked:
    lat: float
    lng: float


@dataclass(frozen=True)
class ActivityToggled:
    kind: WorkoutKind


@dataclass(frozen=True)
class FormSubmitted:
    kind: str
    distance: object
    duration: object
    cadence: object = None
    elevation: object = None


@dataclass(frozen=True)
class FormCancelled:
    pass


@dataclass(frozen=True)
class WorkoutSelected:
    workout_id: str


@dataclass(frozen=True)
class ResetRequested:
    pass


Event = (
    LocationAcquired
    | LocationFailed
    | MapClicked
    | ActivityToggled
    | FormSubmitted
    | FormCancelled
    | WorkoutSelected
    | ResetRequested
)
