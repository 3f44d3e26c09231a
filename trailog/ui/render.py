"""View models for the workout list and map markers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from trailog.workout.model import Cycling, Running, Workout, WorkoutKind

KIND_ICONS: dict[WorkoutKind, str] = {
    "running": "🏃‍♂️",
    "cycling": "🚴‍♀️",
}

POPUP_MAX_WIDTH = 250
POPUP_MIN_WIDTH = 100


@dataclass(frozen=True)
class DetailItem:
    icon: str
    value: str
    unit: str


@dataclass(frozen=True)
class ListEntry:
    workout_id: str
    kind: WorkoutKind
    title: str
    css_class: str
    details: tuple[DetailItem, ...]


@dataclass(frozen=True)
class MarkerRequest:
    coords: tuple[float, float]
    popup_text: str
    style_class: str

    def popup_options(self) -> dict[str, Any]:
        return {
            "maxWidth": POPUP_MAX_WIDTH,
            "minWidth": POPUP_MIN_WIDTH,
            "autoClose": False,
            "closeOnClick": False,
            "className": self.style_class,
        }


def _fmt_value(value: float) -> str:
    # Whole numbers render without a trailing ".0".
    text = str(value)
    return text[:-2] if text.endswith(".0") else text


def _metric_item(workout: Workout) -> DetailItem:
    if isinstance(workout, Running):
        return DetailItem("⚡️", f"{workout.pace_min_per_km:.2f}", "min/km")
    if isinstance(workout, Cycling):
        return DetailItem("⚡️", f"{workout.speed_km_per_h:.2f}", "km/h")
    raise TypeError(f"Unsupported workout type {type(workout).__name__}")


def _extra_item(workout: Workout) -> DetailItem:
    if isinstance(workout, Running):
        return DetailItem("🦶🏼", _fmt_value(workout.cadence_spm), "spm")
    if isinstance(workout, Cycling):
        return DetailItem("⛰", _fmt_value(workout.elevation_gain_m), "m")
    raise TypeError(f"Unsupported workout type {type(workout).__name__}")


def to_list_entry(workout: Workout) -> ListEntry:
    return ListEntry(
        workout_id=workout.id,
        kind=workout.kind,
        title=workout.description,
        css_class=f"workout workout--{workout.kind}",
        details=(
            DetailItem(KIND_ICONS[workout.kind], _fmt_value(workout.distance_km), "km"),
            DetailItem("⏱", _fmt_value(workout.duration_min), "min"),
            _metric_item(workout),
            _extra_item(workout),
        ),
    )


def to_marker_request(workout: Workout) -> MarkerRequest:
    return MarkerRequest(
        coords=workout.coords,
        popup_text=f"{KIND_ICONS[workout.kind]} {workout.description}",
        style_class=f"{workout.kind}-popup",
    )
