"""Snapshot (de)serialization for stored workouts."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Iterable

from loguru import logger

from trailog.workout.model import Cycling, Running, Workout, WorkoutKind, build_workout


class SnapshotFormatError(ValueError):
    """Raised when a stored workout entry cannot be decoded."""


def workout_to_dict(workout: Workout) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "kind": workout.kind,
        "id": workout.id,
        "created_at": workout.created_at.isoformat(),
        "coords": [workout.coords[0], workout.coords[1]],
        "distance_km": workout.distance_km,
        "duration_min": workout.duration_min,
        "description": workout.description,
        "click_count": workout.click_count,
    }
    if isinstance(workout, Running):
        payload["cadence_spm"] = workout.cadence_spm
        payload["pace_min_per_km"] = workout.pace_min_per_km
    elif isinstance(workout, Cycling):
        payload["elevation_gain_m"] = workout.elevation_gain_m
        payload["speed_km_per_h"] = workout.speed_km_per_h
    return payload


def workout_from_dict(payload: object) -> Workout:
    if not isinstance(payload, dict):
        raise SnapshotFormatError("Workout entry must be an object")

    kind = _infer_kind(payload)
    coords = _parse_coords(payload.get("coords"))
    distance_km = _parse_float(payload, "distance_km", "distance")
    duration_min = _parse_float(payload, "duration_min", "duration")
    if kind == "running":
        extra = _parse_float(payload, "cadence_spm", "cadence")
    else:
        extra = _parse_float(payload, "elevation_gain_m", "elevation")

    if distance_km <= 0 or duration_min <= 0:
        raise SnapshotFormatError("distance and duration must be > 0")

    workout_id = payload.get("id")
    if workout_id is not None and not isinstance(workout_id, str):
        workout_id = str(workout_id)
    description = payload.get("description")
    if not isinstance(description, str):
        description = None

    return build_workout(
        kind,
        coords=coords,
        distance_km=distance_km,
        duration_min=duration_min,
        extra=extra,
        workout_id=workout_id or None,
        created_at=_parse_created_at(payload.get("created_at", payload.get("date"))),
        click_count=_parse_click_count(payload.get("click_count", payload.get("clicks"))),
        description=description,
    )


def to_snapshot(workouts: Iterable[Workout]) -> list[dict[str, Any]]:
    return [workout_to_dict(workout) for workout in workouts]


def from_snapshot(payload: Iterable[object]) -> list[Workout]:
    out: list[Workout] = []
    for i, raw in enumerate(payload):
        try:
            out.append(workout_from_dict(raw))
        except SnapshotFormatError as exc:
            logger.warning("Skipping stored workout {}: {}", i + 1, exc)
    return out


def _infer_kind(payload: dict[str, Any]) -> WorkoutKind:
    kind = payload.get("kind", payload.get("type"))
    if kind in ("running", "cycling"):
        return kind
    if kind is not None:
        raise SnapshotFormatError(f"Unknown workout kind '{kind}'")
    # Older snapshots carry no tag; the kind-specific field tells them apart.
    if "cadence_spm" in payload or "cadence" in payload:
        return "running"
    if "elevation_gain_m" in payload or "elevation" in payload:
        return "cycling"
    raise SnapshotFormatError("Workout entry has no kind")


def _parse_coords(raw: object) -> tuple[float, float]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise SnapshotFormatError("coords must be a [lat, lng] pair")
    try:
        lat, lng = float(raw[0]), float(raw[1])
    except (TypeError, ValueError) as exc:
        raise SnapshotFormatError("coords must be numbers") from exc
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise SnapshotFormatError("coords must be finite")
    return lat, lng


def _parse_float(payload: dict[str, Any], key: str, legacy_key: str) -> float:
    raw = payload.get(key, payload.get(legacy_key))
    if raw is None or isinstance(raw, bool):
        raise SnapshotFormatError(f"invalid {key}")
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise SnapshotFormatError(f"invalid {key}") from exc
    if not math.isfinite(value):
        raise SnapshotFormatError(f"invalid {key}")
    return value


def _parse_created_at(raw: object) -> datetime | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise SnapshotFormatError("created_at must be an ISO timestamp")
    try:
        # JSON.stringify emits a trailing Z that older Pythons reject.
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise SnapshotFormatError(f"invalid created_at '{raw}'") from exc


def _parse_click_count(raw: object) -> int:
    if raw is None:
        return 0
    try:
        return max(0, int(raw))  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise SnapshotFormatError("click_count must be an integer") from exc
