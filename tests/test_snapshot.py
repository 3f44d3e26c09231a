from __future__ import annotations

from datetime import datetime

import pytest

from trailog.workout.model import Cycling, Running
from trailog.workout.snapshot import (
    SnapshotFormatError,
    from_snapshot,
    to_snapshot,
    workout_from_dict,
    workout_to_dict,
)


def test_workout_to_dict_is_flat_and_tagged() -> None:
    run = Running(
        coords=(32.0, -19.0),
        distance_km=12,
        duration_min=5,
        cadence_spm=15,
        created_at=datetime(2026, 3, 2, 8, 0),
    )

    payload = workout_to_dict(run)

    assert payload["kind"] == "running"
    assert payload["coords"] == [32.0, -19.0]
    assert payload["created_at"] == "2026-03-02T08:00:00"
    assert payload["description"] == "Running on March 2"
    assert payload["cadence_spm"] == 15
    assert payload["pace_min_per_km"] == pytest.approx(5 / 12)
    assert payload["click_count"] == 0


def test_snapshot_keeps_order_and_kind() -> None:
    workouts = [
        Running(coords=(1.0, 2.0), distance_km=5, duration_min=25, cadence_spm=170),
        Cycling(coords=(3.0, 4.0), distance_km=40, duration_min=90, elevation_gain_m=-20),
        Running(coords=(5.0, 6.0), distance_km=21.1, duration_min=110, cadence_spm=176),
    ]

    loaded = from_snapshot(to_snapshot(workouts))

    assert [type(w) for w in loaded] == [Running, Cycling, Running]
    for before, after in zip(workouts, loaded):
        assert after.id == before.id
        assert after.kind == before.kind
        assert after.coords == before.coords
        assert after.distance_km == before.distance_km
        assert after.duration_min == before.duration_min
        assert after.created_at == before.created_at
        assert after.description == before.description


def test_derived_metric_follows_formula_after_load() -> None:
    payload = workout_to_dict(
        Cycling(coords=(0.0, 0.0), distance_km=30, duration_min=60, elevation_gain_m=10)
    )
    payload["speed_km_per_h"] = 999.0

    ride = workout_from_dict(payload)

    assert isinstance(ride, Cycling)
    assert ride.speed_km_per_h == pytest.approx(30.0)


def test_untagged_entries_are_inferred() -> None:
    legacy = [
        {
            "id": "1718000000",
            "date": "2024-06-10T08:00:00.000Z",
            "coords": [51.5, -0.12],
            "distance": 5,
            "duration": 30,
            "cadence": 160,
            "pace": 6,
            "description": "Running on June 10",
        },
        {
            "id": "1718000001",
            "date": "2024-06-11T08:00:00.000Z",
            "coords": [51.5, -0.12],
            "distance": 20,
            "duration": 60,
            "elevation": 150,
        },
    ]

    loaded = from_snapshot(legacy)

    assert [w.kind for w in loaded] == ["running", "cycling"]
    assert loaded[0].id == "1718000000"
    assert loaded[0].description == "Running on June 10"
    assert isinstance(loaded[1], Cycling)
    assert loaded[1].speed_km_per_h == pytest.approx(20.0)


def test_stored_description_survives_utc_day_shift() -> None:
    entry = {
        "type": "running",
        "id": "1718066000",
        "date": "2024-06-11T03:30:00.000Z",
        "coords": [40.7, -74.0],
        "distance": 8,
        "duration": 45,
        "cadence": 168,
        "description": "Running on June 10",
    }

    run = workout_from_dict(entry)
    again = workout_from_dict(workout_to_dict(run.clicked()))

    assert run.created_at.day == 11
    assert run.description == "Running on June 10"
    assert again.description == "Running on June 10"
    assert again.click_count == 1


def test_missing_description_is_derived() -> None:
    payload = workout_to_dict(
        Cycling(
            coords=(0.0, 0.0),
            distance_km=30,
            duration_min=60,
            elevation_gain_m=10,
            created_at=datetime(2026, 5, 9, 22, 0),
        )
    )
    del payload["description"]

    assert workout_from_dict(payload).description == "Cycling on May 9"


def test_malformed_entries_are_skipped() -> None:
    good = workout_to_dict(
        Running(coords=(1.0, 2.0), distance_km=5, duration_min=25, cadence_spm=170)
    )
    loaded = from_snapshot(
        [
            "nope",
            {"kind": "running", "coords": [1, 2], "distance_km": 0, "duration_min": 5, "cadence_spm": 1},
            {"kind": "swimming", "coords": [1, 2], "distance_km": 1, "duration_min": 5},
            {"coords": [1, 2], "distance_km": 1, "duration_min": 5},
            good,
        ]
    )

    assert len(loaded) == 1
    assert loaded[0].id == good["id"]


def test_workout_from_dict_errors() -> None:
    with pytest.raises(SnapshotFormatError):
        workout_from_dict({"kind": "running", "coords": [1], "distance_km": 1, "duration_min": 1, "cadence_spm": 1})
    with pytest.raises(SnapshotFormatError):
        workout_from_dict(
            {
                "kind": "cycling",
                "coords": [1, 2],
                "distance_km": 1,
                "duration_min": 1,
                "elevation_gain_m": 1,
                "created_at": "yesterday",
            }
        )
