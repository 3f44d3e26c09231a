"""In-memory ordered workout log."""

from __future__ import annotations

from typing import Any

from trailog.workout.model import Workout
from trailog.workout.persistence import SnapshotStore
from trailog.workout.snapshot import from_snapshot, to_snapshot


class WorkoutStore:
    def __init__(self) -> None:
        self._workouts: list[Workout] = []

    def __len__(self) -> int:
        return len(self._workouts)

    def append(self, workout: Workout) -> None:
        self._workouts.append(workout)

    def all(self) -> tuple[Workout, ...]:
        return tuple(self._workouts)

    def find_by_id(self, workout_id: str) -> Workout | None:
        for workout in self._workouts:
            if workout.id == workout_id:
                return workout
        return None

    def register_click(self, workout_id: str) -> Workout | None:
        for i, workout in enumerate(self._workouts):
            if workout.id == workout_id:
                updated = workout.clicked()
                self._workouts[i] = updated
                return updated
        return None

    def load_from(self, snapshot: list[dict[str, Any]] | None) -> None:
        if snapshot is None:
            self._workouts = []
            return
        self._workouts = from_snapshot(snapshot)

    def save_to(self, sink: SnapshotStore) -> None:
        sink.save_snapshot(to_snapshot(self._workouts))

    def clear(self, sink: SnapshotStore) -> None:
        self._workouts = []
        sink.erase_snapshot()
