"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import ClassVar, Literal
from uuid import uuid4

WorkoutKind = Literal["running", "cycling"]

WORKOUT_KINDS: tuple[WorkoutKind, ...] = ("running", "cycling")

# fmt: off
MONTHS: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
# fmt: on


def new_workout_id() -> str:
    return uuid4().hex[:10]


@dataclass(frozen=True, kw_only=True)
class Workout:
    kind: ClassVar[WorkoutKind]

    coords: tuple[float, float]
    distance_km: float
    duration_min: float
    id: str = field(default_factory=new_workout_id)
    created_at: datetime = field(default_factory=datetime.now)
    click_count: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        if not self.description:
            object.__setattr__(self, "description", self._describe())

    def _describe(self) -> str:
        month = MONTHS[self.created_at.month - 1]
        return f"{self.kind.capitalize()} on {month} {self.created_at.day}"

    def clicked(self) -> Workout:
        """Copy of this workout with the click counter bumped by one."""
        return replace(self, click_count=self.click_count + 1)


@dataclass(frozen=True, kw_only=True)
class Running(Workout):
    kind: ClassVar[WorkoutKind] = "running"

    cadence_spm: float
    pace_min_per_km: float = field(init=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "pace_min_per_km", self.duration_min / self.distance_km)


@dataclass(frozen=True, kw_only=True)
class Cycling(Workout):
    kind: ClassVar[WorkoutKind] = "cycling"

    elevation_gain_m: float
    speed_km_per_h: float = field(init=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(
            self, "speed_km_per_h", self.distance_km / (self.duration_min / 60)
        )


def build_workout(
    kind: WorkoutKind,
    *,
    coords: tuple[float, float],
    distance_km: float,
    duration_min: float,
    extra: float,
    workout_id: str | None = None,
    created_at: datetime | None = None,
    click_count: int = 0,
    description: str | None = None,
) -> Workout:
    """Build the workout variant for ``kind``.

    ``extra`` is the cadence for runs and the elevation gain for rides.
    Inputs are expected to be validated already.
    """
    base: dict[str, object] = {
        "coords": (float(coords[0]), float(coords[1])),
        "distance_km": distance_km,
        "duration_min": duration_min,
        "click_count": click_count,
    }
    if workout_id is not None:
        base["id"] = workout_id
    if created_at is not None:
        base["created_at"] = created_at
    if description:
        base["description"] = description

    if kind == "running":
        return Running(cadence_spm=extra, **base)  # type: ignore[arg-type]
    if kind == "cycling":
        return Cycling(elevation_gain_m=extra, **base)  # type: ignore[arg-type]
    raise ValueError(f"Unknown workout kind '{kind}'")
