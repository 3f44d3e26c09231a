"""Runtime state for the workout log controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Phase = Literal["idle", "awaiting_input"]


@dataclass
class ControllerState:
    phase: Phase = "idle"
    pending_coords: tuple[float, float] | None = None
    map_ready: bool = False
    map_center: tuple[float, float] | None = None
    last_message: str | None = None
