"""Runtime settings assembled from CLI flags."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_ZOOM = 13
DEFAULT_PAN_DURATION_SEC = 0.75
DEFAULT_GEOLOCATION_TIMEOUT_SEC = 10.0


@dataclass(frozen=True)
class AppSettings:
    host: str = "127.0.0.1"
    port: int = 8088
    data_file: Path | None = None
    persist: bool = True
    zoom: int = DEFAULT_ZOOM
    pan_duration_sec: float = DEFAULT_PAN_DURATION_SEC
    geolocation_timeout_sec: float = DEFAULT_GEOLOCATION_TIMEOUT_SEC
    log_level: str = "INFO"
