"""Local persistence for the workout log snapshot."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Protocol

from loguru import logger


def _default_snapshot_path() -> Path:
    return Path.home() / ".trailog" / "workouts.json"


class PersistenceUnavailable(OSError):
    """Raised when the snapshot cannot be read, written or erased."""


class SnapshotStore(Protocol):
    def save_snapshot(self, records: list[dict[str, Any]]) -> None: ...

    def load_snapshot(self) -> list[dict[str, Any]] | None: ...

    def erase_snapshot(self) -> None: ...


class JsonFileSnapshotStore:
    """Whole-snapshot JSON file; every save overwrites the previous one."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or _default_snapshot_path()

    def save_snapshot(self, records: list[dict[str, Any]]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(
                json.dumps(records, ensure_ascii=True, indent=2), encoding="utf-8"
            )
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as exc:
            tmp.unlink(missing_ok=True)
            raise PersistenceUnavailable(f"Cannot write {self.path}: {exc}") from exc
        logger.debug("Saved {} workouts to {}", len(records), self.path)

    def load_snapshot(self) -> list[dict[str, Any]] | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceUnavailable(f"Cannot read {self.path}: {exc}") from exc
        if data is None:
            return None
        if not isinstance(data, list):
            raise PersistenceUnavailable(f"{self.path} does not hold a workout list")
        logger.debug("Loaded {} workouts from {}", len(data), self.path)
        return data

    def erase_snapshot(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceUnavailable(f"Cannot erase {self.path}: {exc}") from exc


class MemorySnapshotStore:
    def __init__(self, records: list[dict[str, Any]] | None = None) -> None:
        self.records = records

    def save_snapshot(self, records: list[dict[str, Any]]) -> None:
        self.records = [dict(item) for item in records]

    def load_snapshot(self) -> list[dict[str, Any]] | None:
        if self.records is None:
            return None
        return [dict(item) for item in self.records]

    def erase_snapshot(self) -> None:
        self.records = None
