"""Command line entrypoint for Trailog."""

from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path

from loguru import logger

from trailog.core.logger import setup_logger
from trailog.core.settings import (
    DEFAULT_GEOLOCATION_TIMEOUT_SEC,
    DEFAULT_ZOOM,
    AppSettings,
)
from trailog.workout.model import Cycling, Running, Workout
from trailog.workout.persistence import JsonFileSnapshotStore, PersistenceUnavailable
from trailog.workout.store import WorkoutStore

CSV_HEADER = [
    "id",
    "kind",
    "created_at",
    "description",
    "lat",
    "lng",
    "distance_km",
    "duration_min",
    "cadence_spm",
    "elevation_gain_m",
    "pace_min_per_km",
    "speed_km_per_h",
    "click_count",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Trailog map workout log")
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch the web UI (default when no other action is given)",
    )
    parser.add_argument("--web-host", default="127.0.0.1", help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=8088, help="Port for --ui-web")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Workout snapshot file (default: ~/.trailog/workouts.json)",
    )
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="Keep workouts in memory only for this run",
    )
    parser.add_argument("--zoom", type=int, default=DEFAULT_ZOOM, help="Map zoom level")
    parser.add_argument(
        "--geolocation-timeout",
        type=float,
        default=DEFAULT_GEOLOCATION_TIMEOUT_SEC,
        help="Seconds to wait for the browser position before starting without a map",
    )
    parser.add_argument("--list", action="store_true", help="Print stored workouts")
    parser.add_argument(
        "--export-csv",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write stored workouts to a CSV file",
    )
    parser.add_argument("--reset", action="store_true", help="Erase stored workouts")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser


def settings_from_args(args: argparse.Namespace) -> AppSettings:
    return AppSettings(
        host=args.web_host,
        port=args.web_port,
        data_file=args.data_file,
        persist=not args.no_persist,
        zoom=args.zoom,
        geolocation_timeout_sec=max(0.0, float(args.geolocation_timeout)),
        log_level=args.log_level,
    )


def load_store(snapshot_store: JsonFileSnapshotStore) -> WorkoutStore:
    store = WorkoutStore()
    store.load_from(snapshot_store.load_snapshot())
    return store


def run_list(snapshot_store: JsonFileSnapshotStore) -> int:
    store = load_store(snapshot_store)
    if not len(store):
        print("No workouts logged")
        return 0
    for workout in store.all():
        print(
            f"{workout.id:<10} {workout.description:<24} "
            f"{workout.distance_km:>7.2f} km {workout.duration_min:>7.1f} min  "
            f"{_metric_label(workout)}"
        )
    return 0


def _metric_label(workout: Workout) -> str:
    if isinstance(workout, Running):
        return f"{workout.pace_min_per_km:.2f} min/km"
    if isinstance(workout, Cycling):
        return f"{workout.speed_km_per_h:.2f} km/h"
    return "-"


def export_workouts_csv(workouts: tuple[Workout, ...], out: Path) -> Path:
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_HEADER)
        for workout in workouts:
            running = workout if isinstance(workout, Running) else None
            cycling = workout if isinstance(workout, Cycling) else None
            writer.writerow(
                [
                    workout.id,
                    workout.kind,
                    workout.created_at.isoformat(),
                    workout.description,
                    workout.coords[0],
                    workout.coords[1],
                    workout.distance_km,
                    workout.duration_min,
                    running.cadence_spm if running else "",
                    cycling.elevation_gain_m if cycling else "",
                    f"{running.pace_min_per_km:.4f}" if running else "",
                    f"{cycling.speed_km_per_h:.4f}" if cycling else "",
                    workout.click_count,
                ]
            )
    return out


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = settings_from_args(args)
    setup_logger(settings.log_level)

    snapshot_store = JsonFileSnapshotStore(settings.data_file)
    try:
        if args.reset:
            snapshot_store.erase_snapshot()
            print(f"Erased {snapshot_store.path}")
            return 0
        if args.list:
            return run_list(snapshot_store)
        if args.export_csv is not None:
            store = load_store(snapshot_store)
            out = export_workouts_csv(store.all(), args.export_csv)
            print(f"Exported {len(store)} workouts to {out}")
            return 0
    except PersistenceUnavailable as exc:
        logger.error("{}", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    from trailog.ui.web_app import run_web_ui

    return run_web_ui(settings)


if __name__ == "__main__":
    raise SystemExit(main())
