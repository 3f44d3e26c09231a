"""Interaction state machine for logging workouts from the map."""

from __future__ import annotations

from typing import Literal, Protocol

from loguru import logger

from trailog.core.events import (
    ActivityToggled,
    Event,
    FormCancelled,
    FormSubmitted,
    LocationAcquired,
    LocationFailed,
    MapClicked,
    ResetRequested,
    WorkoutSelected,
)
from trailog.core.settings import DEFAULT_PAN_DURATION_SEC, DEFAULT_ZOOM
from trailog.core.state import ControllerState
from trailog.ui.render import ListEntry, MarkerRequest, to_list_entry, to_marker_request
from trailog.workout.model import Workout, WorkoutKind, build_workout
from trailog.workout.persistence import PersistenceUnavailable, SnapshotStore
from trailog.workout.store import WorkoutStore
from trailog.workout.validation import WorkoutInputError, validate_workout_input

NoticeLevel = Literal["info", "positive", "negative", "warning"]


class MapSurface(Protocol):
    def show(self, center: tuple[float, float], zoom: int) -> None: ...

    def center_on(
        self,
        coords: tuple[float, float],
        zoom: int,
        *,
        animate: bool,
        pan_duration_sec: float,
    ) -> None: ...

    def place_marker(self, request: MarkerRequest) -> None: ...

    def clear_markers(self) -> None: ...


class WorkoutView(Protocol):
    def show_form(self) -> None: ...

    def hide_form(self) -> None: ...

    def focus_distance(self) -> None: ...

    def clear_fields(self) -> None: ...

    def show_kind_fields(self, kind: WorkoutKind) -> None: ...

    def append_entry(self, entry: ListEntry) -> None: ...

    def clear_entries(self) -> None: ...

    def notify(self, message: str, level: NoticeLevel = "info") -> None: ...


def open_workout_store(snapshot_store: SnapshotStore) -> WorkoutStore:
    """Load the persisted snapshot, falling back to an empty store."""
    store = WorkoutStore()
    try:
        snapshot = snapshot_store.load_snapshot()
    except PersistenceUnavailable as exc:
        logger.warning("Stored workouts unavailable, starting empty: {}", exc)
        snapshot = None
    store.load_from(snapshot)
    return store


class WorkoutLogController:
    """Drives one view over a workout store and holds the pending map location.

    Controllers of several pages may share one injected store, so every page
    saves the same full list.

    Every UI callback is turned into an event and handed to :meth:`dispatch`,
    which runs the transition to completion before returning.
    """

    def __init__(
        self,
        map_surface: MapSurface,
        view: WorkoutView,
        snapshot_store: SnapshotStore,
        *,
        zoom: int = DEFAULT_ZOOM,
        pan_duration_sec: float = DEFAULT_PAN_DURATION_SEC,
        store: WorkoutStore | None = None,
    ) -> None:
        self._map = map_surface
        self._view = view
        self._snapshot_store = snapshot_store
        self._zoom = zoom
        self._pan_duration_sec = pan_duration_sec
        self._owns_store = store is None
        self._store = store if store is not None else WorkoutStore()
        self.state = ControllerState()

    @property
    def workouts(self) -> tuple[Workout, ...]:
        return self._store.all()

    def start(self) -> None:
        if self._owns_store:
            self._store = open_workout_store(self._snapshot_store)
        for workout in self._store.all():
            self._view.append_entry(to_list_entry(workout))
        logger.info("Workout log started with {} workouts", len(self._store))

    def dispatch(self, event: Event) -> bool:
        logger.debug("{} in phase {}", type(event).__name__, self.state.phase)
        if isinstance(event, LocationAcquired):
            return self._on_location_acquired(event)
        if isinstance(event, LocationFailed):
            return self._on_location_failed(event)
        if isinstance(event, MapClicked):
            return self._on_map_clicked(event)
        if isinstance(event, ActivityToggled):
            return self._on_activity_toggled(event)
        if isinstance(event, FormSubmitted):
            return self._on_form_submitted(event)
        if isinstance(event, FormCancelled):
            return self._on_form_cancelled()
        if isinstance(event, WorkoutSelected):
            return self._on_workout_selected(event)
        if isinstance(event, ResetRequested):
            return self._on_reset()
        raise TypeError(f"Unsupported event {event!r}")

    def _on_location_acquired(self, event: LocationAcquired) -> bool:
        center = (float(event.lat), float(event.lng))
        self._map.show(center, self._zoom)
        self.state.map_ready = True
        self.state.map_center = center
        for workout in self._store.all():
            self._map.place_marker(to_marker_request(workout))
        return True

    def _on_location_failed(self, event: LocationFailed) -> bool:
        logger.warning("Geolocation failed: {}", event.reason)
        self._notice(event.reason, "warning")
        return True

    def _on_map_clicked(self, event: MapClicked) -> bool:
        if not self.state.map_ready:
            return False
        self.state.pending_coords = (float(event.lat), float(event.lng))
        self.state.phase = "awaiting_input"
        self._view.show_form()
        self._view.focus_distance()
        return True

    def _on_activity_toggled(self, event: ActivityToggled) -> bool:
        if self.state.phase != "awaiting_input":
            return False
        self._view.show_kind_fields(event.kind)
        return True

    def _on_form_submitted(self, event: FormSubmitted) -> bool:
        if self.state.phase != "awaiting_input" or self.state.pending_coords is None:
            return False
        try:
            data = validate_workout_input(
                event.kind,
                distance=event.distance,
                duration=event.duration,
                cadence=event.cadence,
                elevation=event.elevation,
            )
        except WorkoutInputError as exc:
            self._notice(str(exc), "negative")
            return True

        workout = build_workout(
            data.kind,
            coords=self.state.pending_coords,
            distance_km=data.distance_km,
            duration_min=data.duration_min,
            extra=data.extra,
        )
        self._store.append(workout)
        self._view.append_entry(to_list_entry(workout))
        self._map.place_marker(to_marker_request(workout))
        self._persist()
        logger.info("Logged {} ({})", workout.description, workout.id)
        self._close_form()
        return True

    def _on_form_cancelled(self) -> bool:
        if self.state.phase != "awaiting_input":
            return False
        self._close_form()
        return True

    def _on_workout_selected(self, event: WorkoutSelected) -> bool:
        workout = self._store.register_click(event.workout_id)
        if workout is None:
            return False
        if self.state.map_ready:
            self._map.center_on(
                workout.coords,
                self._zoom,
                animate=True,
                pan_duration_sec=self._pan_duration_sec,
            )
        self._persist()
        return True

    def _on_reset(self) -> bool:
        try:
            self._store.clear(self._snapshot_store)
        except PersistenceUnavailable as exc:
            logger.warning("Could not erase stored workouts: {}", exc)
        self._view.clear_entries()
        self._map.clear_markers()
        self._close_form()
        logger.info("Workout log reset")
        return True

    def _close_form(self) -> None:
        self._view.clear_fields()
        self._view.hide_form()
        self.state.pending_coords = None
        self.state.phase = "idle"

    def _persist(self) -> None:
        try:
            self._store.save_to(self._snapshot_store)
        except PersistenceUnavailable as exc:
            logger.warning("Could not save workouts, keeping them in memory: {}", exc)

    def _notice(self, message: str, level: NoticeLevel) -> None:
        self.state.last_message = message
        self._view.notify(message, level)
