"""NiceGUI web UI for Trailog."""

from __future__ import annotations

from typing import Any, Callable

from loguru import logger
from nicegui import ui

from trailog.core.controller import NoticeLevel, WorkoutLogController, open_workout_store
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
from trailog.core.settings import AppSettings
from trailog.ui.render import ListEntry, MarkerRequest
from trailog.workout.model import WorkoutKind
from trailog.workout.persistence import (
    JsonFileSnapshotStore,
    MemorySnapshotStore,
    SnapshotStore,
)

TILE_URL = "https://tile.openstreetmap.fr/hot/{z}/{x}/{y}.png"
TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)

GEOLOCATION_JS = """
return await new Promise((resolve) => {
  if (!navigator.geolocation) {
    resolve({error: "Geolocation is not available in this browser"});
    return;
  }
  navigator.geolocation.getCurrentPosition(
    (pos) => resolve({lat: pos.coords.latitude, lng: pos.coords.longitude}),
    (err) => resolve({error: err.message || "Failed to get the co-ordinates"}),
    {timeout: %d},
  );
});
"""

Dispatch = Callable[[Event], bool]


class LeafletMapSurface:
    def __init__(self, dispatch: Dispatch) -> None:
        self._dispatch = dispatch
        self._markers: list[Any] = []
        self.map = ui.leaflet(center=(0.0, 0.0), zoom=2).classes("w-full h-[70vh]")
        self.map.clear_layers()
        self.map.tile_layer(
            url_template=TILE_URL,
            options={"attribution": TILE_ATTRIBUTION},
        )
        self.map.on("map-click", self._on_click)
        self.map.set_visibility(False)

    def _on_click(self, e: Any) -> None:
        latlng = e.args["latlng"]
        self._dispatch(MapClicked(lat=float(latlng["lat"]), lng=float(latlng["lng"])))

    def show(self, center: tuple[float, float], zoom: int) -> None:
        self.map.set_center(center)
        self.map.set_zoom(zoom)
        self.map.set_visibility(True)
        # Leaflet measures its container on creation, while it was hidden.
        self.map.run_map_method("invalidateSize")

    def center_on(
        self,
        coords: tuple[float, float],
        zoom: int,
        *,
        animate: bool,
        pan_duration_sec: float,
    ) -> None:
        self.map.run_map_method(
            "setView",
            [coords[0], coords[1]],
            zoom,
            {"animate": animate, "pan": {"duration": pan_duration_sec}},
        )

    def place_marker(self, request: MarkerRequest) -> None:
        marker = self.map.marker(latlng=request.coords)
        marker.run_method("bindPopup", request.popup_text, request.popup_options())
        marker.run_method("openPopup")
        self._markers.append(marker)

    def clear_markers(self) -> None:
        for marker in self._markers:
            self.map.remove_layer(marker)
        self._markers.clear()


class NiceGuiWorkoutView:
    def __init__(self, dispatch: Dispatch) -> None:
        self._dispatch = dispatch
        with ui.card().classes("w-full tl-card") as self.form:
            with ui.row().classes("w-full items-end gap-2"):
                self.kind_select = ui.select(
                    {"running": "Running", "cycling": "Cycling"},
                    value="running",
                    label="Type",
                )
                self.distance_input = ui.number("Distance (km)")
                self.duration_input = ui.number("Duration (min)")
                self.cadence_input = ui.number("Cadence (step/min)")
                self.elevation_input = ui.number("Elev Gain (m)")
            with ui.row().classes("gap-2"):
                save_btn = ui.button("OK")
                cancel_btn = ui.button("Cancel").props("outline")
        self.entries = ui.column().classes("w-full gap-2")

        self.kind_select.on_value_change(self._on_kind_change)
        save_btn.on_click(self._on_submit)
        cancel_btn.on_click(lambda: self._dispatch(FormCancelled()))
        self.show_kind_fields("running")
        self.form.set_visibility(False)

    def _on_kind_change(self, _: Any) -> None:
        kind = str(self.kind_select.value or "running")
        self._dispatch(ActivityToggled(kind=kind))  # type: ignore[arg-type]

    def _on_submit(self) -> None:
        self._dispatch(
            FormSubmitted(
                kind=str(self.kind_select.value),
                distance=self.distance_input.value,
                duration=self.duration_input.value,
                cadence=self.cadence_input.value,
                elevation=self.elevation_input.value,
            )
        )

    def show_form(self) -> None:
        self.form.set_visibility(True)

    def hide_form(self) -> None:
        self.form.set_visibility(False)

    def focus_distance(self) -> None:
        self.distance_input.run_method("focus")

    def clear_fields(self) -> None:
        for field in (
            self.distance_input,
            self.duration_input,
            self.cadence_input,
            self.elevation_input,
        ):
            field.value = None

    def show_kind_fields(self, kind: WorkoutKind) -> None:
        self.cadence_input.set_visibility(kind == "running")
        self.elevation_input.set_visibility(kind == "cycling")

    def append_entry(self, entry: ListEntry) -> None:
        with self.entries:
            with ui.card().classes(f"w-full tl-card {entry.css_class}") as card:
                ui.label(entry.title).classes("text-base font-semibold")
                with ui.row().classes("w-full gap-4"):
                    for item in entry.details:
                        with ui.row().classes("items-baseline gap-1"):
                            ui.label(item.icon)
                            ui.label(item.value).classes("font-semibold")
                            ui.label(item.unit).classes("text-xs uppercase tl-muted")

        def on_pick(workout_id: str = entry.workout_id) -> None:
            self._dispatch(WorkoutSelected(workout_id=workout_id))

        card.on("click", on_pick)

    def clear_entries(self) -> None:
        self.entries.clear()

    def notify(self, message: str, level: NoticeLevel = "info") -> None:
        ui.notify(message, color=level)


def _build_snapshot_store(settings: AppSettings) -> SnapshotStore:
    if not settings.persist:
        return MemorySnapshotStore()
    return JsonFileSnapshotStore(settings.data_file)


async def _locate(settings: AppSettings) -> Event:
    timeout_ms = int(settings.geolocation_timeout_sec * 1000)
    try:
        result = await ui.run_javascript(
            GEOLOCATION_JS % timeout_ms,
            timeout=settings.geolocation_timeout_sec + 1.0,
        )
    except TimeoutError:
        return LocationFailed("Timed out waiting for your position")
    if not isinstance(result, dict) or "lat" not in result:
        reason = result.get("error") if isinstance(result, dict) else None
        return LocationFailed(str(reason or "Failed to get the co-ordinates"))
    return LocationAcquired(lat=float(result["lat"]), lng=float(result["lng"]))


def run_web_ui(settings: AppSettings | None = None) -> int:
    settings = settings or AppSettings()
    snapshot_store = _build_snapshot_store(settings)
    # Every page works on this one store so saves never drop another tab's workouts.
    store = open_workout_store(snapshot_store)

    @ui.page("/")
    async def index() -> None:
        ui.add_head_html(
            """
            <style>
              .tl-card { border-radius: 10px; cursor: pointer; }
              .workout--running { border-left: 5px solid #00c46a; }
              .workout--cycling { border-left: 5px solid #ffb545; }
              .tl-muted { color: #6b7280; }
              .running-popup .leaflet-popup-content-wrapper { border-left: 5px solid #00c46a; }
              .cycling-popup .leaflet-popup-content-wrapper { border-left: 5px solid #ffb545; }
            </style>
            """
        )
        controller: WorkoutLogController | None = None

        def dispatch(event: Event) -> bool:
            if controller is None:
                return False
            return controller.dispatch(event)

        with ui.row().classes("w-full no-wrap gap-4"):
            with ui.column().classes("w-[420px] gap-2"):
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label("TRAILOG").classes("text-xl font-semibold tracking-wide")
                    reset_btn = ui.button("Reset").props("flat color=negative")
                status_label = ui.label("Locating you...").classes("text-sm tl-muted")
                view = NiceGuiWorkoutView(dispatch)
            with ui.column().classes("grow"):
                map_surface = LeafletMapSurface(dispatch)

        with ui.dialog() as reset_dialog, ui.card():
            ui.label("Delete all logged workouts?")
            with ui.row().classes("gap-2"):
                confirm_btn = ui.button("Delete").props("color=negative")
                ui.button("Keep").props("outline").on_click(reset_dialog.close)

        def on_confirm_reset() -> None:
            reset_dialog.close()
            dispatch(ResetRequested())
            ui.notify("Workout log cleared", color="positive")

        reset_btn.on_click(reset_dialog.open)
        confirm_btn.on_click(on_confirm_reset)

        controller = WorkoutLogController(
            map_surface,
            view,
            snapshot_store,
            zoom=settings.zoom,
            pan_duration_sec=settings.pan_duration_sec,
            store=store,
        )
        controller.start()

        await ui.context.client.connected()
        event = await _locate(settings)
        dispatch(event)
        if isinstance(event, LocationAcquired):
            status_label.text = "Click on the map to log a workout"
        else:
            status_label.text = f"No map: {event.reason}"
            logger.info("Running without a map for this client")

    ui.run(host=settings.host, port=settings.port, reload=False, title="Trailog")
    return 0
