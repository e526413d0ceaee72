"""Session commands: init, log-set, skip-set, show-events, clear-events."""

import json
from typing import Annotated, Optional

import typer

from ...core.models import Location
from ...io.serializers import ValidationError, event_to_dict
from .. import views
from ..app import (
    EventsPathOption,
    ExerciseOption,
    JsonOption,
    MesocycleOption,
    MicrocycleOption,
    SetIndexOption,
    WorkoutOption,
    app,
    get_store,
)


def _require_store(events_path):
    store = get_store(events_path)
    if not store.exists():
        views.print_error(f"Event log not found: {store.events_path}")
        views.print_info("Run 'init' first to create the event log.")
        raise typer.Exit(1)
    return store


@app.command()
def init(events_path: EventsPathOption = None) -> None:
    """
    Create an empty event log (no-op if it already exists).
    """
    store = get_store(events_path)
    existed = store.exists()
    store.init()
    if existed:
        views.print_info(f"Event log already exists: {store.events_path}")
    else:
        views.print_success(f"Created event log: {store.events_path}")


@app.command("log-set")
def log_set(
    mesocycle: MesocycleOption,
    microcycle: MicrocycleOption,
    workout: WorkoutOption,
    exercise: ExerciseOption,
    set_index: SetIndexOption,
    weight: Annotated[float, typer.Option("--weight", help="Weight lifted")],
    reps: Annotated[int, typer.Option("--reps", help="Reps performed")],
    prescribed_weight: Annotated[
        Optional[float],
        typer.Option("--prescribed-weight", help="Weight that was prescribed (for the record)"),
    ] = None,
    prescribed_reps: Annotated[
        Optional[int],
        typer.Option("--prescribed-reps", help="Reps that were prescribed (for the record)"),
    ] = None,
    events_path: EventsPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Log a completed set.

    Logging again at the same slot records a correction: the latest entry wins.

      rp-progression log-set -m "Meso 1" -w 0 -d monday -e Squat -s 0 --weight 100 --reps 10
    """
    store = _require_store(events_path)
    location = Location(mesocycle, microcycle, workout, exercise, set_index)

    try:
        event = store.log_set(location, weight, reps, prescribed_weight, prescribed_reps)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(event_to_dict(event)))
        return
    views.print_success(
        f"Logged {exercise} set {set_index + 1}: {weight:g} x {reps} "
        f"(week {microcycle + 1}, {event.workout})"
    )


@app.command("skip-set")
def skip_set(
    mesocycle: MesocycleOption,
    microcycle: MicrocycleOption,
    workout: WorkoutOption,
    exercise: ExerciseOption,
    set_index: SetIndexOption,
    events_path: EventsPathOption = None,
) -> None:
    """
    Mark a planned set as skipped.
    """
    store = _require_store(events_path)
    location = Location(mesocycle, microcycle, workout, exercise, set_index)

    try:
        store.skip_set(location)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Skipped {exercise} set {set_index + 1} (week {microcycle + 1})")


@app.command("show-events")
def show_events(
    events_path: EventsPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display the raw event log.
    """
    store = _require_store(events_path)

    try:
        events = store.load_events()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps([event_to_dict(e) for e in events], indent=2))
        return
    views.print_events(events)


@app.command("clear-events")
def clear_events(
    events_path: EventsPathOption = None,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Skip confirmation prompt")
    ] = False,
) -> None:
    """
    Delete every logged event.
    """
    store = _require_store(events_path)

    if not force and not views.confirm_action("Clear all workout logs?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    store.clear()
    views.print_success(f"Cleared {store.events_path}")
