"""Planning commands: prescribe, history, volume, progress."""

import json
from pathlib import Path
from typing import Annotated, List, Optional

import typer

from ...core.engine.config_loader import progression_params
from ...core.history import all_performances
from ...core.models import Event, Location, normalize_workout
from ...core.plan import workout_muscle_groups
from ...core.progression import exercise_volume, prescribe as compute_prescription
from ...core.state import (
    last_active_workout,
    pending_session_rating,
    pending_soreness_feedback,
    view_progress_in_plan,
)
from ...io.event_store import EventStore
from ...io.plan_loader import load_plan
from ...io.serializers import ValidationError, event_to_dict
from .. import views
from ..app import (
    EventsPathOption,
    ExerciseOption,
    JsonOption,
    MesocycleOption,
    MicrocycleOption,
    PlanOption,
    SetIndexOption,
    WorkoutOption,
    app,
    get_store,
)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Progression YAML overriding the bundled tables"),
]


def _load_events(store: EventStore) -> list[Event]:
    try:
        return store.load_events()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def _load_plan_or_exit(plan_path: Path) -> dict:
    try:
        return load_plan(plan_path)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def _planned_muscle_groups(
    plan: dict, mesocycle: str, microcycle: int, workout: str, exercise: str
) -> list[str]:
    """Muscle groups of an exercise as listed in the plan (primary first)."""
    sets = (
        plan.get(mesocycle, {})
        .get(microcycle, {})
        .get(normalize_workout(workout), {})
        .get(exercise, [])
    )
    for spec in sets:
        if spec.get("muscle_groups"):
            return list(spec["muscle_groups"])
    return []


@app.command()
def prescribe(
    mesocycle: MesocycleOption,
    microcycle: MicrocycleOption,
    workout: WorkoutOption,
    exercise: ExerciseOption,
    set_index: SetIndexOption,
    actual_weight: Annotated[
        Optional[float],
        typer.Option("--actual-weight", "-a", help="Weight you intend to use instead"),
    ] = None,
    muscle_groups: Annotated[
        Optional[List[str]],
        typer.Option("--muscle-group", "-g", help="Muscle group (repeat; primary first)"),
    ] = None,
    plan_path: PlanOption = None,
    config_path: ConfigOption = None,
    events_path: EventsPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Suggest weight and reps for a set from last week's performance and feedback.

    Muscle groups drive the feedback adjustment.  Pass them with -g, or
    point --plan at a plan file to read them from there.

      rp-progression prescribe -m "Meso 1" -w 1 -d monday -e Squat -s 0 -g quads
    """
    store = get_store(events_path)
    events = _load_events(store)

    groups = list(muscle_groups or [])
    if not groups and plan_path is not None:
        plan = _load_plan_or_exit(plan_path)
        groups = _planned_muscle_groups(plan, mesocycle, microcycle, workout, exercise)

    params = progression_params(config_path)
    location = Location(mesocycle, microcycle, workout, exercise, set_index)
    result = compute_prescription(events, location, actual_weight, groups, params)

    if json_out:
        print(json.dumps(result.to_dict()))
        return
    views.print_prescription(location, result)


@app.command()
def history(
    mesocycle: MesocycleOption,
    workout: WorkoutOption,
    exercise: ExerciseOption,
    set_index: SetIndexOption,
    events_path: EventsPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show every completed set logged at one set position, across all weeks.
    """
    store = get_store(events_path)
    events = _load_events(store)

    location = Location(mesocycle, 0, workout, exercise, set_index)
    performances = all_performances(events, location)

    if json_out:
        print(json.dumps([event_to_dict(e) for e in performances], indent=2))
        return
    if not performances:
        views.print_info("No sets logged at this position yet.")
        return
    views.print_performances(location, performances)


@app.command()
def volume(
    mesocycle: MesocycleOption,
    microcycle: MicrocycleOption,
    workout: WorkoutOption,
    exercise: ExerciseOption,
    events_path: EventsPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Count completed sets of an exercise in one week's workout.
    """
    store = get_store(events_path)
    events = _load_events(store)

    location = Location(mesocycle, microcycle, workout, exercise)
    count = exercise_volume(events, location)

    if json_out:
        print(json.dumps({"exercise": exercise, "volume": count}))
        return
    views.console.print(f"{exercise}: [bold]{count}[/bold] completed set(s)")


@app.command()
def progress(
    plan_path: Annotated[
        Path, typer.Option("--plan", "-P", help="Plan file (YAML/JSON template or expanded plan)")
    ],
    mesocycle: Annotated[
        Optional[str], typer.Option("--mesocycle", "-m", help="Only show this mesocycle")
    ] = None,
    events_path: EventsPathOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the plan with logged sets merged in.

    Also lists muscle groups that still owe soreness or session feedback
    in the most recently active workout.
    """
    store = get_store(events_path)
    events = _load_events(store)
    plan = _load_plan_or_exit(plan_path)

    merged = view_progress_in_plan(events, plan)

    if json_out:
        print(json.dumps(merged, indent=2))
        return

    views.print_progress(merged, mesocycle)

    current = last_active_workout(events)
    if current is None:
        return
    exercises = (
        merged.get(current.mesocycle, {})
        .get(current.microcycle, {})
        .get(current.workout, {})
    )
    groups = workout_muscle_groups(exercises)
    soreness_due = pending_soreness_feedback(events, merged, current, groups)
    rating_due = pending_session_rating(events, merged, current, groups)

    if soreness_due:
        views.print_warning(f"Soreness feedback due for: {', '.join(soreness_due)}")
    if rating_due:
        views.print_warning(f"Session rating due for: {', '.join(rating_due)}")
