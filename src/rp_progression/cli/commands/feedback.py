"""Feedback commands: log-soreness and rate-session."""

from typing import Annotated

import typer

from ...core.models import JOINT_PAIN_LEVELS, SETS_WORKLOADS, SORENESS_LEVELS, Location
from ...io.serializers import ValidationError
from .. import views
from ..app import (
    EventsPathOption,
    MesocycleOption,
    MicrocycleOption,
    WorkoutOption,
    app,
    get_store,
)

MuscleGroupOption = Annotated[
    str, typer.Option("--muscle-group", "-g", help="Muscle group, e.g. quads")
]


@app.command("log-soreness")
def log_soreness(
    mesocycle: MesocycleOption,
    microcycle: MicrocycleOption,
    workout: WorkoutOption,
    muscle_group: MuscleGroupOption,
    soreness: Annotated[
        str,
        typer.Option("--soreness", help=f"One of: {', '.join(SORENESS_LEVELS)}"),
    ],
    events_path: EventsPathOption = None,
) -> None:
    """
    Report how a muscle group recovered since it was last trained.

    Feeds next week's weight increment for exercises where it is the
    primary muscle group.
    """
    store = get_store(events_path)
    location = Location(mesocycle, microcycle, workout)

    try:
        store.log_soreness(location, muscle_group, soreness)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Logged soreness for {muscle_group}: {soreness}")


@app.command("rate-session")
def rate_session(
    mesocycle: MesocycleOption,
    microcycle: MicrocycleOption,
    workout: WorkoutOption,
    muscle_group: MuscleGroupOption,
    joint_pain: Annotated[
        str,
        typer.Option("--joint-pain", help=f"One of: {', '.join(JOINT_PAIN_LEVELS)}"),
    ],
    sets_workload: Annotated[
        str,
        typer.Option("--workload", help=f"One of: {', '.join(SETS_WORKLOADS)}"),
    ],
    pump: Annotated[int, typer.Option("--pump", min=0, max=4, help="Pump 0-4")] = 2,
    events_path: EventsPathOption = None,
) -> None:
    """
    Rate a finished session for one muscle group.
    """
    store = get_store(events_path)
    location = Location(mesocycle, microcycle, workout)

    try:
        store.log_session_rating(location, muscle_group, pump, joint_pain, sets_workload)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(
        f"Rated {muscle_group}: pump {pump}, joint pain {joint_pain}, workload {sets_workload}"
    )
