"""Shared Typer app object, shared option types, and store utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..io.event_store import EventStore, get_default_events_path

EventsPathOption = Annotated[
    Optional[Path],
    typer.Option("--events-path", "-p", help="Path to events JSONL file"),
]
PlanOption = Annotated[
    Optional[Path],
    typer.Option("--plan", "-P", help="Plan file (YAML/JSON template or expanded plan)"),
]
MesocycleOption = Annotated[
    str, typer.Option("--mesocycle", "-m", help="Mesocycle (plan instance) name")
]
MicrocycleOption = Annotated[
    int, typer.Option("--microcycle", "-w", min=0, help="Week index within the mesocycle (0-based)")
]
WorkoutOption = Annotated[
    str, typer.Option("--workout", "-d", help="Workout / day identifier, e.g. monday")
]
ExerciseOption = Annotated[
    str, typer.Option("--exercise", "-e", help="Exercise name as it appears in the plan")
]
SetIndexOption = Annotated[
    int, typer.Option("--set-index", "-s", min=0, help="Set position within the exercise (0-based)")
]
JsonOption = Annotated[
    bool, typer.Option("--json", "-j", help="Output as JSON for machine processing")
]

app = typer.Typer(
    name="rp-progression",
    help="Hypertrophy workout log with feedback-driven weight/rep prescriptions.",
    no_args_is_help=True,
)


def get_store(events_path: Path | None) -> EventStore:
    """Get event store from path or default location."""
    if events_path is None:
        events_path = get_default_events_path()
    return EventStore(events_path)

