"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of events, prescriptions and
plan progress.
"""

from typing import Any

from rich.console import Console
from rich.table import Table

from ..core.models import Event, Location, Prescription

console = Console()


def _fmt_weight(weight: float | None) -> str:
    if weight is None:
        return "-"
    return f"{weight:g}"


def _fmt_location(location: Location) -> str:
    parts = [location.mesocycle, f"week {location.microcycle + 1}", location.workout]
    if location.exercise is not None:
        parts.append(location.exercise)
    if location.set_index is not None:
        parts.append(f"set {location.set_index + 1}")
    return " / ".join(parts)


def _fmt_details(event: Event) -> str:
    """Type-specific summary of an event."""
    if event.type == "set-completed":
        text = f"{_fmt_weight(event.performed_weight)} x {event.performed_reps}"
        if event.prescribed_weight is not None or event.prescribed_reps is not None:
            text += (
                f"  [dim](prescribed {_fmt_weight(event.prescribed_weight)}"
                f" x {event.prescribed_reps if event.prescribed_reps is not None else '-'})[/dim]"
            )
        return text
    if event.type == "set-skipped":
        return "[dim]skipped[/dim]"
    if event.type == "soreness-reported":
        return f"{event.muscle_group}: {event.soreness}"
    return (
        f"{event.muscle_group}: pump {event.pump if event.pump is not None else '-'}, "
        f"joint pain {event.joint_pain}, workload {event.sets_workload}"
    )


def format_events_table(events: list[Event]) -> Table:
    """
    Format the event log as a Rich table.

    Args:
        events: Events sorted by timestamp

    Returns:
        Rich Table object
    """
    table = Table(title="Event Log")

    table.add_column("#", justify="right", style="dim")
    table.add_column("Timestamp", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Meso")
    table.add_column("Wk", justify="right")
    table.add_column("Workout")
    table.add_column("Exercise")
    table.add_column("Set", justify="right")
    table.add_column("Details")

    for i, event in enumerate(events, 1):
        table.add_row(
            str(i),
            str(event.timestamp),
            event.type,
            event.mesocycle,
            str(event.microcycle + 1),
            event.workout,
            event.exercise or "",
            str(event.set_index + 1) if event.set_index is not None else "",
            _fmt_details(event),
        )

    return table


def print_events(events: list[Event]) -> None:
    """Print the full event log."""
    if not events:
        console.print("[yellow]No events logged yet.[/yellow]")
        return
    console.print(format_events_table(events))


def print_prescription(location: Location, prescription: Prescription) -> None:
    """Print a prescription, making "no history yet" explicit."""
    console.print(f"[bold]{_fmt_location(location)}[/bold]")
    if prescription.is_empty:
        console.print("  [yellow]No prescription yet[/yellow] (no earlier performance at this slot)")
        return
    console.print(f"  Weight: [green]{_fmt_weight(prescription.weight)}[/green]")
    reps = prescription.reps if prescription.reps is not None else "-"
    console.print(f"  Reps:   [green]{reps}[/green]")


def print_performances(location: Location, performances: list[Event]) -> None:
    """Print every completed set logged at a slot."""
    table = Table(title=_fmt_location(location))
    table.add_column("Week", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Timestamp", justify="right", style="dim")

    for event in performances:
        table.add_row(
            str(event.microcycle + 1),
            _fmt_weight(event.performed_weight),
            str(event.performed_reps),
            str(event.timestamp),
        )

    console.print(table)


def _fmt_set_cell(entry: dict[str, Any]) -> str:
    if entry.get("type") == "set-completed":
        return f"[green]{_fmt_weight(entry.get('performed_weight'))} x {entry.get('performed_reps')}[/green]"
    if entry.get("type") == "set-skipped":
        return "[dim]skipped[/dim]"
    return "[dim]·[/dim]"


def print_progress(progress: dict, mesocycle: str | None = None) -> None:
    """
    Print the merged plan/progress view, one table per workout.

    Args:
        progress: Output of view_progress_in_plan
        mesocycle: Restrict output to one mesocycle
    """
    for meso, microcycles in progress.items():
        if mesocycle is not None and meso != mesocycle:
            continue
        console.print(f"\n[bold cyan]{meso}[/bold cyan]")
        for micro in sorted(microcycles):
            for workout, exercises in microcycles[micro].items():
                table = Table(title=f"Week {micro + 1} - {workout.capitalize()}")
                table.add_column("Exercise")
                table.add_column("Muscle groups", style="dim")
                table.add_column("Sets")
                for name, sets in exercises.items():
                    groups = sorted(
                        {mg for s in sets for mg in (s.get("muscle_groups") or [])}
                    )
                    table.add_row(
                        str(name),
                        ", ".join(groups),
                        "  ".join(_fmt_set_cell(s) for s in sets),
                    )
                console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.strip().lower() in ("y", "yes")
