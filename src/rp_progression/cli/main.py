"""
CLI entry point using Typer.

Provides commands for logging and prescribing hypertrophy training:
- init: Create the event log
- log-set / skip-set: Record what happened to a planned set
- log-soreness / rate-session: Record per-muscle-group feedback
- prescribe: Suggest weight and reps for a set
- history / volume: Look back at logged sets
- progress: Show the plan with logged sets merged in
- show-events / clear-events: Inspect or reset the raw log
"""

from .app import app
from .commands import feedback, planning, sessions  # noqa: F401  (registers commands)


if __name__ == "__main__":
    app()
