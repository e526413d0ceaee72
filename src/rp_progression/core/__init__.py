"""
Pure progression and state-reconstruction engine.

Every function takes the event log (and plan) as input and returns a
fresh result; nothing here reads files or keeps state between calls.
"""

from .models import Event, Location, Prescription, normalize_workout
from .progression import (
    compute_weight_increment,
    exercise_volume,
    prescribe,
    prescribe_reps,
    prescribe_weight,
)
from .history import all_performances, last_performance, latest_feedback
from .state import dedupe_by_latest, events_to_plan_map, merge_sets, view_progress_in_plan

__all__ = [
    "Event",
    "Location",
    "Prescription",
    "normalize_workout",
    "compute_weight_increment",
    "exercise_volume",
    "prescribe",
    "prescribe_reps",
    "prescribe_weight",
    "all_performances",
    "last_performance",
    "latest_feedback",
    "dedupe_by_latest",
    "events_to_plan_map",
    "merge_sets",
    "view_progress_in_plan",
]
