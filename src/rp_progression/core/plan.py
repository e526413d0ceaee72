"""
Plan template expansion.

A template describes one week and how many weeks the mesocycle lasts:

    {"name": "Upper/Lower",
     "n_microcycles": 4,
     "workouts": {"monday": {"exercises": {"Squat": {"n_sets": 3,
                                                     "muscle_groups": ["quads"]}}}}}

build_plan() repeats that week n_microcycles times and expands each
exercise into one spec dict per set, giving the nesting that
state.view_progress_in_plan() merges events into.
"""

from typing import Any

from .models import normalize_workout


def expand_exercises(workout_template: dict[str, Any]) -> dict[str, list[dict[str, Any]]]:
    """
    Expand {"exercises": {name: {"n_sets": N, ...}}} into {name: [spec] * N}.

    Each spec drops n_sets and gains exercise_name.  Exercise order is kept.
    """
    expanded: dict[str, list[dict[str, Any]]] = {}
    for name, spec in workout_template.get("exercises", {}).items():
        set_spec = {k: v for k, v in spec.items() if k != "n_sets"}
        set_spec["exercise_name"] = name
        expanded[name] = [dict(set_spec) for _ in range(int(spec.get("n_sets", 1)))]
    return expanded


def build_plan(template: dict[str, Any]) -> dict[str, dict[int, dict[str, Any]]]:
    """
    Expand a mesocycle template into the full nested plan.

    Returns:
        {name: {0: {workout: {exercise: [set spec, ...]}}, 1: {...}, ...}}
        with microcycle keys ascending and workout keys normalized.
    """
    week = {
        normalize_workout(day): expand_exercises(workout)
        for day, workout in template.get("workouts", {}).items()
    }
    microcycles = {
        i: {day: {name: [dict(s) for s in sets] for name, sets in exercises.items()}
            for day, exercises in week.items()}
        for i in range(int(template.get("n_microcycles", 1)))
    }
    return {template["name"]: microcycles}


def workout_muscle_groups(exercises: dict[str, list[dict[str, Any]]]) -> list[str]:
    """Distinct muscle groups trained in a workout, in plan order."""
    groups: list[str] = []
    for sets in exercises.values():
        for s in sets:
            for mg in s.get("muscle_groups") or []:
                if mg not in groups:
                    groups.append(mg)
    return groups
