"""
Reconstruct workout progress from the event log.

view_progress_in_plan() merges
  - a flat list of events (what was done) and
  - a nested plan (what should be done)
into one nested dict carrying both planned and performed data.

Pipeline:
  1. keep events that address a set (set_index is not None)
  2. dedupe: latest timestamp wins per set position (corrections)
  3. project into {meso: {micro: {workout: {exercise: [sets]}}}}
  4. deep-merge with the plan, merging set lists element-wise
"""

from __future__ import annotations

from typing import Any, Sequence

from .history import latest_event
from .models import SET_EVENT_TYPES, Event, Location, normalize_workout
from .util import deep_merge_with

SlotKey = tuple[str, int, str, str | None, int | None]
ProgressView = dict[str, dict[int, dict[str, dict[str, list[dict[str, Any]]]]]]


def set_location(event: Event) -> SlotKey:
    """Natural key of the set position an event addresses."""
    return (
        event.mesocycle,
        event.microcycle,
        normalize_workout(event.workout),
        event.exercise,
        event.set_index,
    )


def dedupe_by_latest(events: Sequence[Event]) -> list[Event]:
    """
    Keep only the latest event for each set position.

    Corrections are just new events at the same position.  When two events
    share a position and a timestamp, the one later in the input wins.
    Groups are returned in order of first appearance.
    """
    groups: dict[SlotKey, list[Event]] = {}
    for event in events:
        groups.setdefault(set_location(event), []).append(event)
    return [latest_event(group) for group in groups.values()]


def events_to_plan_map(events: Sequence[Event]) -> ProgressView:
    """
    Reshape flat events into the plan's nesting.

    Each exercise's list is as long as its highest set_index + 1; positions
    without an event hold an empty dict.

    Input:  [Event(mesocycle="X", microcycle=0, workout="Monday", exercise="Squat", set_index=1)]
    Output: {"X": {0: {"monday": {"Squat": [{}, {...event...}]}}}}
    """
    result: ProgressView = {}
    for event in events:
        workouts = result.setdefault(event.mesocycle, {}).setdefault(event.microcycle, {})
        exercises = workouts.setdefault(normalize_workout(event.workout), {})
        sets = exercises.setdefault(event.exercise, [])
        if len(sets) <= event.set_index:
            sets.extend({} for _ in range(event.set_index + 1 - len(sets)))
        sets[event.set_index] = event.to_dict()
    return result


def merge_sets(
    performed: Sequence[dict[str, Any]],
    planned: Sequence[dict[str, Any]],
) -> list[dict[str, Any]]:
    """
    Merge performed and planned set lists position by position.

    Performed fields win over planned fields.  The result is as long as
    the longer list; a missing side counts as an empty dict.
    """
    n = max(len(performed), len(planned))
    merged = []
    for i in range(n):
        entry = dict(planned[i]) if i < len(planned) else {}
        if i < len(performed):
            entry.update(performed[i])
        merged.append(entry)
    return merged


def view_progress_in_plan(events: Sequence[Event], plan: dict) -> dict:
    """
    Merge the event log into the plan to show progress.

    Returns the plan structure with performed data merged into each set:
    performed_weight / performed_reps / type when logged, plan-only data
    (exercise_name, muscle_groups, ...) otherwise.  Sets or exercises that
    were performed but not planned are kept too.

    Args:
        events: Full event log (feedback events are ignored)
        plan: {mesocycle: {microcycle: {workout: {exercise: [set spec]}}}}

    Returns:
        New nested dict with workout keys normalized; the inputs are
        not modified
    """
    set_events = [e for e in events if e.set_index is not None]
    if not set_events:
        return plan
    event_map = events_to_plan_map(dedupe_by_latest(set_events))

    def combine(planned: Any, performed: Any) -> Any:
        if isinstance(planned, list) and isinstance(performed, list):
            return merge_sets(performed, planned)
        return performed

    return deep_merge_with(combine, _normalize_plan_workouts(plan), event_map)


def _normalize_plan_workouts(plan: dict) -> dict:
    """Copy of plan with workout keys in canonical form, matching the projection."""
    return {
        meso: {
            micro: {normalize_workout(day): exercises for day, exercises in workouts.items()}
            for micro, workouts in microcycles.items()
        }
        for meso, microcycles in plan.items()
    }


# ---------------------------------------------------------------------------
# Session queries derived from the progress view
# ---------------------------------------------------------------------------


def last_active_workout(events: Sequence[Event]) -> Location | None:
    """Workout (meso, micro, workout) of the most recent event, or None."""
    latest = latest_event(events)
    if latest is None:
        return None
    return Location(
        mesocycle=latest.mesocycle,
        microcycle=latest.microcycle,
        workout=normalize_workout(latest.workout),
    )


def _workout_exercises(progress: dict, location: Location) -> dict[str, list[dict]]:
    return (
        progress.get(location.mesocycle, {})
        .get(location.microcycle, {})
        .get(normalize_workout(location.workout), {})
    )


def _has_feedback(
    events: Sequence[Event], event_type: str, location: Location, muscle_group: str
) -> bool:
    workout = normalize_workout(location.workout)
    return any(
        e.type == event_type
        and e.mesocycle == location.mesocycle
        and e.microcycle == location.microcycle
        and normalize_workout(e.workout) == workout
        and e.muscle_group == muscle_group
        for e in events
    )


def _is_logged(entry: dict) -> bool:
    return entry.get("type") in SET_EVENT_TYPES


def _unique(items: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _sets_for_group(exercises: dict[str, list[dict]], muscle_group: str) -> list[dict]:
    return [
        s
        for sets in exercises.values()
        for s in sets
        if muscle_group in (s.get("muscle_groups") or [])
    ]


def pending_soreness_feedback(
    events: Sequence[Event],
    progress: dict,
    location: Location,
    muscle_groups: Sequence[str],
) -> list[str]:
    """
    Muscle groups that still need a soreness report for this workout.

    Soreness is asked once the first set training the group is logged.
    """
    exercises = _workout_exercises(progress, location)
    pending = []
    for mg in _unique(muscle_groups):
        started = any(_is_logged(s) for s in _sets_for_group(exercises, mg))
        if started and not _has_feedback(events, "soreness-reported", location, mg):
            pending.append(mg)
    return pending


def pending_session_rating(
    events: Sequence[Event],
    progress: dict,
    location: Location,
    muscle_groups: Sequence[str],
) -> list[str]:
    """
    Muscle groups that still need a session rating for this workout.

    A rating is due once every set training the group has been completed
    or skipped.
    """
    exercises = _workout_exercises(progress, location)
    pending = []
    for mg in _unique(muscle_groups):
        sets = _sets_for_group(exercises, mg)
        finished = bool(sets) and all(_is_logged(s) for s in sets)
        if finished and not _has_feedback(events, "session-rated", location, mg):
            pending.append(mg)
    return pending
