"""
History queries over the event log.

Prescriptions look back at *previous* microcycles only: sets logged earlier
in the current week are not history for the slot being prescribed.
Feedback is read from exactly the preceding microcycle.
"""

from typing import Iterable, Sequence

from .models import Event, Location, normalize_workout


def same_slot(event: Event, location: Location) -> bool:
    """True if the event sits at the location's (meso, workout, exercise, set)."""
    return (
        event.mesocycle == location.mesocycle
        and normalize_workout(event.workout) == normalize_workout(location.workout)
        and event.exercise == location.exercise
        and event.set_index == location.set_index
    )


def completed_sets(events: Iterable[Event]) -> list[Event]:
    return [e for e in events if e.type == "set-completed"]


def latest_event(events: Sequence[Event]) -> Event | None:
    """
    Event with the greatest timestamp.

    Ties go to the event that appears last in the input, matching the
    append order of the log.
    """
    if not events:
        return None
    return max(reversed(events), key=lambda e: e.timestamp)


def last_performance(events: Sequence[Event], location: Location) -> Event | None:
    """
    Most recent completed set for this slot in a previous microcycle.

    Args:
        events: Full event log
        location: Slot being prescribed

    Returns:
        Latest matching set-completed event, or None if there is no history
    """
    candidates = [
        e
        for e in completed_sets(events)
        if same_slot(e, location) and e.microcycle < location.microcycle
    ]
    return latest_event(candidates)


def all_performances(events: Sequence[Event], location: Location) -> list[Event]:
    """All completed sets for this slot across every microcycle, oldest first."""
    matches = [e for e in completed_sets(events) if same_slot(e, location)]
    return sorted(matches, key=lambda e: e.timestamp)


def _muscle_group_matches(event: Event, muscle_group: str | Iterable[str]) -> bool:
    if isinstance(muscle_group, str):
        return event.muscle_group == muscle_group
    return event.muscle_group in set(muscle_group)


def latest_feedback(
    events: Sequence[Event],
    event_type: str,
    location: Location,
    muscle_group: str | Iterable[str],
) -> Event | None:
    """
    Latest feedback of one type for a muscle group from the previous microcycle.

    Args:
        events: Full event log
        event_type: "soreness-reported" or "session-rated"
        location: Current location (only mesocycle and microcycle are used)
        muscle_group: A single group or a collection of candidate groups

    Returns:
        Latest matching event, or None
    """
    previous = location.previous_microcycle()
    candidates = [
        e
        for e in events
        if e.type == event_type
        and e.mesocycle == location.mesocycle
        and e.microcycle == previous
        and _muscle_group_matches(e, muscle_group)
    ]
    return latest_event(candidates)
