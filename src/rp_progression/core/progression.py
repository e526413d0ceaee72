"""
Weight and rep prescriptions computed on the fly from the event log.

Nothing is planned ahead.  Each slot's next load is derived from its last
performance in an earlier microcycle:

    weight = last weight + increment
    increment = base x soreness modifier x workload modifier
                (or base x joint-pain override when pain was reported)

Reps stay at the last performed count unless the user picks a different
weight, in which case they are read off the 1RM curve for that weight.

Example (no feedback):
    Last week:  100 x 10          -> 1RM ≈ 133.3
    Prescribed: 102.5 x 10
    User picks 110                -> 110 / 133.3 ≈ 82.5 % -> 7 reps
"""

from __future__ import annotations

from collections.abc import Sequence

from .config import DEFAULT_MODIFIER, DEFAULT_PARAMS, ProgressionParams
from .history import last_performance, latest_feedback
from .models import Event, Location, Prescription, normalize_workout
from .onerm import estimate_one_rep_max, reps_for_weight


def compute_weight_increment(
    events: Sequence[Event],
    location: Location,
    muscle_groups: Sequence[str] | None = None,
    params: ProgressionParams | None = None,
) -> float:
    """
    Weight increment adjusted by last microcycle's feedback.

    Only the primary (first) muscle group is consulted.  Joint pain other
    than "none" replaces the soreness/workload combination entirely.

    Args:
        events: Full event log
        location: Slot being prescribed
        muscle_groups: Ordered sequence of muscle groups trained by the
            exercise, primary first
        params: Progression parameters (defaults from config)

    Returns:
        Increment in weight units; 0.0 when severe joint pain was reported

    Raises:
        TypeError: If muscle_groups is a string or an unordered collection
    """
    if muscle_groups is not None and (
        isinstance(muscle_groups, str) or not isinstance(muscle_groups, Sequence)
    ):
        raise TypeError(
            f"muscle_groups must be an ordered sequence, got {type(muscle_groups).__name__}"
        )
    params = params or DEFAULT_PARAMS
    base = params.base_weight_increment

    if not muscle_groups or location.microcycle <= 0:
        return base

    primary = muscle_groups[0]
    soreness = latest_feedback(events, "soreness-reported", location, primary)
    session = latest_feedback(events, "session-rated", location, primary)

    soreness_mod = DEFAULT_MODIFIER
    if soreness is not None:
        soreness_mod = params.soreness_modifiers.get(soreness.soreness, DEFAULT_MODIFIER)

    workload_mod = DEFAULT_MODIFIER
    pain_override = None
    if session is not None:
        workload_mod = params.workload_modifiers.get(session.sets_workload, DEFAULT_MODIFIER)
        pain_override = params.joint_pain_override.get(session.joint_pain)

    if pain_override is not None:
        return base * pain_override
    return base * soreness_mod * workload_mod


def prescribe_weight(
    events: Sequence[Event],
    location: Location,
    muscle_groups: Sequence[str] | None = None,
    params: ProgressionParams | None = None,
) -> float | None:
    """
    Suggested weight: last performed weight plus the feedback-adjusted increment.

    Returns None when the slot has no earlier performance (first week of
    the mesocycle).
    """
    last = last_performance(events, location)
    if last is None:
        return None
    increment = compute_weight_increment(events, location, muscle_groups, params)
    return last.performed_weight + increment


def prescribe_reps(
    events: Sequence[Event],
    location: Location,
    actual_weight: float | None = None,
    muscle_groups: Sequence[str] | None = None,
    params: ProgressionParams | None = None,
) -> int | None:
    """
    Suggested reps.

    If actual_weight is given and differs from the prescribed weight, reps
    are recomputed from the 1RM estimated on the last performance so the
    set stays at an equivalent intensity.  Otherwise the last performed
    reps are kept.  Returns None when there is no history.
    """
    params = params or DEFAULT_PARAMS
    last = last_performance(events, location)
    if last is None:
        return None

    increment = compute_weight_increment(events, location, muscle_groups, params)
    prescribed_weight = last.performed_weight + increment
    one_rm = estimate_one_rep_max(
        last.performed_weight, last.performed_reps, params.rep_percentage_table
    )

    if actual_weight is not None and actual_weight != prescribed_weight:
        return max(1, reps_for_weight(one_rm, actual_weight, params.rep_percentage_table))
    return last.performed_reps


def prescribe(
    events: Sequence[Event],
    location: Location,
    actual_weight: float | None = None,
    muscle_groups: Sequence[str] | None = None,
    params: ProgressionParams | None = None,
) -> Prescription:
    """Full prescription for a slot; either field may be None."""
    return Prescription(
        weight=prescribe_weight(events, location, muscle_groups, params),
        reps=prescribe_reps(events, location, actual_weight, muscle_groups, params),
    )


def exercise_volume(events: Sequence[Event], location: Location) -> int:
    """Number of completed sets for an exercise in one microcycle (set index ignored)."""
    workout = normalize_workout(location.workout)
    return sum(
        1
        for e in events
        if e.type == "set-completed"
        and e.mesocycle == location.mesocycle
        and e.microcycle == location.microcycle
        and normalize_workout(e.workout) == workout
        and e.exercise == location.exercise
    )
