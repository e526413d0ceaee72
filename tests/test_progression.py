"""
Tests for history queries and weight/rep prescriptions.

Scenarios follow one slot ("Meso 1", monday, Squat, set 0) across
microcycles with feedback logged for its primary muscle group.
"""

import pytest

from rp_progression.core.config import ProgressionParams
from rp_progression.core.history import all_performances, last_performance, latest_feedback
from rp_progression.core.models import Event, Location
from rp_progression.core.progression import (
    compute_weight_increment,
    exercise_volume,
    prescribe,
    prescribe_reps,
    prescribe_weight,
)

MESO = "Meso 1"


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _done(
    weight: float,
    reps: int,
    micro: int = 0,
    ts: int = 1000,
    exercise: str = "Squat",
    set_index: int = 0,
    workout: str = "monday",
    meso: str = MESO,
) -> Event:
    return Event(
        type="set-completed",
        mesocycle=meso,
        microcycle=micro,
        workout=workout,
        timestamp=ts,
        exercise=exercise,
        set_index=set_index,
        performed_weight=weight,
        performed_reps=reps,
    )


def _soreness(level: str, micro: int = 0, ts: int = 2000, group: str = "quads") -> Event:
    return Event(
        type="soreness-reported",
        mesocycle=MESO,
        microcycle=micro,
        workout="monday",
        timestamp=ts,
        muscle_group=group,
        soreness=level,
    )


def _rating(
    workload: str = "just-right",
    joint_pain: str = "none",
    micro: int = 0,
    ts: int = 3000,
    group: str = "quads",
) -> Event:
    return Event(
        type="session-rated",
        mesocycle=MESO,
        microcycle=micro,
        workout="monday",
        timestamp=ts,
        muscle_group=group,
        pump=2,
        joint_pain=joint_pain,
        sets_workload=workload,
    )


def _slot(micro: int = 1, exercise: str = "Squat", set_index: int = 0) -> Location:
    return Location(MESO, micro, "monday", exercise, set_index)


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------

class TestLastPerformance:
    """Look-back to earlier microcycles only."""

    def test_no_history(self):
        assert last_performance([], _slot()) is None

    def test_previous_microcycle(self):
        event = _done(100, 10, micro=0)
        assert last_performance([event], _slot(1)) == event

    def test_current_microcycle_is_not_history(self):
        """A set logged this week does not count for this week's prescription."""
        events = [_done(100, 10, micro=0, ts=1), _done(105, 9, micro=1, ts=2)]
        assert last_performance(events, _slot(1)).performed_weight == 100

    def test_latest_earlier_microcycle_wins(self):
        events = [_done(100, 10, micro=0, ts=1), _done(102.5, 10, micro=1, ts=2)]
        assert last_performance(events, _slot(2)).performed_weight == 102.5

    def test_correction_within_week(self):
        """Two logs at the same slot: the later timestamp wins."""
        events = [_done(100, 10, ts=5), _done(95, 10, ts=9)]
        assert last_performance(events, _slot(1)).performed_weight == 95

    def test_timestamp_tie_goes_to_later_event(self):
        events = [_done(100, 10, ts=5), _done(97.5, 10, ts=5)]
        assert last_performance(events, _slot(1)).performed_weight == 97.5

    def test_workout_spelling_is_normalized(self):
        """Monday and :monday address the same workout."""
        event = _done(100, 10, workout="Monday")
        location = Location(MESO, 1, ":monday", "Squat", 0)
        assert last_performance([event], location) == event

    def test_other_slots_ignored(self):
        events = [
            _done(60, 12, exercise="Bench"),
            _done(100, 10, set_index=1),
            _done(100, 10, meso="Meso 2"),
        ]
        assert last_performance(events, _slot(1)) is None

    def test_skipped_sets_ignored(self):
        skipped = Event(
            type="set-skipped", mesocycle=MESO, microcycle=0, workout="monday",
            timestamp=1, exercise="Squat", set_index=0,
        )
        assert last_performance([skipped], _slot(1)) is None


class TestAllPerformances:
    """Every completed set at a slot, any microcycle."""

    def test_sorted_oldest_first_across_microcycles(self):
        events = [_done(105, 9, micro=2, ts=30), _done(100, 10, micro=0, ts=10),
                  _done(102.5, 10, micro=1, ts=20)]
        weights = [e.performed_weight for e in all_performances(events, _slot(0))]
        assert weights == [100, 102.5, 105]

    def test_includes_current_microcycle(self):
        """Unlike last_performance, nothing is filtered by microcycle."""
        events = [_done(100, 10, micro=1)]
        assert len(all_performances(events, _slot(1))) == 1


class TestLatestFeedback:
    """Feedback comes from exactly the previous microcycle."""

    def test_previous_microcycle_only(self):
        events = [_soreness("still-sore", micro=0), _soreness("never-sore", micro=1)]
        found = latest_feedback(events, "soreness-reported", _slot(2), "quads")
        assert found.soreness == "never-sore"

    def test_older_feedback_ignored(self):
        events = [_soreness("still-sore", micro=0)]
        assert latest_feedback(events, "soreness-reported", _slot(2), "quads") is None

    def test_matches_any_of_several_groups(self):
        events = [_soreness("healed-early", group="glutes")]
        found = latest_feedback(events, "soreness-reported", _slot(1), ["quads", "glutes"])
        assert found.muscle_group == "glutes"

    def test_latest_report_wins(self):
        events = [_soreness("still-sore", ts=1), _soreness("never-sore", ts=2)]
        found = latest_feedback(events, "soreness-reported", _slot(1), "quads")
        assert found.soreness == "never-sore"


# ---------------------------------------------------------------------------
# Prescriptions
# ---------------------------------------------------------------------------

class TestWeightIncrement:
    """base x soreness x workload, or base x joint-pain override."""

    def test_no_feedback_is_base(self):
        assert compute_weight_increment([], _slot(), ["quads"]) == 2.5

    def test_without_muscle_groups_is_base(self):
        events = [_soreness("never-sore")]
        assert compute_weight_increment(events, _slot(), None) == 2.5

    def test_first_microcycle_is_base(self):
        assert compute_weight_increment([], _slot(0), ["quads"]) == 2.5

    @pytest.mark.parametrize(
        "level,expected",
        [
            ("never-sore", 3.75),
            ("healed-early", 3.125),
            ("healed-just-in-time", 2.5),
            ("still-sore", 1.25),
        ],
    )
    def test_soreness_modifiers(self, level, expected):
        events = [_soreness(level)]
        assert compute_weight_increment(events, _slot(), ["quads"]) == pytest.approx(expected)

    def test_soreness_and_workload_multiply(self):
        """healed-early (1.25) x easy (1.25) x 2.5."""
        events = [_soreness("healed-early"), _rating("easy")]
        assert compute_weight_increment(events, _slot(), ["quads"]) == pytest.approx(3.90625)

    def test_too_much_workload(self):
        events = [_rating("too-much")]
        assert compute_weight_increment(events, _slot(), ["quads"]) == pytest.approx(1.875)

    def test_some_joint_pain_overrides(self):
        """Pain replaces soreness/workload: 2.5 x 0.75."""
        events = [_soreness("never-sore"), _rating("easy", joint_pain="some")]
        assert compute_weight_increment(events, _slot(), ["quads"]) == pytest.approx(1.875)

    def test_severe_joint_pain_stops_progression(self):
        events = [_soreness("never-sore"), _rating("easy", joint_pain="severe")]
        assert compute_weight_increment(events, _slot(), ["quads"]) == 0.0

    def test_only_primary_group_counts(self):
        """Feedback for a secondary group does not move the increment."""
        events = [_soreness("still-sore", group="glutes")]
        assert compute_weight_increment(events, _slot(), ["quads", "glutes"]) == 2.5

    @pytest.mark.parametrize("groups", ["quads", {"quads", "glutes"}])
    def test_unordered_or_string_groups_rejected(self, groups):
        """The primary group is the first element, so order must be explicit."""
        with pytest.raises(TypeError):
            compute_weight_increment([_soreness("never-sore")], _slot(), groups)

    def test_tuple_groups_accepted(self):
        events = [_soreness("never-sore")]
        assert compute_weight_increment(events, _slot(), ("quads", "glutes")) == pytest.approx(3.75)

    def test_custom_params(self):
        params = ProgressionParams(base_weight_increment=5.0)
        events = [_soreness("still-sore")]
        assert compute_weight_increment(events, _slot(), ["quads"], params) == 2.5


class TestPrescribeWeight:
    """last weight + increment."""

    def test_no_history_is_none(self):
        assert prescribe_weight([], _slot()) is None

    def test_no_feedback(self):
        assert prescribe_weight([_done(100, 10)], _slot()) == 102.5

    def test_never_sore(self):
        events = [_done(100, 10), _soreness("never-sore")]
        assert prescribe_weight(events, _slot(), ["quads"]) == pytest.approx(103.75)

    def test_still_sore(self):
        events = [_done(100, 10), _soreness("still-sore")]
        assert prescribe_weight(events, _slot(), ["quads"]) == pytest.approx(101.25)

    def test_severe_joint_pain_holds_weight(self):
        events = [_done(100, 10), _rating(joint_pain="severe")]
        assert prescribe_weight(events, _slot(), ["quads"]) == 100

    def test_healed_early_and_easy(self):
        events = [_done(100, 10), _soreness("healed-early"), _rating("easy")]
        assert prescribe_weight(events, _slot(), ["quads"]) == pytest.approx(103.90625)


class TestPrescribeReps:
    """Reps held, or re-derived from the 1RM when the weight changes."""

    def test_no_history_is_none(self):
        assert prescribe_reps([], _slot(), actual_weight=100) is None

    def test_keeps_last_reps(self):
        assert prescribe_reps([_done(100, 10)], _slot()) == 10

    def test_actual_equals_prescribed_keeps_reps(self):
        assert prescribe_reps([_done(100, 10)], _slot(), actual_weight=102.5) == 10

    def test_heavier_weight_fewer_reps(self):
        assert prescribe_reps([_done(100, 10)], _slot(), actual_weight=110) == 7

    def test_lighter_weight_more_reps(self):
        assert prescribe_reps([_done(100, 10)], _slot(), actual_weight=95) == 11

    def test_curl_example(self):
        """40 x 15 last week, 45 chosen -> 11 reps."""
        events = [_done(40, 15, exercise="Curl")]
        assert prescribe_reps(events, _slot(exercise="Curl"), actual_weight=45) == 11

    def test_bench_example(self):
        """70 x 9 last week, 75 chosen -> 7 reps."""
        events = [_done(70, 9, exercise="Bench")]
        assert prescribe_reps(events, _slot(exercise="Bench"), actual_weight=75) == 7


class TestPrescribe:
    """Combined prescription."""

    def test_empty_history(self):
        result = prescribe([], _slot())
        assert result.weight is None
        assert result.reps is None
        assert result.is_empty

    def test_full_prescription(self):
        result = prescribe([_done(100, 10)], _slot(), actual_weight=110)
        assert result.weight == 102.5
        assert result.reps == 7
        assert result.to_dict() == {"weight": 102.5, "reps": 7}


class TestExerciseVolume:
    """Completed sets for an exercise in one microcycle."""

    def test_counts_all_set_indexes(self):
        events = [_done(100, 10, set_index=i, ts=i) for i in range(3)]
        assert exercise_volume(events, Location(MESO, 0, "monday", "Squat")) == 3

    def test_excludes_other_weeks_and_skips(self):
        skipped = Event(
            type="set-skipped", mesocycle=MESO, microcycle=0, workout="monday",
            timestamp=9, exercise="Squat", set_index=3,
        )
        events = [_done(100, 10), _done(100, 10, micro=1), skipped]
        assert exercise_volume(events, Location(MESO, 0, "Monday", "Squat")) == 1

    def test_empty(self):
        assert exercise_volume([], Location(MESO, 0, "monday", "Squat")) == 0
