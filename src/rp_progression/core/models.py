"""
Data models for rp-progression.

Events are immutable facts appended to the log.  A Location addresses a
workout, an exercise within it, or a single set slot.
"""

from dataclasses import dataclass
from typing import Any, Literal

EventType = Literal["set-completed", "set-skipped", "soreness-reported", "session-rated"]

EVENT_TYPES: tuple[str, ...] = (
    "set-completed",
    "set-skipped",
    "soreness-reported",
    "session-rated",
)
SET_EVENT_TYPES: tuple[str, ...] = ("set-completed", "set-skipped")

SORENESS_LEVELS: tuple[str, ...] = (
    "never-sore",
    "healed-early",
    "healed-just-in-time",
    "still-sore",
)
JOINT_PAIN_LEVELS: tuple[str, ...] = ("none", "some", "severe")
SETS_WORKLOADS: tuple[str, ...] = ("easy", "just-right", "pushed-limits", "too-much")
PUMP_RANGE: tuple[int, int] = (0, 4)


def normalize_workout(workout: Any) -> str:
    """
    Canonical form of a workout identifier.

    Stored logs may hold "Monday", "monday" or the keyword form ":monday";
    all of them map to "monday".
    """
    return str(workout).strip().lstrip(":").lower()


@dataclass(frozen=True)
class Location:
    """
    Plan coordinates.

    With exercise and set_index set this is a slot: the unit that receives
    a prescription.  Without set_index it addresses a whole exercise.
    """

    mesocycle: str
    microcycle: int
    workout: str
    exercise: str | None = None
    set_index: int | None = None

    def previous_microcycle(self) -> int:
        return self.microcycle - 1


@dataclass(frozen=True)
class Event:
    """
    A single logged fact.

    Set events carry exercise and set_index; feedback events carry
    muscle_group plus their ratings.  Fields that do not apply to the
    event type are None.
    """

    type: EventType
    mesocycle: str
    microcycle: int
    workout: str
    timestamp: int
    id: str | None = None

    # Set events
    exercise: str | None = None
    set_index: int | None = None
    performed_weight: float | None = None
    performed_reps: int | None = None
    prescribed_weight: float | None = None  # What was shown to the user
    prescribed_reps: int | None = None

    # Feedback events
    muscle_group: str | None = None
    soreness: str | None = None
    pump: int | None = None
    joint_pain: str | None = None
    sets_workload: str | None = None

    def __post_init__(self) -> None:
        if self.type not in EVENT_TYPES:
            raise ValueError(f"Invalid event type: {self.type}")

    def to_dict(self) -> dict[str, Any]:
        """Snake-case dict of the populated fields (used in progress views)."""
        return {
            k: v
            for k, v in self.__dict__.items()
            if v is not None
        }


@dataclass(frozen=True)
class Prescription:
    """
    Suggested load for the next set.

    Either field is None when there is no prior performance to build on,
    which callers must treat differently from a zero value.
    """

    weight: float | None = None
    reps: int | None = None

    @property
    def is_empty(self) -> bool:
        return self.weight is None and self.reps is None

    def to_dict(self) -> dict[str, Any]:
        return {"weight": self.weight, "reps": self.reps}

