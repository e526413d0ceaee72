"""
JSON serialization for events and plan templates.

Stored records use kebab-case field names ("set-index",
"performed-weight", ...) and the enum spellings of the event log, so logs
stay readable by other clients.  In memory everything is snake_case.
"""

import json
from typing import Any

from ..core.models import (
    EVENT_TYPES,
    JOINT_PAIN_LEVELS,
    PUMP_RANGE,
    SETS_WORKLOADS,
    SORENESS_LEVELS,
    Event,
    normalize_workout,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


# Attribute name -> stored record key
_FIELD_KEYS: dict[str, str] = {
    "type": "type",
    "mesocycle": "mesocycle",
    "microcycle": "microcycle",
    "workout": "workout",
    "timestamp": "timestamp",
    "id": "id",
    "exercise": "exercise",
    "set_index": "set-index",
    "performed_weight": "performed-weight",
    "performed_reps": "performed-reps",
    "prescribed_weight": "prescribed-weight",
    "prescribed_reps": "prescribed-reps",
    "muscle_group": "muscle-group",
    "soreness": "soreness",
    "pump": "pump",
    "joint_pain": "joint-pain",
    "sets_workload": "sets-workload",
}

_REQUIRED_BY_TYPE: dict[str, tuple[str, ...]] = {
    "set-completed": ("exercise", "set-index", "performed-weight", "performed-reps"),
    "set-skipped": ("exercise", "set-index"),
    "soreness-reported": ("muscle-group", "soreness"),
    "session-rated": ("muscle-group", "joint-pain", "sets-workload"),
}


def _strip_keyword(value: Any) -> Any:
    """EDN-style ':still-sore' -> 'still-sore'; other values unchanged."""
    if isinstance(value, str):
        return value.lstrip(":")
    return value


def validate_choice(value: Any, choices: tuple[str, ...], name: str) -> str:
    """
    Validate an enum value.

    Raises:
        ValidationError: If value is not one of choices
    """
    value = _strip_keyword(value)
    if value not in choices:
        raise ValidationError(f"Invalid {name}: {value!r}. Must be one of {choices}")
    return value


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_positive(value: int | float, name: str) -> int | float:
    """
    Validate that a value is positive.

    Raises:
        ValidationError: If value is not positive
    """
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_pump(value: int) -> int:
    low, high = PUMP_RANGE
    if not low <= value <= high:
        raise ValidationError(f"pump must be between {low} and {high}, got {value}")
    return value


def event_to_dict(event: Event) -> dict[str, Any]:
    """
    Convert Event to a JSON-compatible record.

    Fields that are None are omitted.
    """
    return {
        key: getattr(event, attr)
        for attr, key in _FIELD_KEYS.items()
        if getattr(event, attr) is not None
    }


def dict_to_event(data: dict[str, Any]) -> Event:
    """
    Convert a stored record to Event.

    Accepts kebab-case keys (as stored) or snake_case keys, and EDN-style
    ":keyword" enum values.  Workout identifiers are normalized.

    Raises:
        ValidationError: If data is missing fields or holds invalid values
    """
    record = {k.lstrip(":").replace("_", "-"): v for k, v in data.items()}

    event_type = validate_choice(record.get("type"), EVENT_TYPES, "event type")
    for key in ("mesocycle", "microcycle", "workout", "timestamp"):
        if record.get(key) is None:
            raise ValidationError(f"{event_type} event missing '{key}'")
    for key in _REQUIRED_BY_TYPE[event_type]:
        if record.get(key) is None:
            raise ValidationError(f"{event_type} event missing '{key}'")

    try:
        microcycle = int(validate_non_negative(int(record["microcycle"]), "microcycle"))
        timestamp = int(record["timestamp"])
        set_index = record.get("set-index")
        if set_index is not None:
            set_index = int(validate_non_negative(int(set_index), "set-index"))

        performed_weight = record.get("performed-weight")
        performed_reps = record.get("performed-reps")
        if event_type == "set-completed":
            performed_weight = float(validate_positive(float(performed_weight), "performed-weight"))
            performed_reps = int(validate_positive(int(performed_reps), "performed-reps"))

        prescribed_weight = record.get("prescribed-weight")
        if prescribed_weight is not None:
            prescribed_weight = float(prescribed_weight)
        prescribed_reps = record.get("prescribed-reps")
        if prescribed_reps is not None:
            prescribed_reps = int(prescribed_reps)
        pump = int(record["pump"]) if record.get("pump") is not None else None
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {event_type} event: {e}") from e

    soreness = record.get("soreness")
    joint_pain = record.get("joint-pain")
    sets_workload = record.get("sets-workload")
    if event_type == "soreness-reported":
        soreness = validate_choice(soreness, SORENESS_LEVELS, "soreness")
    if event_type == "session-rated":
        joint_pain = validate_choice(joint_pain, JOINT_PAIN_LEVELS, "joint-pain")
        sets_workload = validate_choice(sets_workload, SETS_WORKLOADS, "sets-workload")
        if pump is not None:
            pump = validate_pump(pump)

    return Event(
        type=event_type,
        mesocycle=str(record["mesocycle"]),
        microcycle=microcycle,
        workout=normalize_workout(record["workout"]),
        timestamp=timestamp,
        id=record.get("id"),
        exercise=record.get("exercise"),
        set_index=set_index,
        performed_weight=performed_weight,
        performed_reps=performed_reps,
        prescribed_weight=prescribed_weight,
        prescribed_reps=prescribed_reps,
        muscle_group=_strip_keyword(record.get("muscle-group")),
        soreness=soreness,
        pump=pump,
        joint_pain=joint_pain,
        sets_workload=sets_workload,
    )


def event_to_json_line(event: Event) -> str:
    """Serialize an event as one JSONL line (no trailing newline)."""
    return json.dumps(event_to_dict(event), separators=(",", ":"))


# ---------------------------------------------------------------------------
# Plan templates
# ---------------------------------------------------------------------------


def _snake_keys(value: Any) -> Any:
    """Recursively rewrite 'muscle-groups' style keys to 'muscle_groups'."""
    if isinstance(value, dict):
        return {
            (k.lstrip(":").replace("-", "_") if isinstance(k, str) else k): _snake_keys(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [_snake_keys(v) for v in value]
    return value


def dict_to_plan(data: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize an already-expanded plan read from JSON/YAML.

    Microcycle keys become ints (JSON only has string keys), workout keys
    are normalized, and set-spec keys become snake_case.  Exercise names
    are left untouched.

    Raises:
        ValidationError: If the nesting is not meso -> micro -> workout -> exercise -> [sets]
    """
    plan: dict[str, Any] = {}
    for meso, microcycles in data.items():
        if not isinstance(microcycles, dict):
            raise ValidationError(f"Mesocycle {meso!r} must map microcycles to workouts")
        plan[str(meso)] = {}
        for micro, workouts in microcycles.items():
            try:
                micro_idx = int(micro)
            except (TypeError, ValueError) as e:
                raise ValidationError(f"Invalid microcycle index: {micro!r}") from e
            if not isinstance(workouts, dict):
                raise ValidationError(f"Microcycle {micro!r} of {meso!r} must map workouts to exercises")
            plan[str(meso)][micro_idx] = {
                normalize_workout(day): _exercise_sets(day, exercises)
                for day, exercises in workouts.items()
            }
    return plan


def _exercise_sets(day: Any, exercises: Any) -> dict[str, list[Any]]:
    if not isinstance(exercises, dict):
        raise ValidationError(f"Workout {day!r} must map exercise names to set lists")
    result = {}
    for name, sets in exercises.items():
        if not isinstance(sets, list):
            raise ValidationError(f"Exercise {name!r} in workout {day!r} must hold a list of sets")
        result[str(name)] = [_snake_keys(s) for s in sets]
    return result


def dict_to_plan_template(data: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize a mesocycle template (name / n_microcycles / workouts).

    Top-level and per-exercise spec keys become snake_case; exercise names
    are preserved.

    Raises:
        ValidationError: If required template keys are missing
    """
    template = {k.lstrip(":").replace("-", "_"): v for k, v in data.items()}
    if "name" not in template:
        raise ValidationError("Plan template missing 'name'")
    workouts = {}
    for day, workout in (template.get("workouts") or {}).items():
        exercises = (workout or {}).get("exercises") or {}
        workouts[day] = {
            "exercises": {str(name): _snake_keys(spec or {}) for name, spec in exercises.items()}
        }
    template["workouts"] = workouts
    return template
