"""
Configuration constants for the progression model.

All adjustable parameters are centralized here for easy tuning.
Values can be overridden from YAML via core.engine.config_loader.
"""

from dataclasses import dataclass, field
from typing import Final

# =============================================================================
# WEIGHT PROGRESSION
# =============================================================================

BASE_WEIGHT_INCREMENT: Final[float] = 2.5  # Weight units added each microcycle

# =============================================================================
# FEEDBACK MODIFIERS
# =============================================================================

# Soreness reported before the first set of the next session
SORENESS_MODIFIERS: Final[dict[str, float]] = {
    "never-sore": 1.5,  # Recovered fast, push harder
    "healed-early": 1.25,
    "healed-just-in-time": 1.0,
    "still-sore": 0.5,  # Still recovering, back off
}

# Perceived workload from the session rating
WORKLOAD_MODIFIERS: Final[dict[str, float]] = {
    "easy": 1.25,
    "just-right": 1.0,
    "pushed-limits": 1.0,
    "too-much": 0.75,
}

# Joint pain replaces the combined modifiers entirely (None = no override)
JOINT_PAIN_OVERRIDE: Final[dict[str, float | None]] = {
    "none": None,
    "some": 0.75,
    "severe": 0.0,
}

DEFAULT_MODIFIER: Final[float] = 1.0  # Used when no feedback was reported

# =============================================================================
# REPS <-> %1RM
# =============================================================================

# Reps to fraction of one-rep max.  Covers the hypertrophy range with
# low-rep anchors for 1RM estimation.
REP_PERCENTAGE_TABLE: Final[dict[int, float]] = {
    1: 1.00,
    2: 0.95,
    3: 0.93,
    4: 0.90,
    5: 0.87,
    6: 0.85,
    7: 0.83,
    8: 0.80,
    9: 0.77,
    10: 0.75,
    11: 0.72,
    12: 0.70,
    15: 0.65,
    20: 0.60,
    25: 0.55,
    30: 0.50,
}
# Lookups clamp into the table's own range: reps [1, 30], %1RM [0.50, 1.0]


@dataclass(frozen=True)
class ProgressionParams:
    """Tunable parameters for the progression engine."""

    base_weight_increment: float = BASE_WEIGHT_INCREMENT
    soreness_modifiers: dict[str, float] = field(
        default_factory=lambda: dict(SORENESS_MODIFIERS)
    )
    workload_modifiers: dict[str, float] = field(
        default_factory=lambda: dict(WORKLOAD_MODIFIERS)
    )
    joint_pain_override: dict[str, float | None] = field(
        default_factory=lambda: dict(JOINT_PAIN_OVERRIDE)
    )
    rep_percentage_table: dict[int, float] = field(
        default_factory=lambda: dict(REP_PERCENTAGE_TABLE)
    )


DEFAULT_PARAMS: Final[ProgressionParams] = ProgressionParams()
