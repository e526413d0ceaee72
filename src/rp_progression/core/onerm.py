"""
One-rep-max model.

Reps and intensity are related through a reps -> %1RM table
(config.REP_PERCENTAGE_TABLE).  Every lookup clamps into the table's range
first so interpolation never runs off either end:

    reps_to_percentage(10)  = 0.75
    estimate_one_rep_max(100, 10) = 100 / 0.75 ≈ 133.3
    reps_for_weight(133.3, 110)   -> 110 / 133.3 ≈ 0.825 -> 7 reps

Reps for a chosen weight come from this curve rather than from holding
weight x reps constant: at high rep counts the curve flattens, so small
load changes move the rep target much more than work arithmetic suggests.
"""

from __future__ import annotations

import math
from typing import Mapping

from .config import REP_PERCENTAGE_TABLE
from .interpolation import interpolate_in_table, invert_table


def round_half_up(x: float) -> int:
    """Round to nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(x + 0.5))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def reps_to_percentage(
    reps: float,
    table: Mapping[int, float] = REP_PERCENTAGE_TABLE,
) -> float:
    """
    Convert reps to a fraction of 1RM.

    Reps are clamped to the table range (1-30 by default).
    """
    reps = _clamp(reps, min(table), max(table))
    return interpolate_in_table(table, reps)


def percentage_to_reps(
    pct: float,
    table: Mapping[int, float] = REP_PERCENTAGE_TABLE,
) -> int:
    """
    Convert a fraction of 1RM to reps, rounded to the nearest whole rep.

    The fraction is clamped to the table range (0.50-1.00 by default).
    """
    inverted = invert_table(table)
    pct = _clamp(pct, min(inverted), max(inverted))
    return max(1, round_half_up(interpolate_in_table(inverted, pct)))


def estimate_one_rep_max(
    weight: float,
    reps: float,
    table: Mapping[int, float] = REP_PERCENTAGE_TABLE,
) -> float:
    """Estimated 1RM from a set of `reps` at `weight`."""
    return weight / reps_to_percentage(reps, table)


def reps_for_weight(
    one_rep_max: float,
    weight: float,
    table: Mapping[int, float] = REP_PERCENTAGE_TABLE,
) -> int:
    """Reps achievable at `weight` for a lifter with the given 1RM."""
    return max(1, round_half_up(percentage_to_reps(weight / one_rep_max, table)))
