"""
Sparse numeric lookup tables with linear interpolation.

A table is a plain {key: value} mapping.  Queries that hit a key return
the stored value; queries between keys interpolate between the nearest
neighbours below and above.  The same helpers serve the reverse direction
through invert_table().
"""

from __future__ import annotations

from typing import Mapping


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b for t in [0, 1]."""
    return a + t * (b - a)


def invert_table(table: Mapping[float, float]) -> dict[float, float]:
    """Swap keys and values: {reps: pct} -> {pct: reps}."""
    return {v: k for k, v in table.items()}


def interpolate_in_table(table: Mapping[float, float], value: float) -> float:
    """
    Look up value in table, interpolating between neighbours when absent.

    Args:
        table: Sparse key -> value mapping
        value: Query key; must lie within [min key, max key]

    Returns:
        Stored or linearly interpolated value

    Raises:
        ValueError: If value is outside the table's key range
    """
    if value in table:
        return table[value]

    keys = sorted(table)
    if not keys or value < keys[0] or value > keys[-1]:
        raise ValueError(
            f"{value} is outside the table range [{keys[0] if keys else None}, "
            f"{keys[-1] if keys else None}]; clamp before lookup"
        )

    lower = max(k for k in keys if k < value)
    upper = min(k for k in keys if k > value)
    t = (value - lower) / (upper - lower)
    return lerp(table[lower], table[upper], t)
