"""Small helpers shared across the core."""

from typing import Any, Callable


def deep_merge_with(f: Callable[[Any, Any], Any], *maps: dict) -> dict:
    """
    Recursively merge mappings left to right.

    When both sides of a key are dicts they are merged recursively;
    otherwise f(left, right) decides the value.  Keys present in only
    one mapping are kept as-is.  Inputs are never mutated.

    Args:
        f: Leaf combiner called as f(earlier_value, later_value)
        *maps: Mappings to merge

    Returns:
        New merged dict
    """
    result: dict = {}
    for m in maps:
        if not m:
            continue
        for k, v in m.items():
            if k not in result:
                result[k] = v
            elif isinstance(result[k], dict) and isinstance(v, dict):
                result[k] = deep_merge_with(f, result[k], v)
            else:
                result[k] = f(result[k], v)
    return result
