"""
Plan file loading.

A plan file is YAML (or JSON, which YAML also parses) holding either a
mesocycle template (name / n-microcycles / workouts) or an already
expanded plan (meso -> micro -> workout -> exercise -> [sets]).
"""

from pathlib import Path
from typing import Any

import yaml

from ..core.plan import build_plan
from .serializers import ValidationError, dict_to_plan, dict_to_plan_template


def parse_plan(data: Any) -> dict[str, Any]:
    """
    Turn parsed plan data into the nested plan structure.

    Raises:
        ValidationError: If data is neither a template nor an expanded plan
    """
    if not isinstance(data, dict):
        raise ValidationError("Plan file must contain a mapping")
    if "workouts" in data:
        return build_plan(dict_to_plan_template(data))
    return dict_to_plan(data)


def load_plan(path: str | Path) -> dict[str, Any]:
    """
    Load and expand a plan file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Plan file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as e:
        raise ValidationError(f"Error parsing plan file {path}: {e}") from e
    return parse_plan(data)
