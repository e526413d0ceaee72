"""
YAML → typed config loader.

Loads progression constants from progression.yaml (bundled with the
package) and optionally merges user overrides from
~/.rp-progression/progression.yaml.

Usage:
    from rp_progression.core.engine.config_loader import progression_params
    params = progression_params()
    prescribe(events, location, params=params)

If a YAML file cannot be read it is treated as empty and the Python
defaults from config.py apply.  If the merged values cannot be converted,
a warning is issued and the defaults are used.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import DEFAULT_PARAMS, ProgressionParams
from ..util import deep_merge_with

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; return {} if it is unreadable or not a mapping."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _override(_base: Any, override: Any) -> Any:
    return override


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled progression.yaml, or None if not found."""
    ref = importlib.resources.files("rp_progression").joinpath("progression.yaml")
    return Path(str(ref)) if ref.is_file() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.rp-progression/progression.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".rp-progression" / "progression.yaml"
    return p if p.exists() else None


def load_model_config(user_path: Path | None = None) -> dict[str, Any]:
    """
    Load and merge model configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/rp_progression/progression.yaml
    2. User override (user_path, or ~/.rp-progression/progression.yaml)

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        config = deep_merge_with(_override, config, _load_yaml_file(bundled))

    user = user_path if user_path is not None else get_user_yaml_path()
    if user is not None:
        config = deep_merge_with(_override, config, _load_yaml_file(user))

    return config


def params_from_config(config: dict[str, Any]) -> ProgressionParams:
    """
    Build ProgressionParams from a config dict, falling back to defaults.

    Raises:
        ValueError, TypeError, AttributeError: If a configured value has
            the wrong shape or type
    """
    prog = config.get("progression") or {}
    onerm = config.get("one_rep_max") or {}

    def _float_map(raw: Any, default: dict) -> dict:
        if raw is None:
            return dict(default)
        return {str(k): float(v) for k, v in raw.items()}

    pain_raw = prog.get("joint_pain_override")
    if pain_raw is None:
        pain = dict(DEFAULT_PARAMS.joint_pain_override)
    else:
        pain = {str(k): (None if v is None else float(v)) for k, v in pain_raw.items()}

    table_raw = onerm.get("rep_percentage_table")
    if table_raw is None:
        table = dict(DEFAULT_PARAMS.rep_percentage_table)
    else:
        table = {int(k): float(v) for k, v in table_raw.items()}
        if len(set(table.values())) != len(table):
            raise ValueError("rep_percentage_table values must be distinct")

    base = float(prog.get("base_weight_increment", DEFAULT_PARAMS.base_weight_increment))
    soreness = _float_map(prog.get("soreness_modifiers"), DEFAULT_PARAMS.soreness_modifiers)
    workload = _float_map(prog.get("workload_modifiers"), DEFAULT_PARAMS.workload_modifiers)

    return ProgressionParams(
        base_weight_increment=base,
        soreness_modifiers=soreness,
        workload_modifiers=workload,
        joint_pain_override=pain,
        rep_percentage_table=table,
    )


def progression_params(user_path: Path | None = None) -> ProgressionParams:
    """Merged YAML configuration as ProgressionParams; defaults on bad input."""
    try:
        return params_from_config(load_model_config(user_path))
    except (ValueError, TypeError, AttributeError) as exc:
        warnings.warn(
            f"rp-progression: ignoring progression config ({exc}); using defaults.",
            stacklevel=2,
        )
        return DEFAULT_PARAMS
