"""
Tests for YAML-backed progression configuration.
"""

import pytest

from rp_progression.core.config import DEFAULT_PARAMS, REP_PERCENTAGE_TABLE, SORENESS_MODIFIERS
from rp_progression.core.engine.config_loader import (
    get_bundled_yaml_path,
    load_model_config,
    params_from_config,
    progression_params,
)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep a real ~/.rp-progression out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


class TestBundledConfig:
    """The packaged YAML mirrors the Python defaults."""

    def test_bundled_file_found(self):
        path = get_bundled_yaml_path()
        assert path is not None
        assert path.name == "progression.yaml"

    def test_bundled_matches_defaults(self):
        params = progression_params()
        assert params.base_weight_increment == DEFAULT_PARAMS.base_weight_increment
        assert params.soreness_modifiers == SORENESS_MODIFIERS
        assert params.rep_percentage_table == REP_PERCENTAGE_TABLE
        assert params.joint_pain_override["none"] is None


class TestUserOverrides:
    """User YAML is deep-merged over the bundled file."""

    def test_explicit_user_file(self, tmp_path):
        user = tmp_path / "mine.yaml"
        user.write_text("progression:\n  base_weight_increment: 5\n  soreness_modifiers:\n    still-sore: 0.0\n")
        params = progression_params(user)
        assert params.base_weight_increment == 5.0
        assert params.soreness_modifiers["still-sore"] == 0.0
        # untouched keys survive the merge
        assert params.soreness_modifiers["never-sore"] == 1.5
        assert params.workload_modifiers == DEFAULT_PARAMS.workload_modifiers

    def test_home_file_picked_up(self, isolated_home):
        config_dir = isolated_home / ".rp-progression"
        config_dir.mkdir()
        (config_dir / "progression.yaml").write_text("progression:\n  base_weight_increment: 1.25\n")
        assert progression_params().base_weight_increment == 1.25

    def test_unreadable_yaml_is_ignored(self, tmp_path):
        user = tmp_path / "broken.yaml"
        user.write_text("progression: [unclosed\n")
        config = load_model_config(user)
        assert config["progression"]["base_weight_increment"] == 2.5

    def test_bad_value_warns_and_uses_defaults(self, tmp_path):
        user = tmp_path / "bad.yaml"
        user.write_text("progression:\n  base_weight_increment: lots\n")
        with pytest.warns(UserWarning, match="ignoring progression config"):
            params = progression_params(user)
        assert params == DEFAULT_PARAMS


class TestParamsFromConfig:
    """Dict -> ProgressionParams conversion."""

    def test_empty_config_gives_defaults(self):
        assert params_from_config({}) == DEFAULT_PARAMS

    def test_custom_rep_table(self):
        params = params_from_config({"one_rep_max": {"rep_percentage_table": {"1": 1, "10": 0.5}}})
        assert params.rep_percentage_table == {1: 1.0, 10: 0.5}

    def test_duplicate_table_values_rejected(self):
        with pytest.raises(ValueError):
            params_from_config({"one_rep_max": {"rep_percentage_table": {1: 1.0, 2: 1.0}}})
