"""Tests for configuration loading."""

import pytest

from aegis.config import Config, get_config, load_preferences, reload_config
from aegis.config import defaults
from aegis.contracts.config import EstimatorConfig, PolicyConfig, resolve_config
from aegis.errors import ConfigurationError


def write_config(path, body: str):
    path.write_text(body)
    return path


class TestConfig:
    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = Config()

        assert config.config_path is None
        assert config.POLICY_COOLDOWN_S == defaults.POLICY_COOLDOWN_S
        assert config.validate() == []

    def test_found_in_parent_directory(self, tmp_path, monkeypatch):
        write_config(tmp_path / "config.py", "ESTIMATOR_WINDOW_S = 30.0\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        config = Config()

        assert config.config_path == tmp_path / "config.py"
        assert config.estimator_config().window_s == 30.0

    def test_user_overrides(self, tmp_path):
        path = write_config(tmp_path / "config.py", (
            "POLICY_COOLDOWN_S = 200.0\n"
            "POLICY_MAX_PER_10MIN = 2\n"
            "LEARNER_PREFERENCES = {'frequency': 'fewer', 'offer_hints': False}\n"
        ))

        policy = Config(path).policy_config()

        assert isinstance(policy, PolicyConfig)
        assert policy.cooldown_s == 200.0
        assert policy.max_per_10min == 2
        assert policy.preferences.frequency == "fewer"
        assert not policy.preferences.offer_hints
        assert policy.preferences.offer_breaks

    def test_validate_reports_errors(self, tmp_path):
        path = write_config(tmp_path / "config.py", (
            "POLICY_COOLDOWN_S = 30.0\n"
            "SESSION_TICK_S = 0\n"
            "LOG_LEVEL = 'LOUD'\n"
        ))

        errors = Config(path).validate()

        assert len(errors) == 3
        assert any("PolicyConfig" in e for e in errors)
        assert any("SESSION_TICK_S" in e for e in errors)
        assert any("LOG_LEVEL" in e for e in errors)

    def test_invalid_value_raises_on_build(self, tmp_path):
        path = write_config(tmp_path / "config.py", "ESTIMATOR_EMIT_INTERVAL_S = -2\n")
        with pytest.raises(ConfigurationError):
            Config(path).estimator_config()

    def test_preferences_path(self, tmp_path):
        prefs = tmp_path / "prefs.yaml"
        prefs.write_text("frequency: more\npreferred_modality: example\n")
        path = write_config(tmp_path / "config.py", f"PREFERENCES_PATH = {str(prefs)!r}\n")

        policy = Config(path).policy_config()

        assert policy.preferences.frequency == "more"
        assert policy.preferences.preferred_modality == "example"

    def test_get_and_reload(self, tmp_path):
        path = write_config(tmp_path / "config.py", "SESSION_TICK_S = 0.5\n")

        config = reload_config(path)

        assert get_config() is config
        assert config.get("SESSION_TICK_S") == 0.5
        assert config.get("MISSING", "fallback") == "fallback"


class TestLoadPreferences:
    def test_flat_mapping(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("frequency: fewer\noffer_breaks: false\n")

        prefs = load_preferences(path)

        assert prefs.frequency == "fewer"
        assert not prefs.offer_breaks
        assert prefs.offer_hints

    def test_nested_under_preferences_key(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("preferences:\n  preferred_modality: voice\n")

        assert load_preferences(path).preferred_modality == "voice"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "prefs.yaml"
        path.write_text("")

        assert load_preferences(path).frequency == "default"

    @pytest.mark.parametrize("body", [
        "frequency: always\n",
        "- fewer\n- more\n",
        "frequency: [unclosed\n",
    ])
    def test_invalid_preferences(self, tmp_path, body):
        path = tmp_path / "prefs.yaml"
        path.write_text(body)

        with pytest.raises(ConfigurationError):
            load_preferences(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_preferences(tmp_path / "absent.yaml")


class TestResolveConfig:
    def test_overrides_applied_to_instance(self):
        base = EstimatorConfig(window_s=30)
        resolved = resolve_config(EstimatorConfig, base, {"emit_interval_s": 1})

        assert resolved.window_s == 30
        assert resolved.emit_interval_s == 1
        assert base.emit_interval_s == defaults.ESTIMATOR_EMIT_INTERVAL_S

    def test_returns_copy(self):
        base = PolicyConfig()
        assert resolve_config(PolicyConfig, base) is not base

    def test_cooldown_bounds(self):
        with pytest.raises(ConfigurationError):
            resolve_config(PolicyConfig, {"cooldown_s": 59.9})
        assert resolve_config(PolicyConfig, {"cooldown_s": 300}).cooldown_s == 300
