"""Configuration loader for Aegis.

Loads config.py from the project root, falling back to defaults.
"""

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

import yaml

from . import defaults

if TYPE_CHECKING:
    from aegis.contracts.config import EstimatorConfig, LearnerPreferences, PolicyConfig


def load_preferences(yaml_path: str | Path) -> "LearnerPreferences":
    """Load learner preferences from a YAML calibration file.

    Raises:
        ConfigurationError: if the file holds invalid preferences
    """
    from aegis.contracts.config import LearnerPreferences
    from aegis.errors import ConfigurationError

    try:
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"{yaml_path}: could not read preferences: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{yaml_path}: expected a mapping of preferences")

    # Allow the preferences to sit under a top-level key
    data = data.get("preferences", data)

    try:
        return LearnerPreferences(**data)
    except ValueError as e:
        raise ConfigurationError(f"{yaml_path}: invalid preferences: {e}") from e


class Config:
    """Configuration object with attribute access."""

    def __init__(self, config_path: str | Path | None = None) -> None:
        # Start with defaults
        for key in defaults.CONFIG_KEYS:
            value = getattr(defaults, key)
            setattr(self, key, dict(value) if isinstance(value, dict) else value)

        self.config_path = Path(config_path) if config_path else self._find_config_file()
        self._load_user_config()

    def _load_user_config(self) -> None:
        """Load config.py overrides if one was found."""
        if self.config_path is None:
            return

        user_config = self._load_module_from_path(self.config_path)

        # Override defaults with user values
        for key in defaults.CONFIG_KEYS:
            if hasattr(user_config, key):
                setattr(self, key, getattr(user_config, key))

    def _find_config_file(self) -> Path | None:
        """Find config.py in current dir or parents."""
        current = Path.cwd()

        while True:
            config_path = current / "config.py"
            if config_path.exists():
                return config_path
            if current == current.parent:
                return None
            current = current.parent

    def _load_module_from_path(self, path: Path) -> ModuleType:
        """Load a Python module from a file path."""
        spec = importlib.util.spec_from_file_location("aegis_user_config", path)
        if spec is None or spec.loader is None:
            raise RuntimeError(f"Could not load config from {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules["aegis_user_config"] = module
        spec.loader.exec_module(module)
        return module

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value with optional default."""
        return getattr(self, key, default)

    def estimator_config(self) -> "EstimatorConfig":
        """Build the estimator settings.

        Raises:
            ConfigurationError: if a value is out of range
        """
        from aegis.contracts.config import EstimatorConfig, resolve_config

        return resolve_config(EstimatorConfig, {
            "window_s": self.ESTIMATOR_WINDOW_S,
            "emit_interval_s": self.ESTIMATOR_EMIT_INTERVAL_S,
            "confidence_threshold": self.ESTIMATOR_CONFIDENCE_THRESHOLD,
        })

    def policy_config(self) -> "PolicyConfig":
        """Build the policy settings, applying PREFERENCES_PATH if set.

        Raises:
            ConfigurationError: if a value is out of range
        """
        from aegis.contracts.config import PolicyConfig, resolve_config

        if self.PREFERENCES_PATH:
            preferences = load_preferences(self.PREFERENCES_PATH).model_dump()
        else:
            preferences = dict(self.LEARNER_PREFERENCES)

        return resolve_config(PolicyConfig, {
            "confidence_threshold": self.POLICY_CONFIDENCE_THRESHOLD,
            "sustained_window_s": self.POLICY_SUSTAINED_WINDOW_S,
            "cooldown_s": self.POLICY_COOLDOWN_S,
            "max_per_10min": self.POLICY_MAX_PER_10MIN,
            "preferences": preferences,
        })

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        from aegis.errors import ConfigurationError

        errors = []

        for build in (self.estimator_config, self.policy_config):
            try:
                build()
            except ConfigurationError as e:
                errors.append(str(e))

        if not isinstance(self.SESSION_TICK_S, (int, float)) or self.SESSION_TICK_S <= 0:
            errors.append("SESSION_TICK_S must be a positive number")

        if self.LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            errors.append(f"LOG_LEVEL must be DEBUG, INFO, WARNING or ERROR, got {self.LOG_LEVEL!r}")

        return errors

    def __repr__(self) -> str:
        return f"<Config path={self.config_path}>"


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config(config_path: str | Path | None = None) -> Config:
    """Reload configuration from disk."""
    global _config
    _config = Config(config_path)
    return _config
