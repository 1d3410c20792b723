"""Default configuration values for Aegis."""

from typing import Literal

# Estimator
ESTIMATOR_WINDOW_S: float = 60.0
ESTIMATOR_EMIT_INTERVAL_S: float = 3.0
ESTIMATOR_CONFIDENCE_THRESHOLD: float = 0.4

# Policy
POLICY_CONFIDENCE_THRESHOLD: float = 0.5
POLICY_SUSTAINED_WINDOW_S: float = 15.0
POLICY_COOLDOWN_S: float = 120.0
POLICY_MAX_PER_10MIN: int = 3

# Learner preferences (calibration output)
LEARNER_PREFERENCES: dict = {
    "frequency": "default",
    "preferred_modality": None,
    "offer_breaks": True,
    "offer_hints": True,
}
PREFERENCES_PATH: str = ""  # Optional YAML file overriding LEARNER_PREFERENCES

# Session loop
SESSION_TICK_S: float = 2.0

# Logging
LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

# All configurable keys (for validation)
CONFIG_KEYS = {
    "ESTIMATOR_WINDOW_S",
    "ESTIMATOR_EMIT_INTERVAL_S",
    "ESTIMATOR_CONFIDENCE_THRESHOLD",
    "POLICY_CONFIDENCE_THRESHOLD",
    "POLICY_SUSTAINED_WINDOW_S",
    "POLICY_COOLDOWN_S",
    "POLICY_MAX_PER_10MIN",
    "LEARNER_PREFERENCES",
    "PREFERENCES_PATH",
    "SESSION_TICK_S",
    "LOG_LEVEL",
}
