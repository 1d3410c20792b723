"""
Aegis Configuration

Copy this file to config.py and adjust the values you want to change.
Any key left out falls back to the built-in default.
"""

# =============================================================================
# Estimator
# =============================================================================

ESTIMATOR_WINDOW_S = 60.0             # Seconds of samples kept in the buffer
ESTIMATOR_EMIT_INTERVAL_S = 3.0       # Minimum seconds between condition states
ESTIMATOR_CONFIDENCE_THRESHOLD = 0.4  # Below this a state is marked not confident

# =============================================================================
# Policy
# =============================================================================

POLICY_CONFIDENCE_THRESHOLD = 0.5     # Minimum state confidence to intervene
POLICY_SUSTAINED_WINDOW_S = 15.0      # Condition must hold this long (60% of states)
POLICY_COOLDOWN_S = 120.0             # Seconds between interventions (60-300)
POLICY_MAX_PER_10MIN = 3              # Hard cap on interventions per 10 minutes

# =============================================================================
# Learner Preferences
# =============================================================================

LEARNER_PREFERENCES = {
    "frequency": "default",           # "fewer", "default" or "more"
    "preferred_modality": None,       # "text", "diagram", "example", "voice" or None
    "offer_breaks": True,
    "offer_hints": True,
}

# Optional calibration output; overrides LEARNER_PREFERENCES when set
PREFERENCES_PATH = ""
# PREFERENCES_PATH = "preferences.yaml"

# =============================================================================
# Session
# =============================================================================

SESSION_TICK_S = 2.0                  # Scenario seconds between replay ticks
LOG_LEVEL = "INFO"                    # DEBUG, INFO, WARNING or ERROR
