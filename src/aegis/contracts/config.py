"""Configuration contracts for the estimator and the policy engine."""

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, Field, ValidationError

from aegis.config import defaults
from aegis.errors import ConfigurationError

COOLDOWN_MIN_S = 60.0
COOLDOWN_MAX_S = 300.0


class EstimatorConfig(BaseModel):
    """Condition estimator settings."""

    window_s: float = Field(
        default=defaults.ESTIMATOR_WINDOW_S,
        gt=0.0,
        description="Sliding buffer window in seconds"
    )
    emit_interval_s: float = Field(
        default=defaults.ESTIMATOR_EMIT_INTERVAL_S,
        ge=0.0,
        description="Minimum seconds between emitted states"
    )
    confidence_threshold: float = Field(
        default=defaults.ESTIMATOR_CONFIDENCE_THRESHOLD,
        ge=0.0, le=1.0,
        description="Confidence at which a state counts as confident"
    )

    model_config = {"allow_inf_nan": False}


class LearnerPreferences(BaseModel):
    """Learner preferences from calibration prompts."""

    frequency: Literal["fewer", "default", "more"] = "default"
    preferred_modality: Literal["text", "diagram", "example", "voice"] | None = None
    offer_breaks: bool = True
    offer_hints: bool = True


class PolicyConfig(BaseModel):
    """Policy thresholds. `cooldown_s` is self-tuned by learner responses."""

    confidence_threshold: float = Field(
        default=defaults.POLICY_CONFIDENCE_THRESHOLD,
        ge=0.0, le=1.0,
        description="Below this, stay silent"
    )
    sustained_window_s: float = Field(
        default=defaults.POLICY_SUSTAINED_WINDOW_S,
        gt=0.0,
        description="Seconds a condition must dominate before triggering"
    )
    cooldown_s: float = Field(
        default=defaults.POLICY_COOLDOWN_S,
        ge=COOLDOWN_MIN_S, le=COOLDOWN_MAX_S,
        description="Minimum spacing between interventions"
    )
    max_per_10min: int = Field(
        default=defaults.POLICY_MAX_PER_10MIN,
        ge=1,
        description="Maximum interventions in any trailing 600s"
    )
    preferences: LearnerPreferences = Field(
        default_factory=lambda: LearnerPreferences(**defaults.LEARNER_PREFERENCES)
    )

    model_config = {"validate_assignment": True, "allow_inf_nan": False}


M = TypeVar("M", bound=BaseModel)


def resolve_config(
    model_cls: type[M],
    config: M | dict[str, Any] | None = None,
    overrides: dict[str, Any] | None = None,
) -> M:
    """Build a private, validated config instance.

    Accepts a model instance, a plain dict, or nothing, plus keyword
    overrides. Always returns a copy so runtime tuning never leaks back
    into the caller's object.

    Raises:
        ConfigurationError: if any value is outside its valid range.
    """
    overrides = overrides or {}
    try:
        if config is None:
            return model_cls(**overrides)
        if isinstance(config, dict):
            return model_cls(**{**config, **overrides})
        if overrides:
            return model_cls(**{**config.model_dump(), **overrides})
        return config.model_copy(deep=True)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {model_cls.__name__}: {e}") from e
