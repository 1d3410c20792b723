"""Aegis contracts - all typed schemas for the system."""

from aegis.contracts.features import (
    DistanceEstimate,
    Expressivity,
    EyeMetrics,
    FeatureSample,
    GazeEstimate,
    HeadPose,
    InteractionTelemetry,
    PerceptionSource,
    PerceptionTier,
    QualityFlags,
)
from aegis.contracts.condition import (
    ConditionDriver,
    ConditionScores,
    ConditionState,
    LearningCondition,
)
from aegis.contracts.intervention import (
    GateName,
    Intervention,
    InterventionClass,
    InterventionDecision,
    InterventionOption,
    InterventionRecord,
    ResponseAction,
)
from aegis.contracts.config import (
    EstimatorConfig,
    LearnerPreferences,
    PolicyConfig,
    resolve_config,
)

__all__ = [
    # Features
    "DistanceEstimate",
    "Expressivity",
    "EyeMetrics",
    "FeatureSample",
    "GazeEstimate",
    "HeadPose",
    "InteractionTelemetry",
    "PerceptionSource",
    "PerceptionTier",
    "QualityFlags",
    # Conditions
    "ConditionDriver",
    "ConditionScores",
    "ConditionState",
    "LearningCondition",
    # Interventions
    "GateName",
    "Intervention",
    "InterventionClass",
    "InterventionDecision",
    "InterventionOption",
    "InterventionRecord",
    "ResponseAction",
    # Config
    "EstimatorConfig",
    "LearnerPreferences",
    "PolicyConfig",
    "resolve_config",
]
