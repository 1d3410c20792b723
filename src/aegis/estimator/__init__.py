"""
Condition Estimator

Ingestion buffer, signal smoothing, scoring, confidence and
explainability, rate-limited into periodic condition states.

Provides:
- LearningConditionEstimator: Facade over the components below
- SampleBuffer: Time-ordered sliding window of samples
- SignalSmoother: EWMA over six derived channels
- score_conditions: Smoothed signals -> five condition scores
- assess_confidence: Tier + buffer -> scalar confidence
- compute_drivers / compute_not_used: Explainability
- EmissionScheduler: Pull-based emission limiter
"""

from aegis.estimator.buffer import SampleBuffer
from aegis.estimator.confidence import assess_confidence
from aegis.estimator.emission import EmissionScheduler
from aegis.estimator.estimator import LearningConditionEstimator
from aegis.estimator.explain import compute_drivers, compute_not_used
from aegis.estimator.scorer import score_conditions
from aegis.estimator.smoother import SignalSmoother, SmoothedSignals

__all__ = [
    "LearningConditionEstimator",
    "SampleBuffer",
    "SignalSmoother",
    "SmoothedSignals",
    "score_conditions",
    "assess_confidence",
    "compute_drivers",
    "compute_not_used",
    "EmissionScheduler",
]
