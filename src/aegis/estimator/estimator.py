"""
Learning Condition Estimator

EWMA smoothing + rule-based scoring + confidence + explainability,
emitted at a bounded cadence. Interpretable and replaceable with a
temporal model later.

One estimator per learning session. Not safe for concurrent use: the
buffer, smoothed signals and emission time are mutated without locking.
"""

import logging
import math
from typing import Any

from aegis.contracts.condition import ConditionState
from aegis.contracts.config import EstimatorConfig, resolve_config
from aegis.contracts.features import FeatureSample, PerceptionTier
from aegis.errors import InputError
from aegis.estimator.buffer import SampleBuffer
from aegis.estimator.confidence import assess_confidence
from aegis.estimator.emission import EmissionScheduler
from aegis.estimator.explain import compute_drivers, compute_not_used
from aegis.estimator.scorer import score_conditions
from aegis.estimator.smoother import SignalSmoother, SmoothedSignals

logger = logging.getLogger(__name__)


class LearningConditionEstimator:
    """Turns a stream of feature samples into periodic condition states."""

    def __init__(
        self,
        config: EstimatorConfig | dict[str, Any] | None = None,
        **overrides: Any,
    ):
        """Initialize the estimator.

        Args:
            config: Estimator settings (model or dict); defaults if omitted
            **overrides: Individual settings overriding `config`

        Raises:
            ConfigurationError: if any setting is out of range
        """
        self.config = resolve_config(EstimatorConfig, config, overrides)
        self.buffer = SampleBuffer(self.config.window_s)
        self.smoother = SignalSmoother()
        self.scheduler = EmissionScheduler(self.config.emit_interval_s)
        self._tier = PerceptionTier.TELEMETRY_ONLY
        self._ingested = 0

    @property
    def tier(self) -> PerceptionTier:
        return self._tier

    def set_tier(self, tier: PerceptionTier | int) -> None:
        """Set the active perception tier, applied from the next emission.

        Raises:
            InputError: if `tier` is not 0, 1 or 2
        """
        try:
            tier = PerceptionTier(tier)
        except ValueError as e:
            raise InputError(f"Unknown perception tier: {tier!r}") from e
        if tier != self._tier:
            logger.info(f"Perception tier changed: {self._tier.name} -> {tier.name}")
        self._tier = tier

    def ingest(self, sample: FeatureSample) -> None:
        """Ingest one sample. Call at the feature stream's rate.

        Raises:
            InputError: if the sample timestamp is out of order; no state
                is modified in that case
        """
        self.buffer.append(sample)
        self.smoother.update(sample)
        self._ingested += 1

    @property
    def has_data(self) -> bool:
        return self._ingested > 0

    @property
    def signals(self) -> SmoothedSignals:
        return self.smoother.signals

    def estimate(self, now: float) -> ConditionState | None:
        """Produce a condition state if the emit interval has elapsed.

        Returns:
            A new ConditionState, or None when nothing has been ingested
            yet or the interval has not elapsed since the last emission.

        Raises:
            InputError: if `now` is not a finite time
        """
        if not math.isfinite(now):
            raise InputError(f"Estimate time must be finite, got {now}")

        if not self.has_data:
            logger.debug("No samples ingested yet; no condition state available")
            return None

        if not self.scheduler.try_emit(now):
            return None

        signals = self.smoother.signals
        scores = score_conditions(signals)
        confidence = assess_confidence(self._tier, self.buffer)

        state = ConditionState(
            timestamp=now,
            scores=scores,
            confidence=confidence,
            confident=confidence >= self.config.confidence_threshold,
            drivers=compute_drivers(signals),
            not_used=compute_not_used(self._tier, self.buffer),
            dominant=scores.dominant,
        )

        logger.debug(
            f"Condition state @{now:.1f}: {state.dominant.value} "
            f"(confidence {confidence:.2f}, {len(state.drivers)} drivers)"
        )
        return state

    def reset(self) -> None:
        """Discard buffer, smoothed signals and emission timing."""
        self.buffer.clear()
        self.smoother.reset()
        self.scheduler.reset()
        self._ingested = 0
