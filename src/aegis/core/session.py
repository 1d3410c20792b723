"""
Learning Session

Wires telemetry -> estimator -> policy into a single loop. One session
owns exactly one estimator/policy pair; pairs are never shared across
sessions. All calls must be serialized by the caller.
"""

import logging
import math
import random
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from aegis.contracts.condition import ConditionState
from aegis.contracts.config import EstimatorConfig, PolicyConfig
from aegis.contracts.features import FeatureSample, PerceptionTier
from aegis.contracts.intervention import Intervention, InterventionDecision, ResponseAction
from aegis.errors import InputError
from aegis.estimator.estimator import LearningConditionEstimator
from aegis.policy.engine import PedagogicalPolicyEngine
from aegis.telemetry.tracker import InteractionTracker

logger = logging.getLogger(__name__)


@dataclass
class SessionCallbacks:
    """Outbound hooks for the presentation layer."""

    on_condition_update: Callable[[ConditionState], None] | None = None
    on_intervention: Callable[[Intervention], None] | None = None
    on_tier_change: Callable[[PerceptionTier], None] | None = None
    on_policy_reasoning: Callable[[str], None] | None = None


@dataclass
class TickResult:
    """What one tick produced. Both fields are None when nothing emitted."""

    state: ConditionState | None = None
    decision: InterventionDecision | None = None

    @property
    def emitted(self) -> bool:
        return self.state is not None

    @property
    def intervention(self) -> Intervention | None:
        if self.decision is None:
            return None
        return self.decision.intervention

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.to_dict() if self.state else None,
            "decision": self.decision.to_dict() if self.decision else None,
        }


@dataclass
class SessionStats:
    samples_accepted: int = 0
    samples_rejected: int = 0
    ticks: int = 0
    states_emitted: int = 0
    interventions: int = 0


class LearningSession:
    """The heartbeat of one learner's session."""

    def __init__(
        self,
        estimator_config: EstimatorConfig | dict[str, Any] | None = None,
        policy_config: PolicyConfig | dict[str, Any] | None = None,
        callbacks: SessionCallbacks | None = None,
        rng: random.Random | None = None,
        synthesize_tier0: bool = True,
        merge_telemetry: bool = False,
        start_time: float = 0.0,
    ):
        """Initialize a learning session.

        Args:
            estimator_config: Estimator settings
            policy_config: Policy settings
            callbacks: Outbound hooks
            rng: Random source for intervention phrasing
            synthesize_tier0: At tier 0, feed a telemetry-only sample on every tick
            merge_telemetry: Replace each sample's telemetry with the tracker's
            start_time: Caller clock at session start

        Raises:
            ConfigurationError: if either config is invalid
        """
        self.id = str(uuid.uuid4())
        self.estimator = LearningConditionEstimator(estimator_config)
        self.policy = PedagogicalPolicyEngine(policy_config, rng=rng)
        self.tracker = InteractionTracker(now=start_time)
        self.callbacks = callbacks or SessionCallbacks()
        self.synthesize_tier0 = synthesize_tier0
        self.merge_telemetry = merge_telemetry

        self.last_condition: ConditionState | None = None
        self.stats = SessionStats()

    # ─────────────────────────────────────────────────────────────────────
    # Inbound
    # ─────────────────────────────────────────────────────────────────────

    @property
    def tier(self) -> PerceptionTier:
        return self.estimator.tier

    def set_tier(self, tier: PerceptionTier | int) -> None:
        """Tier-change notification, applied before the next emission."""
        changed = tier != self.estimator.tier
        self.estimator.set_tier(tier)
        if changed and self.callbacks.on_tier_change:
            self.callbacks.on_tier_change(self.estimator.tier)

    def ingest(self, sample: FeatureSample) -> bool:
        """Feed one sample to the estimator.

        Returns:
            False if the sample was rejected; the session is unchanged
        """
        if self.merge_telemetry:
            sample = sample.model_copy(
                update={"interaction": self.tracker.snapshot(sample.timestamp)}
            )
        try:
            self.estimator.ingest(sample)
        except InputError as e:
            self.stats.samples_rejected += 1
            logger.warning(f"Rejected sample: {e}")
            return False
        self.stats.samples_accepted += 1
        return True

    def record_retry(self, now: float) -> None:
        self.tracker.record_retry(now)

    def set_content_element(self, element_id: str | None) -> None:
        self.tracker.set_content_element(element_id)

    def record_response(self, intervention_id: str, choice: ResponseAction | str) -> float:
        """Forward a learner response to the policy. Returns the new cooldown."""
        return self.policy.record_response(intervention_id, choice)

    # ─────────────────────────────────────────────────────────────────────
    # Loop
    # ─────────────────────────────────────────────────────────────────────

    def tick(self, now: float) -> TickResult:
        """Run inference and policy once. Call at or above the emit cadence."""
        self.stats.ticks += 1

        if not math.isfinite(now):
            logger.warning(f"Ignoring tick at non-finite time {now}")
            return TickResult()

        # Tier 0 still produces samples from telemetry alone
        if self.synthesize_tier0 and self.estimator.tier == PerceptionTier.TELEMETRY_ONLY:
            self.ingest(FeatureSample.telemetry_only(now, self.tracker.snapshot(now)))

        state = self.estimator.estimate(now)
        if state is None:
            return TickResult()

        self.last_condition = state
        self.stats.states_emitted += 1
        if self.callbacks.on_condition_update:
            self.callbacks.on_condition_update(state)

        decision = self.policy.evaluate(state)
        if self.callbacks.on_policy_reasoning:
            self.callbacks.on_policy_reasoning(decision.reasoning)

        if decision.should_intervene and decision.intervention is not None:
            self.stats.interventions += 1
            if self.callbacks.on_intervention:
                self.callbacks.on_intervention(decision.intervention)

        return TickResult(state=state, decision=decision)

    def reset(self, now: float = 0.0) -> None:
        """Discard buffers, histories and timers. No in-flight work exists."""
        self.estimator.reset()
        self.policy.reset()
        self.tracker.reset(now)
        self.last_condition = None
        logger.info(f"Session {self.id[:8]} reset")

    def stop(self, now: float = 0.0) -> None:
        """End the session. Equivalent to reset(); nothing is persisted."""
        self.reset(now)

    def get_stats(self) -> dict[str, Any]:
        return {
            "session_id": self.id,
            "tier": int(self.tier),
            "samples_accepted": self.stats.samples_accepted,
            "samples_rejected": self.stats.samples_rejected,
            "ticks": self.stats.ticks,
            "states_emitted": self.stats.states_emitted,
            "interventions": self.stats.interventions,
            "policy": self.policy.get_stats(),
        }
