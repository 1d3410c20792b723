"""
Pedagogical Policy Engine

Chooses interventions from learning condition states, confidence,
learner preferences and recent intervention history.

Rules:
  - Intervene only when relevant, confident, sustained and cooled down
  - Never more than N interruptions per 10 minutes
  - Always offer "Not now"
  - Fail toward silence: every abstention is a normal, reasoned outcome

One engine per learning session. Not safe for concurrent use.
"""

import logging
import math
import random
from collections.abc import Callable
from typing import Any

from aegis.contracts.condition import ConditionState
from aegis.contracts.config import LearnerPreferences, PolicyConfig, resolve_config
from aegis.contracts.intervention import (
    GateName,
    InterventionDecision,
    InterventionRecord,
    ResponseAction,
)
from aegis.errors import ConfigurationError
from aegis.policy.budget import InterventionBudget
from aegis.policy.feedback import ResponseFeedback
from aegis.policy.gates import (
    CONDITION_INTERVENTIONS,
    ConditionHistory,
    GateResult,
    check_confidence,
    check_cooldown,
    check_rate_limit,
    check_relevance,
    check_sustain,
)
from aegis.policy.selector import InterventionSelector

logger = logging.getLogger(__name__)

STATE_UNAVAILABLE_RETRY_S = 5.0


class PedagogicalPolicyEngine:
    """Gate chain + selector + response feedback."""

    def __init__(
        self,
        config: PolicyConfig | dict[str, Any] | None = None,
        rng: random.Random | None = None,
        on_alternative: Callable[[str], None] | None = None,
        **overrides: Any,
    ):
        """Initialize the policy engine.

        Args:
            config: Policy settings (model or dict); defaults if omitted
            rng: Random source for the selector (seed for reproducible output)
            on_alternative: Called with the intervention id when the learner
                asks for an alternative
            **overrides: Individual settings overriding `config`

        Raises:
            ConfigurationError: if any setting is out of range
        """
        self.config = resolve_config(PolicyConfig, config, overrides)
        self.selector = InterventionSelector(rng)
        self.feedback = ResponseFeedback(self.config, on_alternative)
        self.budget = InterventionBudget()
        self.condition_history = ConditionHistory()

        self._last_evaluated: float | None = None
        self._issued_ids: set[str] = set()
        self._evaluations = 0
        self._abstentions: dict[str, int] = {g.value: 0 for g in GateName}

    # ─────────────────────────────────────────────────────────────────────
    # Decision
    # ─────────────────────────────────────────────────────────────────────

    def evaluate(self, state: ConditionState | None) -> InterventionDecision:
        """Run the gate chain on a condition state."""
        self._evaluations += 1

        if state is None:
            return self._abstain(GateResult(
                gate=GateName.STATE_UNAVAILABLE,
                passed=False,
                reasoning="No condition state available yet.",
                next_evaluation_s=STATE_UNAVAILABLE_RETRY_S,
            ))

        now = state.timestamp
        if not math.isfinite(now):
            return self._abstain(GateResult(
                gate=GateName.STALE_STATE,
                passed=False,
                reasoning=f"Ignoring state with non-finite timestamp {now}.",
                next_evaluation_s=STATE_UNAVAILABLE_RETRY_S,
            ))
        if self._last_evaluated is not None and now < self._last_evaluated:
            return self._abstain(GateResult(
                gate=GateName.STALE_STATE,
                passed=False,
                reasoning=(
                    f"Ignoring stale state @{now:.1f} "
                    f"(already evaluated @{self._last_evaluated:.1f})."
                ),
                next_evaluation_s=STATE_UNAVAILABLE_RETRY_S,
            ))
        self._last_evaluated = now

        # Track dominant conditions for the sustain check
        self.condition_history.record(now, state.dominant, self.config.sustained_window_s)

        candidates = CONDITION_INTERVENTIONS[state.dominant]
        threshold = self.adjusted_threshold()
        cooldown = self.adjusted_cooldown()

        gates = (
            lambda: check_relevance(state.dominant),
            lambda: check_confidence(state.confidence, threshold),
            lambda: check_sustain(
                self.condition_history, state.dominant, now, self.config.sustained_window_s
            ),
            lambda: check_cooldown(self.budget.seconds_since_last(now), cooldown),
            lambda: check_rate_limit(self.budget.recent_count(now), self.config.max_per_10min),
        )
        for gate in gates:
            result = gate()
            if not result.passed:
                return self._abstain(result)

        # All gates passed: choose and offer
        cls = self.selector.choose_class(
            candidates, self.config.preferences, self.budget.last_class
        )
        intervention = self.selector.build(cls, state, self.config.preferences)

        self.budget.spend(InterventionRecord(timestamp=now, intervention_class=cls))
        self._issued_ids.add(intervention.id)

        logger.info(
            f"Intervening: {cls.value} for sustained {state.dominant.value} "
            f"(confidence {state.confidence:.2f})"
        )

        return InterventionDecision(
            should_intervene=True,
            intervention=intervention,
            reasoning=(
                f'Sustained "{state.dominant.value}" '
                f"(confidence {state.confidence:.2f}) -> offering {cls.value}."
            ),
            next_evaluation_s=cooldown,
        )

    def _abstain(self, result: GateResult) -> InterventionDecision:
        self._abstentions[result.gate.value] += 1
        self.budget.record_suppressed()
        logger.debug(f"Abstaining at {result.gate.value}: {result.reasoning}")
        return InterventionDecision.abstain(
            result.gate, result.reasoning, result.next_evaluation_s
        )

    # ─────────────────────────────────────────────────────────────────────
    # Preference adjustments
    # ─────────────────────────────────────────────────────────────────────

    def adjusted_threshold(self) -> float:
        base = self.config.confidence_threshold
        frequency = self.config.preferences.frequency
        if frequency == "fewer":
            return base + 0.1
        if frequency == "more":
            return max(base - 0.1, 0.3)
        return base

    def adjusted_cooldown(self) -> float:
        base = self.config.cooldown_s
        frequency = self.config.preferences.frequency
        if frequency == "fewer":
            return base * 1.5
        if frequency == "more":
            return base * 0.7
        return base

    # ─────────────────────────────────────────────────────────────────────
    # Learner input
    # ─────────────────────────────────────────────────────────────────────

    def record_response(self, intervention_id: str, choice: ResponseAction | str) -> float:
        """Record the learner's response to an intervention.

        Returns:
            The cooldown after adjustment

        Raises:
            InputError: if `choice` is not accept, dismiss or alternative
        """
        if intervention_id not in self._issued_ids:
            logger.debug(f"Response for unknown intervention {intervention_id}")
        return self.feedback.apply(intervention_id, choice)

    def update_preferences(self, **prefs: Any) -> LearnerPreferences:
        """Merge learner preferences (e.g. from calibration prompts).

        Raises:
            ConfigurationError: if a preference value is invalid
        """
        merged = {**self.config.preferences.model_dump(), **prefs}
        try:
            preferences = LearnerPreferences(**merged)
        except ValueError as e:
            raise ConfigurationError(f"Invalid learner preferences: {e}") from e
        self.config.preferences = preferences
        logger.info(f"Learner preferences updated: {prefs}")
        return preferences

    # ─────────────────────────────────────────────────────────────────────
    # Housekeeping
    # ─────────────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Clear histories and timers. The tuned cooldown is kept."""
        self.budget.clear()
        self.condition_history.clear()
        self._last_evaluated = None
        self._issued_ids.clear()

    def get_stats(self) -> dict:
        return {
            "evaluations": self._evaluations,
            "abstentions": dict(self._abstentions),
            "responses": dict(self.feedback.counts),
            "cooldown_s": self.config.cooldown_s,
            **self.budget.get_stats(),
        }
