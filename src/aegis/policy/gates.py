"""
Policy Gates

The ordered pass/abstain checks of the decision procedure:

1. Relevance   - the dominant condition maps to at least one class
2. Confidence  - state confidence >= preference-adjusted threshold
3. Sustain     - the condition dominated >= 60% of the trailing window
4. Cooldown    - enough time since the last intervention
5. Rate limit  - fewer than max_per_10min offers in the trailing 600s
"""

import math
from collections import deque
from dataclasses import dataclass

from aegis.contracts.condition import LearningCondition
from aegis.contracts.intervention import GateName, InterventionClass

CONDITION_INTERVENTIONS: dict[LearningCondition, tuple[InterventionClass, ...]] = {
    LearningCondition.ATTENTIVE: (),
    LearningCondition.WANDERING: (InterventionClass.RESET, InterventionClass.MODALITY),
    LearningCondition.CONFUSED: (
        InterventionClass.HINT,
        InterventionClass.PACE,
        InterventionClass.MODALITY,
    ),
    LearningCondition.OVERLOADED: (InterventionClass.PACE, InterventionClass.RESET),
    LearningCondition.FATIGUED: (InterventionClass.RESET, InterventionClass.PACE),
}

SUSTAIN_RATIO = 0.6
RATE_WINDOW_S = 600.0

# Suggested re-evaluation delays per abstaining gate
RELEVANCE_RETRY_S = 10.0
CONFIDENCE_RETRY_S = 5.0
SUSTAIN_RETRY_S = 5.0
RATE_LIMIT_RETRY_S = 60.0


@dataclass
class GateResult:
    """Outcome of a single gate."""

    gate: GateName
    passed: bool
    reasoning: str = ""
    next_evaluation_s: float = 0.0

    @classmethod
    def ok(cls, gate: GateName) -> "GateResult":
        return cls(gate=gate, passed=True)


class ConditionHistory:
    """Ring of (timestamp, dominant) entries for the sustain check.

    Pruned at twice the sustain window.
    """

    def __init__(self) -> None:
        self._entries: deque[tuple[float, LearningCondition]] = deque()

    def record(self, timestamp: float, condition: LearningCondition, window_s: float) -> None:
        self._entries.append((timestamp, condition))
        cutoff = timestamp - window_s * 2
        while self._entries and self._entries[0][0] < cutoff:
            self._entries.popleft()

    def share(self, condition: LearningCondition, now: float, window_s: float) -> tuple[int, int]:
        """(matching, total) entries within the trailing window."""
        cutoff = now - window_s
        recent = [c for t, c in self._entries if t >= cutoff]
        return sum(1 for c in recent if c == condition), len(recent)

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()


def check_relevance(dominant: LearningCondition) -> GateResult:
    candidates = CONDITION_INTERVENTIONS[dominant]
    if not candidates:
        return GateResult(
            gate=GateName.RELEVANCE,
            passed=False,
            reasoning=(
                f"Relevance: '{dominant.value}' has 0 candidate interventions. "
                "Learner appears attentive."
            ),
            next_evaluation_s=RELEVANCE_RETRY_S,
        )
    return GateResult.ok(GateName.RELEVANCE)


def check_confidence(confidence: float, threshold: float) -> GateResult:
    if confidence < threshold:
        return GateResult(
            gate=GateName.CONFIDENCE,
            passed=False,
            reasoning=(
                f"Confidence {confidence:.2f} below threshold {threshold:.2f} "
                f"(short by {threshold - confidence:.2f}). I may be mistaken."
            ),
            next_evaluation_s=CONFIDENCE_RETRY_S,
        )
    return GateResult.ok(GateName.CONFIDENCE)


def check_sustain(
    history: ConditionHistory,
    dominant: LearningCondition,
    now: float,
    window_s: float,
) -> GateResult:
    matching, total = history.share(dominant, now, window_s)
    ratio = matching / total if total else 0.0
    if total == 0 or ratio < SUSTAIN_RATIO:
        return GateResult(
            gate=GateName.SUSTAIN,
            passed=False,
            reasoning=(
                f'Condition "{dominant.value}" not yet sustained for {window_s:g}s '
                f"({matching}/{total} = {ratio:.0%}, needs {SUSTAIN_RATIO:.0%})."
            ),
            next_evaluation_s=SUSTAIN_RETRY_S,
        )
    return GateResult.ok(GateName.SUSTAIN)


def check_cooldown(elapsed: float | None, cooldown_s: float) -> GateResult:
    """`elapsed` is None when nothing has been offered yet."""
    if elapsed is not None and elapsed < cooldown_s:
        remaining = math.ceil(cooldown_s - elapsed)
        return GateResult(
            gate=GateName.COOLDOWN,
            passed=False,
            reasoning=(
                f"Cooldown active ({remaining}s remaining of {cooldown_s:g}s). "
                "Avoiding nagging."
            ),
            next_evaluation_s=float(remaining),
        )
    return GateResult.ok(GateName.COOLDOWN)


def check_rate_limit(recent_count: int, max_per_window: int) -> GateResult:
    if recent_count >= max_per_window:
        return GateResult(
            gate=GateName.RATE_LIMIT,
            passed=False,
            reasoning=(
                f"Rate limit: already offered {recent_count} interventions in the "
                f"last 10 minutes (max {max_per_window})."
            ),
            next_evaluation_s=RATE_LIMIT_RETRY_S,
        )
    return GateResult.ok(GateName.RATE_LIMIT)
