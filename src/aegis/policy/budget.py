"""
Intervention Budget

Tracks intervention history to enforce cooldown spacing and the
per-10-minute rate limit, so the learner is never nagged.
"""

import logging
from collections import deque
from dataclasses import dataclass, field

from aegis.contracts.intervention import InterventionClass, InterventionRecord
from aegis.policy.gates import RATE_WINDOW_S

logger = logging.getLogger(__name__)


@dataclass
class InterventionBudget:
    """History of successful interventions.

    Features:
    - Time-ordered intervention records, pruned by age
    - Last-intervention time for the cooldown gate
    - Trailing-window count for the rate limit
    - Suppression statistics
    """

    window_s: float = RATE_WINDOW_S

    # Current state
    history: deque[InterventionRecord] = field(default_factory=deque)
    last_intervention_time: float | None = None
    last_class: InterventionClass | None = None

    # Statistics
    total_interventions: int = 0
    total_suppressed: int = 0

    def seconds_since_last(self, now: float) -> float | None:
        """Elapsed time since the last intervention, None if there was none."""
        if self.last_intervention_time is None:
            return None
        return now - self.last_intervention_time

    def recent_count(self, now: float) -> int:
        """Interventions within the trailing window."""
        self.prune(now)
        return sum(1 for r in self.history if now - r.timestamp < self.window_s)

    def spend(self, record: InterventionRecord) -> None:
        """Record a successful intervention.

        Records are appended in time order; the caller guarantees
        non-decreasing timestamps.
        """
        self.history.append(record)
        self.last_intervention_time = record.timestamp
        self.last_class = record.intervention_class
        self.total_interventions += 1

        logger.debug(
            f"Budget spent: {record.intervention_class.value} @{record.timestamp:.1f} "
            f"({len(self.history)} in window)"
        )

    def record_suppressed(self) -> None:
        """Record an abstained evaluation."""
        self.total_suppressed += 1

    def prune(self, now: float) -> None:
        """Drop records that no longer count toward the rate limit."""
        cutoff = now - self.window_s
        while self.history and self.history[0].timestamp <= cutoff:
            self.history.popleft()

    def get_stats(self) -> dict:
        total = self.total_interventions + self.total_suppressed
        return {
            "in_window": len(self.history),
            "total_interventions": self.total_interventions,
            "total_suppressed": self.total_suppressed,
            "suppression_rate": self.total_suppressed / total if total > 0 else 0.0,
        }

    def clear(self) -> None:
        self.history.clear()
        self.last_intervention_time = None
        self.last_class = None
