"""
Pedagogical Policy

Turns condition states into throttled intervention decisions.

Provides:
- PedagogicalPolicyEngine: Gate chain, selection and feedback
- InterventionBudget: Intervention history for cooldown and rate limit
- InterventionSelector: Class choice and offer payloads
- ResponseFeedback: Cooldown tuning from learner responses
"""

from aegis.policy.budget import InterventionBudget
from aegis.policy.engine import PedagogicalPolicyEngine
from aegis.policy.feedback import ResponseFeedback
from aegis.policy.gates import CONDITION_INTERVENTIONS, ConditionHistory, GateResult
from aegis.policy.selector import InterventionSelector

__all__ = [
    "PedagogicalPolicyEngine",
    "InterventionBudget",
    "InterventionSelector",
    "ResponseFeedback",
    "CONDITION_INTERVENTIONS",
    "ConditionHistory",
    "GateResult",
]
