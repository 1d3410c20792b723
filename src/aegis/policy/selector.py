"""
Intervention Selector

Chooses an intervention class from the gate-validated candidates and
builds the offer. Response grammar is provisional and humble, never
declarative. Phrase choice is cosmetic and drawn from an injected,
seedable random source.
"""

import logging
import random
import string
from collections.abc import Sequence

from aegis.contracts.condition import ConditionState
from aegis.contracts.config import LearnerPreferences
from aegis.contracts.intervention import (
    Intervention,
    InterventionClass,
    InterventionOption,
    ResponseAction,
)

logger = logging.getLogger(__name__)

RESPONSE_GRAMMAR: dict[InterventionClass, list[str]] = {
    InterventionClass.PACE: [
        "We may have moved too quickly.",
        "A smaller step might be kinder.",
        "Perhaps we could slow down here.",
    ],
    InterventionClass.MODALITY: [
        "Would another form help?",
        "A diagram might make this clearer. Shall I try?",
        "Sometimes a different angle helps. Would you like an example?",
    ],
    InterventionClass.HINT: [
        "There may be a gentler way into this.",
        "A small nudge might help. Would you like one?",
        "I could offer a starting point, if you wish.",
    ],
    InterventionClass.RESET: [
        "Shall we pause briefly?",
        "A moment of rest might be welcome.",
        "Your attention has been generous. A short breath?",
    ],
    InterventionClass.AGENCY: [
        "What would feel most helpful right now?",
        "Would you prefer an example or a diagram?",
        "You know best. What would you like to try?",
    ],
}

ACCEPT_LABELS: dict[InterventionClass, str] = {
    InterventionClass.PACE: "Slow down",
    InterventionClass.MODALITY: "Show me",
    InterventionClass.HINT: "Yes, a hint",
    InterventionClass.RESET: "Take a break",
    InterventionClass.AGENCY: "Choose for me",
}

ALTERNATIVE_LABEL = "Something else"
DISMISS_LABEL = "Not now"

# Classes that also offer an "alternative" choice
ALTERNATIVE_CLASSES = {InterventionClass.AGENCY, InterventionClass.MODALITY}

_ID_ALPHABET = string.digits + string.ascii_lowercase


class InterventionSelector:
    """Picks a class and builds the intervention payload."""

    def __init__(self, rng: random.Random | None = None):
        """Initialize selector.

        Args:
            rng: Random source for phrasing and ids; seed it to pin output
        """
        self.rng = rng or random.Random()

    def choose_class(
        self,
        candidates: Sequence[InterventionClass],
        preferences: LearnerPreferences,
        last_class: InterventionClass | None = None,
    ) -> InterventionClass:
        """Filter by preferences, then prefer something not just offered.

        Narrowing falls back to the filtered set, then to the raw
        candidates, which relevance already guaranteed non-empty.
        """
        filtered = [
            c for c in candidates
            if not (c == InterventionClass.RESET and not preferences.offer_breaks)
            and not (c == InterventionClass.HINT and not preferences.offer_hints)
        ]
        varied = [c for c in filtered if c != last_class]

        for pool in (varied, filtered, list(candidates)):
            if pool:
                return pool[0]
        raise ValueError("choose_class requires at least one candidate")

    def build(
        self,
        cls: InterventionClass,
        state: ConditionState,
        preferences: LearnerPreferences | None = None,
    ) -> Intervention:
        """Build the offer for `cls` from the triggering state."""
        message = self.rng.choice(RESPONSE_GRAMMAR[cls])

        options = [
            InterventionOption(id="accept", label=ACCEPT_LABELS[cls], action=ResponseAction.ACCEPT),
            InterventionOption(id="dismiss", label=DISMISS_LABEL, action=ResponseAction.DISMISS),
        ]
        if cls in ALTERNATIVE_CLASSES:
            options.insert(1, InterventionOption(
                id="alternative",
                label=ALTERNATIVE_LABEL,
                action=ResponseAction.ALTERNATIVE,
            ))

        modality = None
        if cls == InterventionClass.MODALITY and preferences is not None:
            modality = preferences.preferred_modality

        return Intervention(
            id=self._new_id(state.timestamp),
            intervention_class=cls,
            message=message,
            options=options,
            triggered_by=[d.description for d in state.drivers],
            confidence=state.confidence,
            modality=modality,
        )

    def _new_id(self, timestamp: float) -> str:
        suffix = "".join(self.rng.choice(_ID_ALPHABET) for _ in range(6))
        return f"int_{int(timestamp * 1000)}_{suffix}"
