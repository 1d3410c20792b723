"""Response feedback - learner responses tune the policy cooldown."""

import logging
from collections.abc import Callable

from aegis.contracts.config import COOLDOWN_MAX_S, COOLDOWN_MIN_S, PolicyConfig
from aegis.contracts.intervention import ResponseAction
from aegis.errors import InputError

logger = logging.getLogger(__name__)

DISMISS_COOLDOWN_STEP_S = 15.0
ACCEPT_COOLDOWN_STEP_S = 5.0


class ResponseFeedback:
    """Adjusts `config.cooldown_s` from learner responses.

    dismiss: +15s (cap 300). accept: -5s (floor 60).
    alternative: no effect on cooldown; hand it to `on_alternative`
    to extend behavior.
    """

    def __init__(
        self,
        config: PolicyConfig,
        on_alternative: Callable[[str], None] | None = None,
    ):
        self.config = config
        self.on_alternative = on_alternative
        self.counts: dict[str, int] = {a.value: 0 for a in ResponseAction}

    def apply(self, intervention_id: str, choice: ResponseAction | str) -> float:
        """Apply one response and return the resulting cooldown.

        Raises:
            InputError: if `choice` is not a known response action
        """
        try:
            action = ResponseAction(choice)
        except ValueError as e:
            raise InputError(f"Unknown learner response: {choice!r}") from e

        self.counts[action.value] += 1
        before = self.config.cooldown_s

        if action == ResponseAction.DISMISS:
            # Learner didn't want this - back off
            self.config.cooldown_s = min(before + DISMISS_COOLDOWN_STEP_S, COOLDOWN_MAX_S)
        elif action == ResponseAction.ACCEPT:
            self.config.cooldown_s = max(before - ACCEPT_COOLDOWN_STEP_S, COOLDOWN_MIN_S)
        elif self.on_alternative is not None:
            self.on_alternative(intervention_id)

        if self.config.cooldown_s != before:
            logger.info(
                f"Cooldown {before:g}s -> {self.config.cooldown_s:g}s "
                f"after {action.value} on {intervention_id}"
            )
        return self.config.cooldown_s
