"""Intervention contracts - offers, history records and policy decisions."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class InterventionClass(str, Enum):
    """Classes of pedagogical intervention."""

    PACE = "pace"  # Slow down, increase spacing, chunk content
    MODALITY = "modality"  # text / diagram / example / voice
    HINT = "hint"  # Hint ladder: nudge -> partial -> worked solution
    RESET = "reset"  # 15-30s micro-break
    AGENCY = "agency"  # Ask the learner what they prefer


class ResponseAction(str, Enum):
    """What a learner can do with an offer."""

    ACCEPT = "accept"
    DISMISS = "dismiss"
    ALTERNATIVE = "alternative"


class GateName(str, Enum):
    """Where an evaluation stopped."""

    STATE_UNAVAILABLE = "state_unavailable"
    STALE_STATE = "stale_state"
    RELEVANCE = "relevance"
    CONFIDENCE = "confidence"
    SUSTAIN = "sustain"
    COOLDOWN = "cooldown"
    RATE_LIMIT = "rate_limit"


class InterventionOption(BaseModel):
    """One choice presented with an offer."""

    id: str
    label: str
    action: ResponseAction

    model_config = {"frozen": True}


class Intervention(BaseModel):
    """An offer to the learner.

    The class tag is the load-bearing field; the message is cosmetic.
    """

    id: str
    intervention_class: InterventionClass = Field(alias="class")
    message: str
    options: list[InterventionOption] = Field(min_length=2)
    triggered_by: list[str] = Field(
        default_factory=list,
        description="Driver descriptions behind this offer"
    )
    confidence: float = Field(ge=0.0, le=1.0)
    modality: str | None = Field(
        default=None,
        description="Learner's preferred modality, for modality offers"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @model_validator(mode="after")
    def validate_dismiss_option(self) -> "Intervention":
        """Every offer must be declinable exactly one way.

        Raises:
            ValueError: If the options do not hold exactly one dismiss.
        """
        dismissals = sum(1 for o in self.options if o.action == ResponseAction.DISMISS)
        if dismissals != 1:
            raise ValueError(f"options must contain exactly one dismiss, got {dismissals}")
        return self

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class InterventionRecord(BaseModel):
    """History entry appended for each successful intervention."""

    timestamp: float
    intervention_class: InterventionClass

    model_config = {"frozen": True}


class InterventionDecision(BaseModel):
    """Outcome of one evaluate() call. Transient, never stored."""

    should_intervene: bool
    intervention: Intervention | None = None
    reasoning: str = Field(min_length=1)
    next_evaluation_s: float = Field(ge=0.0)
    gate: GateName | None = Field(
        default=None,
        description="The gate that abstained (None when intervening)"
    )

    model_config = {"frozen": True}

    @classmethod
    def abstain(
        cls, gate: GateName, reasoning: str, next_evaluation_s: float
    ) -> "InterventionDecision":
        return cls(
            should_intervene=False,
            reasoning=reasoning,
            next_evaluation_s=next_evaluation_s,
            gate=gate,
        )

    def to_dict(self) -> dict:
        return {
            "should_intervene": self.should_intervene,
            "intervention": self.intervention.to_dict() if self.intervention else None,
            "reasoning": self.reasoning,
            "next_evaluation_s": self.next_evaluation_s,
            "gate": self.gate.value if self.gate else None,
        }
