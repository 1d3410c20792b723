"""Condition contracts - scores, drivers and emitted condition states."""

from enum import Enum

from pydantic import BaseModel, Field


class LearningCondition(str, Enum):
    """The five non-exclusive learning conditions.

    Declaration order is the tie-break priority for the dominant label.
    """

    ATTENTIVE = "attentive"
    WANDERING = "wandering"
    CONFUSED = "confused"
    OVERLOADED = "overloaded"
    FATIGUED = "fatigued"


class ConditionScores(BaseModel):
    """Independent per-label scores.

    NOT a probability distribution: scores overlap and need not sum to 1.
    """

    attentive: float = Field(ge=0.0, le=1.0)
    wandering: float = Field(ge=0.0, le=1.0)
    confused: float = Field(ge=0.0, le=1.0)
    overloaded: float = Field(ge=0.0, le=1.0)
    fatigued: float = Field(ge=0.0, le=1.0)

    model_config = {"frozen": True}

    def get(self, condition: LearningCondition) -> float:
        return getattr(self, condition.value)

    @property
    def dominant(self) -> LearningCondition:
        """Fixed-order argmax; ties go to the earliest declared label."""
        best = LearningCondition.ATTENTIVE
        best_score = -1.0
        for condition in LearningCondition:
            score = self.get(condition)
            if score > best_score:
                best = condition
                best_score = score
        return best

    def to_dict(self) -> dict[str, float]:
        return {c.value: self.get(c) for c in LearningCondition}


class ConditionDriver(BaseModel):
    """Human-readable explanation unit."""

    description: str
    features: list[str] = Field(
        default_factory=list,
        description="Feature fields that drove this explanation"
    )
    weight: float = Field(ge=0.0, le=1.0)

    model_config = {"frozen": True}


class ConditionState(BaseModel):
    """One emitted condition snapshot.

    Immutable once created. Consumers should prefer the full score set;
    `dominant` is a convenience for gating.
    """

    timestamp: float
    scores: ConditionScores
    confidence: float = Field(ge=0.0, le=1.0)
    confident: bool = Field(
        default=False,
        description="confidence >= the estimator's confidence_threshold"
    )
    drivers: list[ConditionDriver] = Field(
        default_factory=list,
        description="Sorted by weight, strongest first"
    )
    not_used: list[str] = Field(
        default_factory=list,
        description="Signals unavailable for this estimate"
    )
    dominant: LearningCondition

    model_config = {"frozen": True}

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "scores": self.scores.to_dict(),
            "confidence": self.confidence,
            "confident": self.confident,
            "drivers": [d.model_dump() for d in self.drivers],
            "not_used": list(self.not_used),
            "dominant": self.dominant.value,
        }
