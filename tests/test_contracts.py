"""Tests for contract schemas."""

import math

import pytest
from pydantic import ValidationError

from aegis.contracts import (
    ConditionScores,
    EyeMetrics,
    FeatureSample,
    GateName,
    GazeEstimate,
    HeadPose,
    InteractionTelemetry,
    Intervention,
    InterventionClass,
    InterventionDecision,
    InterventionOption,
    LearningCondition,
    PerceptionSource,
    PerceptionTier,
    ResponseAction,
)


def _options(dismissals: int = 1) -> list[InterventionOption]:
    options = [InterventionOption(id="accept", label="Slow down", action=ResponseAction.ACCEPT)]
    for i in range(dismissals):
        options.append(
            InterventionOption(id=f"dismiss{i}", label="Not now", action=ResponseAction.DISMISS)
        )
    return options


class TestFeatureSample:
    def test_telemetry_only_sample(self):
        sample = FeatureSample.telemetry_only(3.0, InteractionTelemetry(tap_rate_10s=0.4))

        assert sample.tier == PerceptionTier.TELEMETRY_ONLY
        assert sample.source == PerceptionSource.TELEMETRY_ONLY
        assert sample.gaze is None
        assert sample.pose is None
        assert not sample.quality.face_present
        assert sample.interaction.tap_rate_10s == 0.4

    def test_interaction_required(self):
        with pytest.raises(ValidationError):
            FeatureSample(timestamp=0.0)

    def test_gaze_range_enforced(self):
        with pytest.raises(ValidationError):
            GazeEstimate(x=1.5, y=0.0)

    def test_negative_telemetry_rejected(self):
        with pytest.raises(ValidationError):
            InteractionTelemetry(tap_rate_10s=-0.1)

    @pytest.mark.parametrize("build", [
        lambda v: InteractionTelemetry(retry_count_60s=v),
        lambda v: InteractionTelemetry(idle_seconds=v),
        lambda v: HeadPose(yaw=v),
        lambda v: EyeMetrics(blink_rate_30s=v),
        lambda v: FeatureSample.telemetry_only(v, InteractionTelemetry()),
    ])
    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_non_finite_values_rejected(self, build, value):
        with pytest.raises(ValidationError):
            build(value)

    def test_sample_is_immutable(self):
        sample = FeatureSample.telemetry_only(0.0, InteractionTelemetry())
        with pytest.raises(ValidationError):
            sample.timestamp = 5.0


class TestConditionScores:
    def test_scores_bounded(self):
        with pytest.raises(ValidationError):
            ConditionScores(attentive=1.2, wandering=0, confused=0, overloaded=0, fatigued=0)

    def test_dominant_is_argmax(self):
        scores = ConditionScores(
            attentive=0.2, wandering=0.3, confused=0.1, overloaded=0.9, fatigued=0.4
        )
        assert scores.dominant == LearningCondition.OVERLOADED

    def test_all_equal_ties_to_attentive(self):
        scores = ConditionScores(
            attentive=0.5, wandering=0.5, confused=0.5, overloaded=0.5, fatigued=0.5
        )
        assert scores.dominant == LearningCondition.ATTENTIVE

    def test_tie_goes_to_earlier_label(self):
        scores = ConditionScores(
            attentive=0.1, wandering=0.2, confused=0.7, overloaded=0.7, fatigued=0.7
        )
        assert scores.dominant == LearningCondition.CONFUSED

    def test_to_dict_covers_every_condition(self):
        scores = ConditionScores(
            attentive=0.1, wandering=0.2, confused=0.3, overloaded=0.4, fatigued=0.5
        )
        assert scores.to_dict() == {
            "attentive": 0.1,
            "wandering": 0.2,
            "confused": 0.3,
            "overloaded": 0.4,
            "fatigued": 0.5,
        }


class TestIntervention:
    def test_requires_exactly_one_dismiss(self):
        with pytest.raises(ValidationError):
            Intervention(
                id="int_1_abcdef",
                intervention_class=InterventionClass.PACE,
                message="We may have moved too quickly.",
                options=_options(dismissals=0) + [
                    InterventionOption(id="alt", label="x", action=ResponseAction.ALTERNATIVE)
                ],
                confidence=0.7,
            )

        with pytest.raises(ValidationError):
            Intervention(
                id="int_1_abcdef",
                intervention_class=InterventionClass.PACE,
                message="We may have moved too quickly.",
                options=_options(dismissals=2),
                confidence=0.7,
            )

    def test_to_dict_uses_class_key(self):
        intervention = Intervention(
            id="int_1_abcdef",
            intervention_class=InterventionClass.HINT,
            message="A small nudge might help. Would you like one?",
            options=_options(),
            confidence=0.7,
        )

        data = intervention.to_dict()
        assert data["class"] == "hint"
        assert data["options"][1]["action"] == "dismiss"

    def test_accepts_class_alias(self):
        intervention = Intervention(
            id="int_1_abcdef",
            **{"class": "reset"},
            message="Shall we pause briefly?",
            options=_options(),
            confidence=0.7,
        )
        assert intervention.intervention_class == InterventionClass.RESET


class TestInterventionDecision:
    def test_abstain(self):
        decision = InterventionDecision.abstain(GateName.COOLDOWN, "Cooldown active", 30.0)

        assert not decision.should_intervene
        assert decision.intervention is None
        assert decision.gate == GateName.COOLDOWN
        assert decision.to_dict()["gate"] == "cooldown"

    def test_reasoning_never_empty(self):
        with pytest.raises(ValidationError):
            InterventionDecision.abstain(GateName.SUSTAIN, "", 5.0)

    def test_next_evaluation_non_negative(self):
        with pytest.raises(ValidationError):
            InterventionDecision.abstain(GateName.SUSTAIN, "not yet", -1.0)
