"""Shared factories for tests. All clocks are synthetic."""

import pytest

from aegis.contracts.condition import (
    ConditionDriver,
    ConditionScores,
    ConditionState,
    LearningCondition,
)
from aegis.contracts.features import (
    EyeMetrics,
    FeatureSample,
    GazeEstimate,
    HeadPose,
    InteractionTelemetry,
    PerceptionSource,
    PerceptionTier,
    QualityFlags,
)


def build_sample(
    timestamp: float,
    tier: int = 1,
    gaze: tuple[float, float] | None = (0.05, 0.0),
    pose: tuple[float, float, float] | None = (0.0, 0.0, 0.0),
    blink: float | None = None,
    face: bool = True,
    tap_rate: float = 0.2,
    retries: float = 0.0,
    idle: float | None = 1.0,
) -> FeatureSample:
    return FeatureSample(
        timestamp=timestamp,
        tier=PerceptionTier(tier),
        source=PerceptionSource.WEB_MEDIAPIPE if tier else PerceptionSource.TELEMETRY_ONLY,
        quality=QualityFlags(face_present=face, confidence=0.9 if face else 0.0),
        gaze=GazeEstimate(x=gaze[0], y=gaze[1]) if gaze is not None else None,
        pose=HeadPose(yaw=pose[0], pitch=pose[1], roll=pose[2]) if pose is not None else None,
        eyes=EyeMetrics(blink_rate_30s=blink) if blink is not None else None,
        interaction=InteractionTelemetry(
            tap_rate_10s=tap_rate,
            retry_count_60s=retries,
            idle_seconds=idle,
        ),
    )


def build_state(
    timestamp: float,
    dominant: LearningCondition = LearningCondition.CONFUSED,
    confidence: float = 0.8,
    drivers: list[ConditionDriver] | None = None,
) -> ConditionState:
    scores = {c.value: 0.1 for c in LearningCondition}
    scores[dominant.value] = 0.8
    return ConditionState(
        timestamp=timestamp,
        scores=ConditionScores(**scores),
        confidence=confidence,
        confident=confidence >= 0.4,
        drivers=drivers or [],
        dominant=dominant,
    )


# Scenario signal profiles: keyword arguments for build_sample
ATTENTIVE = {"gaze": (0.05, 0.0), "pose": (0.0, 0.0, 0.0), "tap_rate": 0.2, "idle": 1.0}
WANDERING = {"gaze": (0.45, 0.0), "pose": (0.4, 0.0, 0.0), "tap_rate": 0.0, "idle": 15.0}
CONFUSED = {"gaze": (0.2, 0.1), "pose": (0.0, 0.0, 0.0), "tap_rate": 0.02, "retries": 5.0, "idle": 2.0}


@pytest.fixture
def make_sample():
    return build_sample


@pytest.fixture
def make_state():
    return build_state
