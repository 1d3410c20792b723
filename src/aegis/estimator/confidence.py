"""Confidence assessment for an emitted condition state."""

from aegis.contracts.features import PerceptionTier
from aegis.estimator.buffer import SampleBuffer
from aegis.estimator.scorer import clamp

TIER_WEIGHT = 0.15
BUFFER_FILL_CAP = 0.3
GAZE_BONUS = 0.15
FACE_BONUS = 0.15
BASE_CONFIDENCE = 0.10


def assess_confidence(tier: PerceptionTier | int, buffer: SampleBuffer) -> float:
    """Scalar confidence in [0, 1].

    Monotone non-decreasing in tier and in data availability:
    0.15*tier + min(len/100, 0.3) + 0.15 (gaze seen) + 0.15 (face seen) + 0.10
    """
    tier_bonus = int(tier) * TIER_WEIGHT
    buffer_fill = min(len(buffer) / 100, BUFFER_FILL_CAP)
    has_gaze = GAZE_BONUS if buffer.any_gaze() else 0.0
    has_face = FACE_BONUS if buffer.any_face() else 0.0

    return clamp(tier_bonus + buffer_fill + has_gaze + has_face + BASE_CONFIDENCE)
