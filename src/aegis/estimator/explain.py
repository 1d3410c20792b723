"""Explainability - drivers and the not-used list.

Derived from the same smoothed state the scores come from, recomputed on
every emission because the tier can change mid-session.
"""

import math

from aegis.contracts.condition import ConditionDriver
from aegis.contracts.features import PerceptionTier
from aegis.estimator.buffer import SampleBuffer
from aegis.estimator.smoother import SmoothedSignals

NOT_USED_CAMERA_OFF = [
    "gaze direction (camera off)",
    "head pose (camera off)",
    "blink rate (camera off)",
    "face distance (camera off)",
]
NOT_USED_NO_GAZE = "gaze direction (not available at this tier)"
NOT_USED_NO_EXPRESSIVITY = "expressivity signals (disabled by default)"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_drivers(s: SmoothedSignals) -> list[ConditionDriver]:
    """Human-readable drivers, strongest first (stable on equal weights)."""
    drivers: list[ConditionDriver] = []

    if s.gaze_stability < 0.4:
        drivers.append(ConditionDriver(
            description="frequent gaze breaks",
            features=["gaze.x", "gaze.y"],
            weight=0.4,
        ))

    if s.pose_stability < 0.4:
        drivers.append(ConditionDriver(
            description="head pose drift",
            features=["pose.yaw", "pose.pitch", "pose.roll"],
            weight=0.3,
        ))

    if s.retry_rate > 0.5:
        drivers.append(ConditionDriver(
            description=f"{_round_half_up(s.retry_rate)} retries in last minute",
            features=["interaction.retry_count_60s"],
            weight=0.35,
        ))

    if s.idle_time > 10:
        drivers.append(ConditionDriver(
            description="extended idle period",
            features=["interaction.idle_seconds"],
            weight=0.25,
        ))

    if s.blink_rate > 0.3:
        drivers.append(ConditionDriver(
            description="elevated blink rate",
            features=["eyes.blink_rate_30s"],
            weight=0.2,
        ))

    if s.interaction_pace < 0.05:
        drivers.append(ConditionDriver(
            description="slower response times",
            features=["interaction.tap_rate_10s"],
            weight=0.2,
        ))

    return sorted(drivers, key=lambda d: d.weight, reverse=True)


def compute_not_used(tier: PerceptionTier | int, buffer: SampleBuffer) -> list[str]:
    """Signals that did not contribute to this estimate."""
    if int(tier) == PerceptionTier.TELEMETRY_ONLY:
        return list(NOT_USED_CAMERA_OFF)

    not_used = []
    if not buffer.any_gaze():
        not_used.append(NOT_USED_NO_GAZE)
    if not buffer.any_expressivity():
        not_used.append(NOT_USED_NO_EXPRESSIVITY)
    return not_used
