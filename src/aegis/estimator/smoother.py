"""Signal smoothing - EWMA over six derived channels."""

import math
from dataclasses import asdict, dataclass

from aegis.contracts.features import FeatureSample, GazeEstimate, HeadPose

# Standard EWMA smoothing factor
ALPHA = 0.15

# Blink rate moves slower than the other channels
BLINK_ALPHA_FACTOR = 0.5


def ewma(prev: float, value: float, alpha: float) -> float:
    """Exponentially-weighted moving average step."""
    return alpha * value + (1 - alpha) * prev


def gaze_stability(gaze: GazeEstimate) -> float:
    """Instantaneous gaze stability. Lower offset = more stable."""
    offset = math.sqrt(gaze.x ** 2 + gaze.y ** 2)
    return max(0.0, 1 - offset * 2)


def pose_stability(pose: HeadPose) -> float:
    """Instantaneous head stillness."""
    movement = abs(pose.yaw) + abs(pose.pitch) + abs(pose.roll)
    return max(0.0, 1 - movement * 2)


@dataclass
class SmoothedSignals:
    """Session-long decaying aggregates.

    Defaults are the neutral starting point used after every reset.
    """

    gaze_stability: float = 0.5
    pose_stability: float = 0.5
    blink_rate: float = 0.2
    interaction_pace: float = 0.5
    retry_rate: float = 0.0
    idle_time: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


class SignalSmoother:
    """Updates smoothed channels from each ingested sample.

    A channel whose source field is missing keeps its previous value
    instead of decaying, so a transient tracking loss never reads as
    perfect stability.
    """

    def __init__(self, alpha: float = ALPHA):
        self.alpha = alpha
        self.signals = SmoothedSignals()

    def update(self, sample: FeatureSample) -> SmoothedSignals:
        s = self.signals

        if sample.gaze is not None:
            s.gaze_stability = ewma(s.gaze_stability, gaze_stability(sample.gaze), self.alpha)

        if sample.pose is not None:
            s.pose_stability = ewma(s.pose_stability, pose_stability(sample.pose), self.alpha)

        if sample.eyes is not None:
            s.blink_rate = ewma(
                s.blink_rate,
                sample.eyes.blink_rate_30s,
                self.alpha * BLINK_ALPHA_FACTOR,
            )

        interaction = sample.interaction
        s.interaction_pace = ewma(s.interaction_pace, interaction.tap_rate_10s, self.alpha)
        s.retry_rate = ewma(s.retry_rate, interaction.retry_count_60s, self.alpha)

        if interaction.idle_seconds is not None:
            s.idle_time = ewma(s.idle_time, interaction.idle_seconds, self.alpha)

        return s

    def reset(self) -> None:
        self.signals = SmoothedSignals()
