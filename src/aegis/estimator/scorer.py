"""
Condition Scorer - rule-based scoring of the five learning conditions.

Pure functions over the smoothed signal set. Each score is an
independently clamped weighted sum; scores overlap on purpose
(confused and overloaded often co-occur) and are never normalized.
"""

from aegis.contracts.condition import ConditionScores
from aegis.estimator.smoother import SmoothedSignals


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(high, max(low, value))


def score_conditions(s: SmoothedSignals) -> ConditionScores:
    """
    Score every condition from the current smoothed signals.

    Args:
        s: Current smoothed signal set

    Returns:
        ConditionScores with each value clamped to [0, 1]

    Rules:
        attentive:  0.4*gaze + 0.3*pose + (0.3 if pace > 0.05 else 0.1)
        wandering:  0.4*(1-gaze) + 0.3*(1-pose) + (0.3 if idle > 10 else 0.03*idle)
        confused:   min(0.3*retry, 0.4) + (0.3 if pace < 0.1 and retry > 0) + 0.15*(1-gaze)
        overloaded: 0.4*2*max(0, blink-0.3) + (0.3 if retry > 1 else 0.3*retry) + (0.2 if pace > 0.5)
        fatigued:   0.3*2*max(0, blink-0.25) + (min(0.03*idle, 0.3) if idle > 5) + (0.3 if pace < 0.05)
    """
    # Stable gaze + stable pose + steady interaction
    attentive = clamp(
        s.gaze_stability * 0.4
        + s.pose_stability * 0.3
        + (0.3 if s.interaction_pace > 0.05 else 0.1)
    )

    # Unstable gaze + pose drift + idling
    wandering = clamp(
        (1 - s.gaze_stability) * 0.4
        + (1 - s.pose_stability) * 0.3
        + (0.3 if s.idle_time > 10 else s.idle_time * 0.03)
    )

    # Retries + hesitation despite engagement
    confused = clamp(
        min(s.retry_rate * 0.3, 0.4)
        + (0.3 if s.interaction_pace < 0.1 and s.retry_rate > 0 else 0.0)
        + (1 - s.gaze_stability) * 0.15
    )

    # Elevated blinking + retries under a fast pace
    overloaded = clamp(
        max(0.0, s.blink_rate - 0.3) * 2 * 0.4
        + (0.3 if s.retry_rate > 1 else s.retry_rate * 0.3)
        + (0.2 if s.interaction_pace > 0.5 else 0.0)
    )

    # Elevated blinking + idling + slowing responses
    fatigued = clamp(
        max(0.0, s.blink_rate - 0.25) * 2 * 0.3
        + (min(s.idle_time * 0.03, 0.3) if s.idle_time > 5 else 0.0)
        + (0.3 if s.interaction_pace < 0.05 else 0.0)
    )

    return ConditionScores(
        attentive=attentive,
        wandering=wandering,
        confused=confused,
        overloaded=overloaded,
        fatigued=fatigued,
    )
