"""Feature stream contracts - one normalized observation per sample.

Features only: no identity, no raw imagery. Every perceptual field is
optional and tier-dependent; interaction telemetry is always present.
"""

from enum import Enum, IntEnum

from pydantic import BaseModel, Field


class PerceptionTier(IntEnum):
    """Perception capability level."""

    TELEMETRY_ONLY = 0  # Camera off
    RGB = 1  # Face presence, approximate pose, blink/gaze proxy
    DEPTH = 2  # Stable gaze vector, blendshapes, low-light robust


class PerceptionSource(str, Enum):
    """Which perception backend produced a sample."""

    IOS_ARKIT = "ios_arkit"
    IOS_VISION = "ios_vision"
    ANDROID_MEDIAPIPE = "android_mediapipe"
    WEB_MEDIAPIPE = "web_mediapipe"
    TELEMETRY_ONLY = "telemetry_only"


class QualityFlags(BaseModel):
    """Quality assessment of the current frame."""

    face_present: bool = Field(default=False, description="At least one face detected")
    multiple_faces: bool = Field(default=False, description="More than one face detected")
    occluded: bool = Field(default=False, description="Primary face partially occluded")
    low_light: bool = Field(default=False, description="Scene is low-light")
    confidence: float = Field(
        default=0.0,
        ge=0.0, le=1.0,
        description="[0, 1] overall quality confidence"
    )

    model_config = {"frozen": True, "allow_inf_nan": False}


class HeadPose(BaseModel):
    """Head pose in radians."""

    yaw: float = Field(default=0.0, description="Left/right turn")
    pitch: float = Field(default=0.0, description="Up/down tilt")
    roll: float = Field(default=0.0, description="Head tilt")

    model_config = {"frozen": True, "allow_inf_nan": False}


class GazeEstimate(BaseModel):
    """Gaze offset from screen center."""

    x: float = Field(ge=-1.0, le=1.0, description="[-1, 1] horizontal offset")
    y: float = Field(ge=-1.0, le=1.0, description="[-1, 1] vertical offset")
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)

    model_config = {"frozen": True, "allow_inf_nan": False}


class EyeMetrics(BaseModel):
    """Eye metrics derived from landmarks."""

    blink_rate_30s: float = Field(ge=0.0, description="Blinks per second over the last 30s")
    openness_l: float = Field(default=1.0, ge=0.0, le=1.0)
    openness_r: float = Field(default=1.0, ge=0.0, le=1.0)

    model_config = {"frozen": True, "allow_inf_nan": False}


class DistanceEstimate(BaseModel):
    """Relative face scale, a proxy for face-to-screen distance."""

    face_scale: float = Field(ge=0.0, le=1.0, description="Larger = closer to camera")

    model_config = {"frozen": True, "allow_inf_nan": False}


class Expressivity(BaseModel):
    """Weak evidence only. Never treated as emotion."""

    smile: float | None = Field(default=None, ge=0.0, le=1.0)
    brow_furrow: float | None = Field(default=None, ge=0.0, le=1.0)
    jaw_open: float | None = Field(default=None, ge=0.0, le=1.0)
    squint: float | None = Field(default=None, ge=0.0, le=1.0)

    model_config = {"frozen": True, "allow_inf_nan": False}


class InteractionTelemetry(BaseModel):
    """Pre-aggregated interaction telemetry, available at every tier."""

    scroll_speed: float = Field(default=0.0, ge=0.0, description="Pixels/second, 0 = idle")
    tap_rate_10s: float = Field(default=0.0, ge=0.0, description="Taps per second over the last 10s")
    retry_count_60s: float = Field(default=0.0, ge=0.0, description="Retries in the last 60s")
    idle_seconds: float | None = Field(
        default=None,
        ge=0.0,
        description="Seconds since last interaction"
    )
    content_element_id: str | None = Field(default=None, description="Content being viewed")

    model_config = {"frozen": True, "allow_inf_nan": False}


class FeatureSample(BaseModel):
    """One normalized, timestamped observation.

    Produced by a perception or telemetry collaborator, consumed once on
    ingest and then retained in the estimator buffer until it ages out.
    """

    timestamp: float = Field(description="Seconds, caller clock")
    tier: PerceptionTier = Field(default=PerceptionTier.TELEMETRY_ONLY)
    source: PerceptionSource = Field(default=PerceptionSource.TELEMETRY_ONLY)
    quality: QualityFlags = Field(default_factory=QualityFlags)

    pose: HeadPose | None = None
    gaze: GazeEstimate | None = None
    eyes: EyeMetrics | None = None
    distance: DistanceEstimate | None = None
    expressivity: Expressivity | None = None

    interaction: InteractionTelemetry

    model_config = {"frozen": True, "allow_inf_nan": False}

    @classmethod
    def telemetry_only(
        cls, timestamp: float, interaction: InteractionTelemetry
    ) -> "FeatureSample":
        """Build a tier-0 sample carrying nothing but telemetry."""
        return cls(
            timestamp=timestamp,
            tier=PerceptionTier.TELEMETRY_ONLY,
            source=PerceptionSource.TELEMETRY_ONLY,
            interaction=interaction,
        )
