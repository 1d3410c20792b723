"""
Sample Buffer

Holds a bounded, time-ordered history of feature samples.
Samples older than the window are pruned on every append.
"""

import logging
import math
from collections import deque
from collections.abc import Iterator

from aegis.contracts.features import FeatureSample
from aegis.errors import InputError

logger = logging.getLogger(__name__)


class SampleBuffer:
    """Time-ordered sliding window of feature samples.

    Timestamps must be finite and non-decreasing. A sample that breaks
    ordering is rejected before anything is mutated.
    """

    def __init__(self, window_s: float):
        """Initialize sample buffer.

        Args:
            window_s: Samples older than (latest - window_s) are dropped
        """
        self.window_s = window_s
        self._samples: deque[FeatureSample] = deque()
        self._last_timestamp: float | None = None

    def validate(self, sample: FeatureSample) -> None:
        """Check a sample can be appended without breaking ordering.

        Raises:
            InputError: if the timestamp is non-finite or goes backwards
        """
        ts = sample.timestamp
        if not math.isfinite(ts):
            raise InputError(f"Sample timestamp must be finite, got {ts}")
        if self._last_timestamp is not None and ts < self._last_timestamp:
            raise InputError(
                f"Sample timestamp {ts:.3f} precedes last ingested {self._last_timestamp:.3f}"
            )

    def append(self, sample: FeatureSample) -> None:
        """Validate, append and prune.

        Raises:
            InputError: if the sample is out of order
        """
        self.validate(sample)
        self._samples.append(sample)
        self._last_timestamp = sample.timestamp
        self.prune(sample.timestamp)

    def prune(self, now: float) -> int:
        """Drop samples older than the window. Returns how many were dropped."""
        cutoff = now - self.window_s
        dropped = 0
        while self._samples and self._samples[0].timestamp < cutoff:
            self._samples.popleft()
            dropped += 1
        return dropped

    def any_gaze(self) -> bool:
        return any(s.gaze is not None for s in self._samples)

    def any_face(self) -> bool:
        return any(s.quality.face_present for s in self._samples)

    def any_expressivity(self) -> bool:
        return any(s.expressivity is not None for s in self._samples)

    @property
    def last_timestamp(self) -> float | None:
        return self._last_timestamp

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[FeatureSample]:
        return iter(self._samples)

    def clear(self) -> None:
        """Clear all samples and the ordering watermark."""
        self._samples.clear()
        self._last_timestamp = None
