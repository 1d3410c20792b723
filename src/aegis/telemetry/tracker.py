"""
Interaction Telemetry Tracker

Aggregates explicit interaction calls (taps, scrolls, keys, retries)
into the pre-aggregated telemetry carried by every feature sample.
Available at all perception tiers. Time always comes from the caller.
"""

from collections import deque

from aegis.contracts.features import InteractionTelemetry

TAP_WINDOW_S = 10.0
RETRY_WINDOW_S = 60.0
SCROLL_MIN_DT_S = 0.01
SCROLL_DECAY_S = 0.5


class InteractionTracker:
    """Rolling counters over interaction events."""

    def __init__(self, now: float = 0.0):
        self._last_interaction = now
        self._taps: deque[float] = deque()
        self._retries: deque[float] = deque()
        self._scroll_speed = 0.0
        self._last_scroll_y = 0.0
        self._last_scroll_time: float | None = None
        self._content_element_id: str | None = None

    def record_tap(self, now: float) -> None:
        self._taps.append(now)
        self._last_interaction = now

    def record_key(self, now: float) -> None:
        self._last_interaction = now

    def record_retry(self, now: float) -> None:
        """Record a retry (wrong answer, re-attempt)."""
        self._retries.append(now)
        self._last_interaction = now

    def record_scroll(self, now: float, scroll_y: float) -> None:
        if self._last_scroll_time is not None:
            dt = now - self._last_scroll_time
            if dt > SCROLL_MIN_DT_S:
                self._scroll_speed = abs(scroll_y - self._last_scroll_y) / dt
        self._last_scroll_y = scroll_y
        self._last_scroll_time = now
        self._last_interaction = now

    def set_content_element(self, element_id: str | None) -> None:
        self._content_element_id = element_id

    def snapshot(self, now: float) -> InteractionTelemetry:
        """Current telemetry values at `now`."""
        while self._taps and now - self._taps[0] >= TAP_WINDOW_S:
            self._taps.popleft()
        while self._retries and now - self._retries[0] >= RETRY_WINDOW_S:
            self._retries.popleft()

        # Scroll speed decays to zero once scrolling stops
        if self._last_scroll_time is not None and now - self._last_scroll_time > SCROLL_DECAY_S:
            self._scroll_speed = 0.0

        return InteractionTelemetry(
            scroll_speed=self._scroll_speed,
            tap_rate_10s=len(self._taps) / TAP_WINDOW_S,
            retry_count_60s=len(self._retries),
            idle_seconds=max(0.0, now - self._last_interaction),
            content_element_id=self._content_element_id,
        )

    def reset(self, now: float = 0.0) -> None:
        self._last_interaction = now
        self._taps.clear()
        self._retries.clear()
        self._scroll_speed = 0.0
        self._last_scroll_time = None
