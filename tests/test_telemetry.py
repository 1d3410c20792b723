"""Tests for interaction telemetry aggregation."""

import pytest

from aegis.telemetry import InteractionTracker


class TestInteractionTracker:
    def test_initial_snapshot(self):
        tracker = InteractionTracker(now=0.0)
        telemetry = tracker.snapshot(3.0)

        assert telemetry.tap_rate_10s == 0.0
        assert telemetry.retry_count_60s == 0
        assert telemetry.scroll_speed == 0.0
        assert telemetry.idle_seconds == 3.0
        assert telemetry.content_element_id is None

    def test_tap_rate_over_ten_seconds(self):
        tracker = InteractionTracker()
        for t in (1.0, 2.0, 3.0):
            tracker.record_tap(t)

        assert tracker.snapshot(5.0).tap_rate_10s == pytest.approx(0.3)
        assert tracker.snapshot(12.0).tap_rate_10s == pytest.approx(0.1)

    def test_retries_expire_after_a_minute(self):
        tracker = InteractionTracker()
        tracker.record_retry(0.0)
        tracker.record_retry(30.0)

        assert tracker.snapshot(59.0).retry_count_60s == 2
        assert tracker.snapshot(61.0).retry_count_60s == 1

    def test_idle_measured_from_last_interaction(self):
        tracker = InteractionTracker()
        tracker.record_tap(2.0)
        tracker.record_key(4.0)

        assert tracker.snapshot(10.0).idle_seconds == 6.0

    def test_scroll_speed_and_decay(self):
        tracker = InteractionTracker()
        tracker.record_scroll(1.0, 0.0)
        tracker.record_scroll(1.5, 100.0)

        assert tracker.snapshot(1.6).scroll_speed == pytest.approx(200.0)
        assert tracker.snapshot(2.1).scroll_speed == 0.0

    def test_scroll_ignores_tiny_intervals(self):
        tracker = InteractionTracker()
        tracker.record_scroll(1.0, 0.0)
        tracker.record_scroll(1.005, 500.0)

        assert tracker.snapshot(1.01).scroll_speed == 0.0

    def test_content_element(self):
        tracker = InteractionTracker()
        tracker.set_content_element("lesson-2/figure-1")
        assert tracker.snapshot(0.0).content_element_id == "lesson-2/figure-1"

    def test_reset(self):
        tracker = InteractionTracker()
        tracker.record_tap(1.0)
        tracker.record_retry(1.0)

        tracker.reset(now=5.0)
        telemetry = tracker.snapshot(6.0)

        assert telemetry.tap_rate_10s == 0.0
        assert telemetry.retry_count_60s == 0
        assert telemetry.idle_seconds == 1.0
