"""Tests for the open/closed chew hysteresis."""

import pytest

from chew_detector import MOUTH_CLOSED, MOUTH_OPEN, ChewDetector


def feed(detector, ratios, eligible=True, start=0, step=100):
    return [detector.observe(ratio, start + i * step, eligible) for i, ratio in enumerate(ratios)]


class TestHysteresis:
    def test_single_chew_cycle(self):
        detector = ChewDetector()
        assert feed(detector, [0.02, 0.10, 0.02]) == [False, False, True]

    def test_starts_closed(self):
        assert ChewDetector().mouth_state == MOUTH_CLOSED

    def test_dead_band_holds_open_state(self):
        detector = ChewDetector()
        events = feed(detector, [0.10, 0.06, 0.05, 0.04])
        assert events == [False, False, False, False]
        assert detector.mouth_state == MOUTH_OPEN

    def test_dead_band_holds_closed_state(self):
        detector = ChewDetector()
        feed(detector, [0.07, 0.08, 0.05])
        assert detector.mouth_state == MOUTH_CLOSED

    def test_open_threshold_is_strict(self):
        detector = ChewDetector()
        detector.observe(0.08, 0, True)
        assert detector.mouth_state == MOUTH_CLOSED

    def test_one_event_per_cycle(self):
        detector = ChewDetector()
        events = feed(detector, [0.10, 0.12, 0.01, 0.0, 0.01, 0.09, 0.03, 0.02])
        assert sum(events) == 2

    def test_chatter_near_one_threshold_is_ignored(self):
        detector = ChewDetector()
        events = feed(detector, [0.10, 0.079, 0.081, 0.079, 0.081])
        assert sum(events) == 0


class TestEligibility:
    def test_ineligible_close_is_dropped(self):
        detector = ChewDetector()
        assert feed(detector, [0.10, 0.02], eligible=False) == [False, False]
        assert detector.mouth_state == MOUTH_CLOSED
        assert detector.close_count == 1

    def test_dropped_edges_are_not_credited_later(self):
        detector = ChewDetector()
        feed(detector, [0.10, 0.02, 0.10, 0.02], eligible=False)
        assert detector.observe(0.02, 1000, True) is False

    def test_eligibility_at_close_time_counts(self):
        detector = ChewDetector()
        detector.observe(0.10, 0, False)
        assert detector.observe(0.02, 100, True) is True


class TestConfiguration:
    def test_close_threshold_must_be_below_open(self):
        with pytest.raises(ValueError):
            ChewDetector(open_threshold=0.05, close_threshold=0.05)

    def test_openness_recorded(self):
        detector = ChewDetector()
        detector.observe(0.123, 0, False)
        assert detector.openness == 0.123
