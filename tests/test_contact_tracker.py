"""Tests for wafer-to-mouth hold tracking."""

import pytest

from contact_tracker import ContactTracker

MOUTH = (100.0, 100.0)
IN_BAND = ((100.0, 130.0), (100.0, 70.0))  # both tips 30 px from the mouth
OUT_OF_BAND = ((100.0, 300.0), (100.0, 70.0))


def hold(tracker, now, tips=IN_BAND):
    return tracker.observe(MOUTH, tips[0], tips[1], now)


class TestBand:
    def test_band_is_inclusive(self):
        tracker = ContactTracker()
        assert tracker.in_band(1)
        assert tracker.in_band(60)
        assert not tracker.in_band(0.5)
        assert not tracker.in_band(60.01)

    def test_tip_on_the_mouth_centre_is_not_holding(self):
        tracker = ContactTracker()
        tracker.observe(MOUTH, MOUTH, IN_BAND[1], 0)
        assert tracker.holding is False

    def test_both_tips_required(self):
        tracker = ContactTracker()
        hold(tracker, 0, OUT_OF_BAND)
        hold(tracker, 500, OUT_OF_BAND)
        assert tracker.latched is False
        assert tracker.contact_start is None


class TestHold:
    def test_contiguous_hold_latches(self):
        tracker = ContactTracker()
        assert hold(tracker, 0) == 0
        assert hold(tracker, 50) == 50
        assert tracker.latched is False
        assert hold(tracker, 110) == 110
        assert tracker.latched is True

    def test_exact_required_time_latches(self):
        tracker = ContactTracker()
        hold(tracker, 1000)
        hold(tracker, 1100)
        assert tracker.latched is True

    def test_gap_resets_progress(self):
        tracker = ContactTracker()
        hold(tracker, 0)
        assert hold(tracker, 60) == 60

        assert hold(tracker, 70, OUT_OF_BAND) == 0
        assert tracker.contact_start is None

        assert hold(tracker, 80) == 0
        assert hold(tracker, 140) == 60
        assert tracker.latched is False

        assert hold(tracker, 180) == 100
        assert tracker.latched is True

    def test_missing_face_or_hand_resets_like_out_of_band(self):
        tracker = ContactTracker()
        hold(tracker, 0)
        hold(tracker, 90)
        tracker.observe(None, None, None, 95)
        assert tracker.hold_ms == 0
        assert tracker.contact_start is None

        hold(tracker, 100)
        assert tracker.latched is False

    def test_distances_recorded_for_display(self):
        tracker = ContactTracker()
        hold(tracker, 0)
        assert tracker.index_distance == pytest.approx(30.0)
        assert tracker.thumb_distance == pytest.approx(30.0)

        tracker.observe(None, None, None, 10)
        assert tracker.index_distance is None


class TestLatch:
    def _latched(self):
        tracker = ContactTracker()
        hold(tracker, 0)
        hold(tracker, 100)
        assert tracker.latched is True
        return tracker

    def test_latch_survives_out_of_band(self):
        tracker = self._latched()
        hold(tracker, 200, OUT_OF_BAND)
        tracker.observe(None, None, None, 300)
        assert tracker.latched is True

    def test_reset_contact_does_not_clear_latch(self):
        tracker = self._latched()
        tracker.reset_contact()
        assert tracker.latched is True
        assert tracker.hold_ms == 100

    def test_custom_parameters(self):
        tracker = ContactTracker(min_px=10, max_px=40, required_ms=500)
        hold(tracker, 0)
        hold(tracker, 400)
        assert tracker.latched is False
        hold(tracker, 500)
        assert tracker.latched is True

    def test_distances_refresh_after_latch(self):
        tracker = self._latched()
        hold(tracker, 200, OUT_OF_BAND)
        assert tracker.index_distance == pytest.approx(200.0)
        assert tracker.holding is False
        assert tracker.hold_ms == 100

        tracker.observe(None, None, None, 300)
        assert tracker.index_distance is None
        assert tracker.thumb_distance is None
        assert tracker.latched is True


class TestMessages:
    def test_lost_input_reset_message(self, capsys):
        tracker = ContactTracker()
        hold(tracker, 0)
        tracker.observe(None, None, None, 10)
        assert "Hold reset (lost hand/face)" in capsys.readouterr().out

    def test_out_of_band_reset_message(self, capsys):
        tracker = ContactTracker()
        hold(tracker, 0)
        hold(tracker, 10, OUT_OF_BAND)
        out = capsys.readouterr().out
        assert "Hold reset" in out
        assert "lost hand/face" not in out

    def test_no_reset_message_without_a_run(self, capsys):
        tracker = ContactTracker()
        tracker.observe(None, None, None, 0)
        assert "Hold reset" not in capsys.readouterr().out
