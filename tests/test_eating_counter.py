"""Tests for the sliding-window eating confirmation."""

import pytest

from eating_counter import EatingCounter


class TestEatingCounter:
    def test_single_chew_latches_with_default_target(self):
        counter = EatingCounter(window_ms=8000, chew_target=1)
        counter.record(0)
        assert counter.evaluate(0) is True

    def test_no_events_no_latch(self):
        counter = EatingCounter()
        assert counter.evaluate(5000) is False

    def test_window_requires_events_together(self):
        counter = EatingCounter(window_ms=8000, chew_target=3)
        for ts in (0, 5000):
            counter.record(ts)
            assert counter.evaluate(ts) is False

        counter.record(9000)
        assert counter.evaluate(9000) is False
        assert list(counter.chew_events) == [5000, 9000]

        counter.record(10000)
        assert counter.evaluate(10000) is True

    def test_window_boundary_is_inclusive(self):
        counter = EatingCounter(window_ms=8000, chew_target=2)
        counter.record(0)
        counter.record(8000)
        assert counter.evaluate(8000) is True

    def test_event_just_outside_window_is_pruned(self):
        counter = EatingCounter(window_ms=8000, chew_target=2)
        counter.record(0)
        counter.record(8001)
        assert counter.evaluate(8001) is False
        assert list(counter.chew_events) == [8001]

    def test_latch_is_sticky_when_window_empties(self):
        counter = EatingCounter(window_ms=8000, chew_target=1)
        counter.record(0)
        counter.evaluate(0)

        assert counter.evaluate(100000) is True
        assert len(counter.chew_events) == 0
        assert counter.latched is True

    def test_evaluate_is_idempotent(self):
        counter = EatingCounter(window_ms=8000, chew_target=3)
        for ts in (0, 1000, 9500):
            counter.record(ts)

        first = counter.evaluate(9500)
        log = list(counter.chew_events)
        second = counter.evaluate(9500)

        assert first is second is False
        assert list(counter.chew_events) == log

    def test_log_still_maintained_after_latch(self):
        counter = EatingCounter(window_ms=1000, chew_target=1)
        counter.record(0)
        counter.evaluate(0)
        counter.record(5000)
        counter.evaluate(5000)
        assert list(counter.chew_events) == [5000]

    def test_window_count_does_not_mutate(self):
        counter = EatingCounter(window_ms=8000, chew_target=5)
        for ts in (0, 4000, 9000):
            counter.record(ts)

        assert counter.window_count(9000) == 2
        assert len(counter.chew_events) == 3

    def test_target_must_be_positive(self):
        with pytest.raises(ValueError):
            EatingCounter(chew_target=0)
