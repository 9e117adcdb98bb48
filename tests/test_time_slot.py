from datetime import timedelta

import pytest

from prep_scheduler.scheduling import (
    BLOCKED, Interval, PreparationCandidate, ScheduledSlot, SchedulingStrategy
)
from tests.helpers import at, busy


class TestInterval:
    def test_start_must_be_before_end(self):
        with pytest.raises(ValueError):
            Interval(at(10), at(10))
        with pytest.raises(ValueError):
            Interval(at(11), at(10))

    def test_is_immutable(self):
        interval = busy((9, 0), (10, 0))
        with pytest.raises(AttributeError):
            interval.start = at(8)
        with pytest.raises(AttributeError):
            interval.label = "Other"

    def test_touching_intervals_do_not_overlap(self):
        first = busy((9, 0), (10, 0))
        second = busy((10, 0), (11, 0))
        assert not first.overlaps(second)
        assert not second.overlaps(first)

    def test_overlap_is_symmetric(self):
        first = busy((9, 0), (10, 0))
        second = busy((9, 30), (10, 30))
        assert first.overlaps(second)
        assert second.overlaps(first)

    def test_contained_interval_overlaps(self):
        assert busy((9, 0), (12, 0)).overlaps(busy((10, 0), (10, 30)))

    def test_duration_in_minutes(self):
        interval = Interval(at(9), at(10, 15) + timedelta(seconds=30))
        assert interval.duration_minutes() == 75.5

    def test_contains_is_half_open(self):
        interval = busy((9, 0), (10, 0))
        assert interval.contains(at(9))
        assert interval.contains(at(9, 59))
        assert not interval.contains(at(10))

    def test_equality_and_sorting(self):
        early = busy((8, 0), (9, 0))
        late = busy((9, 0), (10, 0))
        assert busy((8, 0), (9, 0)) == early
        assert sorted([late, early]) == [early, late]

    def test_repr_names_blocked_periods(self):
        assert repr(Interval(at(0), at(9), BLOCKED)).startswith("BlockedInterval(")


class TestScheduledSlot:
    def test_end_follows_duration(self):
        candidate = PreparationCandidate("Board review", at(11), 45)
        slot = ScheduledSlot(at(10, 15), 45, SchedulingStrategy.STRICT, candidate, busy_variant="strict")
        assert slot.end == at(11)

    def test_as_interval_reserves_the_slot(self):
        candidate = PreparationCandidate("Board review", at(11), 45)
        slot = ScheduledSlot(at(10, 15), 45, SchedulingStrategy.STRICT, candidate)
        reserved = slot.as_interval()
        assert (reserved.start, reserved.end) == (at(10, 15), at(11))
        assert reserved.label == "Reserved: Prep for Board review"
