"""
Transition buffer applied after busy intervals.
"""

from datetime import timedelta
from typing import Iterable, List
from ..core.time_slot import Interval


def apply_buffer(intervals: Iterable[Interval], buffer_minutes: int) -> List[Interval]:
    """
    Return copies of `intervals` whose end is pushed back by `buffer_minutes`.

    Only meant for calendar events and reserved preparation slots. Blocked
    periods are structural and never get a buffer.
    """
    if buffer_minutes < 0:
        raise ValueError(f"Buffer must not be negative, got {buffer_minutes}")

    buffer = timedelta(minutes=buffer_minutes)
    return [Interval(interval.start, interval.end + buffer, interval.label) for interval in intervals]
