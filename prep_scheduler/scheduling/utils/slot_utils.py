"""
Slot search over a day's busy intervals.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional
from ..core.time_slot import Interval


def day_start_of(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def intervals_overlapping(busy: Iterable[Interval], range_start: datetime, range_end: datetime) -> List[Interval]:
    """Intervals that intersect [range_start, range_end], latest start first."""
    relevant = [interval for interval in busy if interval.start < range_end and interval.end > range_start]
    relevant.sort(key=lambda interval: interval.start, reverse=True)
    return relevant


def find_open_slot(busy: Iterable[Interval], deadline: Optional[datetime], duration_minutes: int) -> Optional[datetime]:
    """
    Find the latest start time for a `duration_minutes` long slot that ends on
    or before `deadline`, starts on the deadline's day and overlaps nothing in
    `busy`. Returns None when no such slot exists.

    Works backwards from the deadline: the cursor sits on the earliest start
    seen so far and the free gap right below it is bounded by the latest end
    among the intervals not yet passed.
    """
    if deadline is None or duration_minutes <= 0:
        return None

    range_start = day_start_of(deadline)
    range_end = deadline
    if range_end <= range_start:
        return None

    relevant = intervals_overlapping(busy, range_start, range_end)
    duration = timedelta(minutes=duration_minutes)

    # latest_end[i] is the latest end among relevant[i:]
    latest_end = [None] * len(relevant)
    running = None
    for index in range(len(relevant) - 1, -1, -1):
        end = relevant[index].end
        running = end if running is None or end > running else running
        latest_end[index] = running

    cursor = range_end
    for index, interval in enumerate(relevant):
        effective_end = min(latest_end[index], cursor)

        if effective_end < cursor and minutes_between(effective_end, cursor) >= duration_minutes:
            # Latest placement in this gap ends right at the cursor
            return cursor - duration

        if interval.start < cursor:
            cursor = interval.start

    if cursor > range_start and minutes_between(range_start, cursor) >= duration_minutes:
        return cursor - duration

    return None


def is_slot_free(busy: Iterable[Interval], start: datetime, end: datetime) -> bool:
    """True when [start, end) overlaps none of `busy`."""
    return all(not (interval.start < end and start < interval.end) for interval in busy)
