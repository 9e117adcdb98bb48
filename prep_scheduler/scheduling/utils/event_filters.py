"""
Conversion of raw calendar events into busy intervals.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional, Union

import pytz
from dateutil.parser import isoparse

from ..core.time_slot import Interval

logger = logging.getLogger(__name__)


def _field(event: Any, name: str, default: Any = None) -> Any:
    if isinstance(event, dict):
        return event.get(name, default)
    return getattr(event, name, default)


def parse_timestamp(value: Union[str, datetime], local_timezone: Optional[str] = None) -> datetime:
    """
    Parse an ISO-8601 timestamp into a naive local wall-clock datetime.

    Offset-aware values are converted to `local_timezone` (UTC when not given)
    before the offset is dropped, so every datetime the engine compares is naive.
    """
    moment = value if isinstance(value, datetime) else isoparse(value)
    if moment.tzinfo is not None:
        tz = pytz.timezone(local_timezone or "UTC")
        moment = moment.astimezone(tz).replace(tzinfo=None)
    return moment


def event_to_interval(event: Any, local_timezone: Optional[str] = None) -> Interval:
    """Build the busy interval of one calendar event (startTime/endTime/title)."""
    start = parse_timestamp(_field(event, "startTime"), local_timezone)
    end = parse_timestamp(_field(event, "endTime"), local_timezone)
    return Interval(start, end, _field(event, "title", "") or "")


def filter_events_for_processing(events: Iterable[Any]) -> List[Any]:
    """
    Keep the events that are worth preparing for: not all-day and with at
    least one attendee. The result doubles as the lenient busy list.
    """
    events = list(events)
    logger.info(f"Filtering {len(events)} events for processing")

    filtered = []
    for event in events:
        title = _field(event, "title", "")
        if _field(event, "isAllDay", False):
            logger.info(f"Skipping all-day event: {title}")
            continue
        if not _field(event, "attendees"):
            logger.info(f"Skipping event with no other attendees: {title}")
            continue
        filtered.append(event)

    logger.info(f"Filtered to {len(filtered)} events for processing")
    return filtered


def all_day_interval(event: Any, local_timezone: Optional[str] = None) -> Interval:
    """
    Busy interval of an all-day event: whole days from midnight of its start
    up to midnight after its end (one day when the end is missing).
    """
    start = parse_timestamp(_field(event, "startTime"), local_timezone)
    day_start = start.replace(hour=0, minute=0, second=0, microsecond=0)

    try:
        end = parse_timestamp(_field(event, "endTime"), local_timezone)
    except (TypeError, ValueError, OverflowError):
        end = None

    if end is None or end <= day_start:
        day_end = day_start + timedelta(days=1)
    else:
        day_end = end.replace(hour=0, minute=0, second=0, microsecond=0)
        if day_end < end or day_end == day_start:
            day_end += timedelta(days=1)
    return Interval(day_start, day_end, _field(event, "title", "") or "")


def events_to_busy_intervals(events: Iterable[Any], local_timezone: Optional[str] = None) -> List[Interval]:
    """
    Convert events into busy intervals. All-day events block their whole days;
    events whose times cannot be parsed are left out.
    """
    intervals = []
    for event in events:
        title = _field(event, "title", "")
        try:
            if _field(event, "isAllDay", False):
                intervals.append(all_day_interval(event, local_timezone))
            else:
                intervals.append(event_to_interval(event, local_timezone))
        except (TypeError, ValueError, OverflowError) as e:
            logger.warning(f"Ignoring calendar event {title!r} with unusable times: {e}")
    return intervals
