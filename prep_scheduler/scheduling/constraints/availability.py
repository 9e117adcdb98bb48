"""
Work block constraints: turns the configured "available to work" windows of a
day into the blocked periods the slot finder has to avoid.
"""

import logging
import re
from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple
from ..core.constants import BLOCKED, DAY_END_OFFSET
from ..core.time_slot import Interval

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_string(value: Any) -> Optional[Tuple[int, int]]:
    """Parse "H:MM" or "HH:MM" into (hour, minute), or None if invalid."""
    if not value or not isinstance(value, str):
        return None

    match = TIME_PATTERN.match(value)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2))
    if hour > 23 or minute > 59:
        return None

    return hour, minute


def _block_bounds(block: Any) -> Tuple[Any, Any]:
    if isinstance(block, dict):
        return block.get("start"), block.get("end")
    return getattr(block, "start", None), getattr(block, "end", None)


def parse_work_blocks(work_blocks: Iterable[Any]) -> List[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """
    Parse work blocks into ((start_h, start_m), (end_h, end_m)) pairs sorted by start.
    Malformed blocks are dropped with a warning.
    """
    parsed = []
    for block in work_blocks:
        raw_start, raw_end = _block_bounds(block)
        start = parse_time_string(raw_start)
        end = parse_time_string(raw_end)

        if start is None or end is None:
            logger.warning(f"Ignoring work block with invalid time format: {raw_start!r} - {raw_end!r}")
            continue
        if end <= start:
            # Midnight-spanning blocks are not supported
            logger.warning(f"Ignoring work block that does not end after it starts: {raw_start} - {raw_end}")
            continue

        parsed.append((start, end))

    parsed.sort()
    return parsed


def blocked_periods_for_day(work_blocks: Iterable[Any], day: datetime) -> List[Interval]:
    """
    Build the blocked periods of `day`: everything between 00:00 and 23:59:59.999
    that is not covered by a work block. Gaps between blocks become breaks.

    With no valid work blocks the day is left unconstrained and an empty list
    is returned.
    """
    blocks = parse_work_blocks(work_blocks)
    if not blocks:
        logger.info("No valid work blocks configured, day is unconstrained")
        return []

    day_start = day.replace(hour=0, minute=0, second=0, microsecond=0)
    day_end = day_start + DAY_END_OFFSET

    def at(hour_minute: Tuple[int, int]) -> datetime:
        return day_start.replace(hour=hour_minute[0], minute=hour_minute[1])

    blocked = []
    cursor = day_start
    for start, end in blocks:
        block_start = at(start)
        if cursor < block_start:
            blocked.append(Interval(cursor, block_start, BLOCKED))
        cursor = max(cursor, at(end))

    if cursor < day_end:
        blocked.append(Interval(cursor, day_end, BLOCKED))

    logger.debug(f"Blocked periods for {day_start.date()}: {blocked}")
    return blocked
