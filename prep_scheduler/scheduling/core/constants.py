"""
Shared constants for the preparation scheduling engine.
"""

import enum
from datetime import timedelta

# Labels used on synthetic intervals
BLOCKED = "Blocked"
RESERVED_PREFIX = "Reserved: Prep for "

# Busy list variants
STRICT_BUSY = "strict"
LENIENT_BUSY = "lenient"

# Shorter durations tried when the desired one does not fit
REDUCED_DURATIONS = (30, 15, 10)

LAST_RESORT_MINUTES = 30
DEFAULT_PREP_MINUTES = 45

# Last representable instant of a calendar day (23:59:59.999)
DAY_END_OFFSET = timedelta(hours=23, minutes=59, seconds=59, milliseconds=999)


class SchedulingStrategy(str, enum.Enum):
    STRICT = "strict"
    LENIENT = "lenient"
    REDUCED = "reduced"
    LAST_RESORT = "last_resort"
