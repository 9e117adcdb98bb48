"""
Meeting Preparation Scheduling Engine

Places a preparation slot before each meeting of a day, avoiding calendar
events, time outside the configured work blocks and slots already handed out.
Works on plain data and keeps no state between runs.
"""

from .core.scheduler import TaskScheduler, schedule_preparation, duration_ladder
from .core.time_slot import Interval, PreparationCandidate, ScheduledSlot
from .core.constants import SchedulingStrategy, BLOCKED, RESERVED_PREFIX
from .constraints.availability import blocked_periods_for_day, parse_time_string
from .constraints.buffer import apply_buffer
from .utils.slot_utils import find_open_slot
from .exceptions import SchedulingError, SchedulingInputError

# Version for future API compatibility
__version__ = "1.0.0"
