"""
Time interval and slot representations for the scheduling engine.
"""

from datetime import datetime, timedelta
from typing import Optional
from .constants import BLOCKED, RESERVED_PREFIX, SchedulingStrategy


class Interval:
    """
    An immutable half-open time range [start, end) with a label.

    The label says what the range is:
    - a calendar event title
    - BLOCKED for time outside the configured work blocks
    - "Reserved: Prep for ..." for a preparation slot allocated in this run
    """
    __slots__ = ("_start", "_end", "_label")

    def __init__(self, start: datetime, end: datetime, label: str = ""):
        if not start < end:
            raise ValueError(f"Interval start {start} must be before end {end}")
        object.__setattr__(self, "_start", start)
        object.__setattr__(self, "_end", end)
        object.__setattr__(self, "_label", label)

    def __setattr__(self, name, value):
        raise AttributeError("Interval is immutable")

    @property
    def start(self) -> datetime:
        return self._start

    @property
    def end(self) -> datetime:
        return self._end

    @property
    def label(self) -> str:
        return self._label

    def duration(self) -> timedelta:
        return self.end - self.start

    def duration_minutes(self) -> float:
        return self.duration().total_seconds() / 60

    def overlaps(self, other: "Interval") -> bool:
        # Touching endpoints do not overlap
        return self.start < other.end and other.start < self.end

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        return (self.start, self.end, self.label) == (other.start, other.end, other.label)

    def __hash__(self):
        return hash((self.start, self.end, self.label))

    def __lt__(self, other):
        return self.start < other.start

    def __repr__(self):
        span = f"{self.start.strftime('%I:%M %p')} - {self.end.strftime('%I:%M %p')}"
        if self.label == BLOCKED:
            return f"BlockedInterval({span})"
        if self.label.startswith(RESERVED_PREFIX):
            return f"ReservedInterval({span}, {self.label[len(RESERVED_PREFIX):]})"
        return f"Interval({span}, {self.label})"


class PreparationCandidate:
    """A meeting that needs a preparation slot before it starts."""

    def __init__(self, title: str, deadline: datetime, desired_duration_minutes: int,
                 preparation_prompt: Optional[str] = None):
        self.title = title
        self.deadline = deadline
        self.desired_duration_minutes = desired_duration_minutes
        self.preparation_prompt = preparation_prompt

    def __repr__(self):
        return f"PreparationCandidate({self.title!r}, deadline={self.deadline}, {self.desired_duration_minutes}min)"


class ScheduledSlot:
    """
    A preparation slot allocated for one candidate during a scheduling run.
    """

    def __init__(self, start: datetime, duration_minutes: int, strategy: SchedulingStrategy,
                 candidate: PreparationCandidate, busy_variant: Optional[str] = None):
        self.start = start
        self.end = start + timedelta(minutes=duration_minutes)
        self.duration_minutes = duration_minutes
        self.strategy = strategy
        self.candidate = candidate
        self.busy_variant = busy_variant

    def as_interval(self) -> Interval:
        """The reserved busy interval later candidates must avoid."""
        return Interval(self.start, self.end, f"{RESERVED_PREFIX}{self.candidate.title}")

    def __repr__(self):
        return (f"ScheduledSlot({self.start.strftime('%I:%M %p')} - {self.end.strftime('%I:%M %p')}, "
                f"{self.candidate.title}, {self.strategy.value})")
