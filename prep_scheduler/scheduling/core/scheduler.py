"""
Preparation task scheduler that places a prep slot before each meeting.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Iterator, List, Sequence, Tuple
from .constants import (
    LAST_RESORT_MINUTES, LENIENT_BUSY, REDUCED_DURATIONS, STRICT_BUSY, SchedulingStrategy
)
from .time_slot import Interval, PreparationCandidate, ScheduledSlot
from ..constraints.buffer import apply_buffer
from ..exceptions import SchedulingInputError
from ..utils.slot_utils import find_open_slot, is_slot_free

logger = logging.getLogger(__name__)

# ================================
# STRATEGY CHAIN
# ================================

def duration_ladder(desired_minutes: int) -> List[int]:
    """Durations to try, longest first: the desired one, then the shorter fallbacks."""
    ladder = [desired_minutes]
    for minutes in REDUCED_DURATIONS:
        if minutes < desired_minutes and minutes not in ladder:
            ladder.append(minutes)
    return ladder


def strategy_chain(desired_minutes: int) -> List[Tuple[str, int, SchedulingStrategy]]:
    """
    Ordered (busy variant, duration, strategy) attempts for one candidate.
    Every duration is tried against the strict busy list before the lenient one.
    """
    chain = []
    for minutes in duration_ladder(desired_minutes):
        reduced = minutes < desired_minutes
        chain.append((STRICT_BUSY, minutes, SchedulingStrategy.REDUCED if reduced else SchedulingStrategy.STRICT))
        chain.append((LENIENT_BUSY, minutes, SchedulingStrategy.REDUCED if reduced else SchedulingStrategy.LENIENT))
    return chain


def _require_sequence(value, name: str):
    if not isinstance(value, (list, tuple)):
        raise SchedulingInputError(f"{name} must be a list, got {type(value).__name__}")


def _whole_minutes(value) -> int:
    """Desired duration as whole minutes; fractional estimates are rounded up."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Desired duration must be a number of minutes, got {value!r}")
    return math.ceil(value)


# ================================
# CORE SCHEDULING LOGIC
# ================================

class TaskScheduler:
    """
    Allocates preparation slots for a day's meetings, earliest meeting first.

    Slots handed out earlier in a run are treated as busy for every later
    candidate, so computed slots of one run never overlap. The scheduler keeps no
    state between runs.
    """

    def __init__(self, buffer_minutes: int = 0):
        if buffer_minutes < 0:
            raise SchedulingInputError(f"Buffer must not be negative, got {buffer_minutes}")
        self.buffer_minutes = buffer_minutes

    def iter_schedule(self,
                      candidates: Sequence[PreparationCandidate],
                      all_busy_events: Sequence[Interval],
                      filtered_busy_events: Sequence[Interval],
                      blocked_periods: Sequence[Interval]) -> Iterator[ScheduledSlot]:
        """
        Lazily yield one ScheduledSlot per candidate. The caller may pause
        between slots; nothing already yielded ever changes.
        """
        _require_sequence(candidates, "candidates")
        _require_sequence(all_busy_events, "all_busy_events")
        _require_sequence(filtered_busy_events, "filtered_busy_events")
        _require_sequence(blocked_periods, "blocked_periods")

        return self._run(list(candidates), list(all_busy_events), list(filtered_busy_events), list(blocked_periods))

    def schedule(self, candidates, all_busy_events, filtered_busy_events, blocked_periods) -> List[ScheduledSlot]:
        return list(self.iter_schedule(candidates, all_busy_events, filtered_busy_events, blocked_periods))

    def _run(self, candidates, all_busy_events, filtered_busy_events, blocked_periods) -> Iterator[ScheduledSlot]:
        logger.info(f"Identified {len(candidates)} tasks to schedule. Starting planning phase.")
        newly_scheduled: List[Interval] = []

        for candidate in self._ordered(candidates):
            try:
                slot = self._schedule_candidate(candidate, all_busy_events, filtered_busy_events,
                                                blocked_periods, newly_scheduled)
            except Exception as e:
                logger.error(f"Error during scheduling preparation for {getattr(candidate, 'title', candidate)}: {e}")
                continue

            newly_scheduled.append(slot.as_interval())
            yield slot

    def _ordered(self, candidates: List[PreparationCandidate]) -> List[PreparationCandidate]:
        """
        Sort by deadline. Candidates without a datetime deadline are dropped, as
        are those whose deadline is naive when the first one is offset-aware (or
        the other way round), since the two cannot be compared.
        """
        sortable = []
        aware = None
        for candidate in candidates:
            title = getattr(candidate, "title", candidate)
            deadline = getattr(candidate, "deadline", None)
            if not isinstance(deadline, datetime):
                logger.error(f"Skipping candidate {title} with invalid deadline")
                continue

            is_aware = deadline.utcoffset() is not None
            if aware is None:
                aware = is_aware
            elif is_aware != aware:
                logger.error(f"Skipping candidate {title}: deadline {deadline.isoformat()} is "
                             f"{'offset-aware' if is_aware else 'naive'}, unlike the earlier deadlines")
                continue
            sortable.append(candidate)

        return sorted(sortable, key=lambda candidate: candidate.deadline)

    def _busy_lists(self, all_busy_events, filtered_busy_events, blocked_periods,
                    newly_scheduled) -> dict:
        strict = apply_buffer(all_busy_events + newly_scheduled, self.buffer_minutes) + blocked_periods
        lenient = apply_buffer(filtered_busy_events + newly_scheduled, self.buffer_minutes) + blocked_periods
        return {STRICT_BUSY: strict, LENIENT_BUSY: lenient}

    def _schedule_candidate(self, candidate: PreparationCandidate, all_busy_events, filtered_busy_events,
                            blocked_periods, newly_scheduled) -> ScheduledSlot:
        logger.info(f"Scheduling preparation for: {candidate.title}")
        desired = _whole_minutes(candidate.desired_duration_minutes)
        if desired <= 0:
            raise ValueError(f"Desired duration must be positive, got {desired}")

        busy = self._busy_lists(all_busy_events, filtered_busy_events, blocked_periods, newly_scheduled)

        for variant, minutes, strategy in strategy_chain(desired):
            start = find_open_slot(busy[variant], candidate.deadline, minutes)
            if start is not None:
                slot = ScheduledSlot(start, minutes, strategy, candidate, busy_variant=variant)
                logger.info(f"Scheduled ({strategy.value}, {variant} busy list) preparation for {candidate.title} "
                            f"at {slot.start.isoformat()} - {slot.end.isoformat()} ({minutes} mins)")
                return slot
            logger.debug(f"No {variant} slot of {minutes} mins for {candidate.title}")

        return self._last_resort(candidate, busy[STRICT_BUSY])

    def _last_resort(self, candidate: PreparationCandidate, strict_busy: List[Interval]) -> ScheduledSlot:
        start = candidate.deadline - timedelta(minutes=LAST_RESORT_MINUTES)
        slot = ScheduledSlot(start, LAST_RESORT_MINUTES, SchedulingStrategy.LAST_RESORT, candidate)
        logger.info(f"No open slot found (Strict or Lenient). Scheduled preparation for {candidate.title} "
                    f"at fallback time: {slot.start.isoformat()}")
        if not is_slot_free(strict_busy, slot.start, slot.end):
            logger.warning(f"Fallback preparation slot for {candidate.title} overlaps busy time")
        return slot


def schedule_preparation(candidates, all_busy_events, filtered_busy_events, blocked_periods,
                         buffer_minutes: int = 0) -> Iterator[ScheduledSlot]:
    """Convenience wrapper returning the lazy slot sequence of one run."""
    return TaskScheduler(buffer_minutes).iter_schedule(candidates, all_busy_events, filtered_busy_events,
                                                        blocked_periods)
