"""
Scheduling service: runs one day's preparation scheduling from request data.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .. import config
from ..schemas import PreparationCandidateIn, ScheduleRequest, ScheduleResponse, ScheduledSlotOut
from ..scheduling.core.scheduler import TaskScheduler
from ..scheduling.core.time_slot import PreparationCandidate, ScheduledSlot
from ..scheduling.constraints.availability import blocked_periods_for_day
from ..scheduling.exceptions import SchedulingInputError
from ..scheduling.utils.event_filters import (
    events_to_busy_intervals, filter_events_for_processing, parse_timestamp
)

logger = logging.getLogger(__name__)


def build_task_payload(slot: ScheduledSlot, project_id: Optional[str] = None,
                       label: Optional[str] = None) -> Dict[str, Any]:
    """Task-store payload for a scheduled preparation slot."""
    return {
        "title": f"Prepare for {slot.candidate.title}",
        "description": slot.candidate.preparation_prompt,
        "labels": [label or config.ENRICH_SCHEDULED_LABEL],
        "due_date": slot.start.isoformat(),
        "project_id": project_id,
        "duration": slot.duration_minutes,
        "duration_unit": "minute",
    }


class SchedulerService:
    """Builds busy lists and candidates from plain request data and runs the scheduler."""

    def __init__(self, work_blocks: Optional[list] = None, buffer_minutes: Optional[int] = None,
                 default_prep_minutes: Optional[int] = None, local_timezone: Optional[str] = None,
                 project_id: Optional[str] = None):
        self.work_blocks = config.WORK_TIME_BLOCKS if work_blocks is None else work_blocks
        self.buffer_minutes = config.BUFFER_MINUTES if buffer_minutes is None else buffer_minutes
        self.default_prep_minutes = default_prep_minutes or config.DEFAULT_PREP_MINUTES
        self.local_timezone = local_timezone or config.LOCAL_TIMEZONE
        self.project_id = project_id or config.TODOIST_PROJECT_ID

    def build_candidates(self, candidate_ins: List[PreparationCandidateIn]) -> Tuple[List[PreparationCandidate], List[str]]:
        """Parse candidate deadlines; candidates that fail are reported back as skipped."""
        candidates, skipped = [], []
        for candidate_in in candidate_ins:
            try:
                deadline = parse_timestamp(candidate_in.startTime, self.local_timezone)
            except (TypeError, ValueError, OverflowError) as e:
                logger.error(f"Skipping {candidate_in.title}: invalid start time {candidate_in.startTime!r} ({e})")
                skipped.append(candidate_in.title)
                continue

            logger.info(f"Estimated duration for {candidate_in.title}: {candidate_in.duration_estimation}")
            candidates.append(PreparationCandidate(
                title=candidate_in.title,
                deadline=deadline,
                desired_duration_minutes=candidate_in.duration_estimation or self.default_prep_minutes,
                preparation_prompt=candidate_in.meeting_preparation_prompt,
            ))
        return candidates, skipped

    def _run_day(self, request: ScheduleRequest, candidates: List[PreparationCandidate]) -> date:
        if request.day:
            return request.day
        if candidates:
            return min(candidate.deadline for candidate in candidates).date()
        return datetime.now().date()

    def iter_slots(self, request: ScheduleRequest) -> Tuple[date, Iterator[ScheduledSlot], List[str]]:
        """
        Prepare one run and return (day, lazy slot iterator, skipped titles).
        Candidates whose meeting is not on the run day are skipped. Candidates
        the scheduler gives up on are added to the skipped titles once the
        iterator is exhausted.
        """
        candidates, skipped = self.build_candidates(request.candidates)
        day = self._run_day(request, candidates)

        on_day = []
        for candidate in candidates:
            if candidate.deadline.date() != day:
                logger.warning(f"Skipping {candidate.title}: meeting is not on {day}")
                skipped.append(candidate.title)
                continue
            on_day.append(candidate)

        events = [event.model_dump() for event in request.events]
        all_busy = events_to_busy_intervals(events, self.local_timezone)
        filtered_busy = events_to_busy_intervals(filter_events_for_processing(events), self.local_timezone)

        work_blocks = self.work_blocks if request.work_blocks is None else request.work_blocks
        blocked = blocked_periods_for_day(work_blocks, datetime.combine(day, datetime.min.time()))

        buffer_minutes = self.buffer_minutes if request.buffer_minutes is None else request.buffer_minutes
        scheduler = TaskScheduler(buffer_minutes)
        planned = scheduler.iter_schedule(on_day, all_busy, filtered_busy, blocked)

        def slots() -> Iterator[ScheduledSlot]:
            # Tracked by identity, titles are not unique
            scheduled = set()
            for slot in planned:
                scheduled.add(id(slot.candidate))
                yield slot
            for candidate in on_day:
                if id(candidate) not in scheduled:
                    skipped.append(candidate.title)

        return day, slots(), skipped

    def run(self, request: ScheduleRequest) -> ScheduleResponse:
        day, slots, skipped = self.iter_slots(request)
        project_id = request.project_id or self.project_id

        scheduled = []
        for slot in slots:
            scheduled.append(ScheduledSlotOut(
                title=slot.candidate.title,
                start=slot.start,
                end=slot.end,
                duration_minutes=slot.duration_minutes,
                strategy=slot.strategy,
                busy_variant=slot.busy_variant,
                task=build_task_payload(slot, project_id),
            ))

        logger.info(f"Scheduled {len(scheduled)} preparation slots for {day}, skipped {len(skipped)}")
        return ScheduleResponse(day=day, slots=scheduled, skipped=skipped)


def run_schedule_request(request: ScheduleRequest) -> ScheduleResponse:
    """Run a request with the configured defaults."""
    if not isinstance(request, ScheduleRequest):
        raise SchedulingInputError(f"Expected a ScheduleRequest, got {type(request).__name__}")
    return SchedulerService().run(request)
