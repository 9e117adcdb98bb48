"""
Preparation scheduling API endpoints
"""

import logging
from typing import List
from fastapi import APIRouter, HTTPException

from ..celery_tasks.schedule import dispatch_preparation_days
from ..schemas import AnalysisScheduleRequest, ScheduleRequest, ScheduleResponse
from ..scheduling.exceptions import SchedulingInputError
from ..services.candidate_parser import parse_analysis
from ..services.scheduler_service import run_schedule_request

logger = logging.getLogger(__name__)

router = APIRouter()

BATCH_TIMEOUT_SECONDS = 30


@router.post("/preparation", response_model=ScheduleResponse)
def schedule_preparation(request: ScheduleRequest):
    """
    Schedule preparation slots for one day's meetings.
    """
    try:
        return run_schedule_request(request)
    except SchedulingInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/preparation/analysis", response_model=ScheduleResponse)
def schedule_preparation_from_analysis(request: AnalysisScheduleRequest):
    """
    Schedule preparation slots for the meetings a meeting analysis flagged.
    """
    try:
        candidates = parse_analysis(request.analysis)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid analysis: {e}")

    schedule_request = ScheduleRequest(
        day=request.day,
        events=request.events,
        candidates=candidates,
        work_blocks=request.work_blocks,
        buffer_minutes=request.buffer_minutes,
        project_id=request.project_id,
    )
    try:
        return run_schedule_request(schedule_request)
    except SchedulingInputError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/preparation/batch")
def schedule_preparation_batch(requests: List[ScheduleRequest]):
    """
    Schedule several independent days at once, one Celery task per day.
    """
    payloads = [request.model_dump(mode="json") for request in requests]
    result = dispatch_preparation_days(payloads)
    try:
        # One result per day, in request order
        return {"days": [day.get(timeout=BATCH_TIMEOUT_SECONDS) for day in result.results]}
    except Exception as e:
        logger.error(f"Batch scheduling of {len(payloads)} days failed: {e}")
        raise HTTPException(status_code=502, detail="Batch scheduling failed")
