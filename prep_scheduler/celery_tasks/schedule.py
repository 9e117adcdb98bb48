from celery import group
from pydantic import ValidationError
import logging

from ..celery_app import celery_app
from ..schemas import ScheduleRequest
from ..scheduling.exceptions import SchedulingInputError
from ..services.scheduler_service import run_schedule_request

logger = logging.getLogger(__name__)


@celery_app.task(name="prep_scheduler.celery_tasks.schedule.schedule_preparation_day")
def schedule_preparation_day(payload: dict):
    """Schedule one day's preparation slots from a ScheduleRequest payload."""
    try:
        request = ScheduleRequest.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Invalid scheduling payload: {e}")
        return {"status": "error", "message": str(e)}

    logger.info(f"🎯 Scheduling preparation for {len(request.candidates)} meetings")
    try:
        response = run_schedule_request(request)
    except SchedulingInputError as e:
        logger.error(f"❌ Scheduling failed: {e}")
        return {"status": "error", "message": str(e)}

    logger.info(f"✅ Scheduled {len(response.slots)} preparation slots for {response.day}")
    return {"status": "success", **response.model_dump(mode="json")}


def dispatch_preparation_days(payloads: list):
    """Fan independent days out as a Celery group; days share no state."""
    return group(schedule_preparation_day.s(payload) for payload in payloads).apply_async()
