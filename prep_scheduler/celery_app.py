"""
Celery Configuration for the Prep Scheduler
"""

from celery import Celery

from . import config

# Create Celery app
celery_app = Celery(
    "prep_scheduler",
    broker=config.CELERY_BROKER_URL,
    backend=config.CELERY_RESULT_BACKEND,
    include=["prep_scheduler.celery_tasks.schedule"]
)

# Basic configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
)

if __name__ == "__main__":
    celery_app.start()
