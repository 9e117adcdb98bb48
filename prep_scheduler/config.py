"""
Environment configuration for the preparation scheduler.
Values come from the process environment or a local .env file.
"""

import json
import logging
import os
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_WORK_TIME_BLOCKS = [
    {"start": "09:00", "end": "12:00"},
    {"start": "13:00", "end": "17:00"},
]


def _int_setting(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}, using {default}")
        return default


def _work_blocks_setting(name: str) -> list:
    raw = os.getenv(name)
    if not raw:
        return list(DEFAULT_WORK_TIME_BLOCKS)
    try:
        blocks = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Invalid JSON for {name}, using default work blocks")
        return list(DEFAULT_WORK_TIME_BLOCKS)
    if not isinstance(blocks, list):
        logger.warning(f"{name} must be a JSON list, using default work blocks")
        return list(DEFAULT_WORK_TIME_BLOCKS)
    return blocks


# Scheduling
WORK_TIME_BLOCKS = _work_blocks_setting("WORK_TIME_BLOCKS")
BUFFER_MINUTES = max(_int_setting("BUFFER_MINUTES", 0), 0)
DEFAULT_PREP_MINUTES = _int_setting("DEFAULT_PREP_MINUTES", 45)
LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "UTC")

# Task store
TODOIST_PROJECT_ID = os.getenv("TODOIST_PROJECT_ID")
ENRICH_SCHEDULED_LABEL = os.getenv("ENRICH_SCHEDULED_LABEL", "enrich_scheduled")

# Celery
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", CELERY_BROKER_URL)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")
