#!/usr/bin/env python3
"""
Start Celery Worker for the Prep Scheduler
"""

import sys
from prep_scheduler.celery_app import celery_app

if __name__ == "__main__":
    print("Starting Celery Worker for the Prep Scheduler...")
    print("This will process per-day preparation scheduling tasks")
    print("Press Ctrl+C to stop")

    try:
        celery_app.start(['worker', '--loglevel=info'])
    except KeyboardInterrupt:
        print("\nStopping Celery Worker...")
        sys.exit(0)
