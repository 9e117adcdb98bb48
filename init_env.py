#!/usr/bin/env python3
"""
Writes a starter .env for the Prep Scheduler.
"""

import json
import os

DEFAULT_WORK_TIME_BLOCKS = [
    {"start": "09:00", "end": "12:00"},
    {"start": "13:00", "end": "17:00"},
]


def main():
    print("🚀 Setting up Prep Scheduler...\n")

    # Check if .env already exists
    if os.path.exists('.env'):
        print("⚠️  .env file already exists. Do you want to overwrite it? (y/n): ", end="")
        response = input().lower().strip()
        if response != 'y':
            print("❌ Setup cancelled.")
            return

    env_content = f"""# Prep Scheduler Environment Variables
WORK_TIME_BLOCKS={json.dumps(DEFAULT_WORK_TIME_BLOCKS)}
BUFFER_MINUTES=0
DEFAULT_PREP_MINUTES=45
LOCAL_TIMEZONE=UTC
TODOIST_PROJECT_ID=
CELERY_BROKER_URL=redis://localhost:6379/0
LOG_LEVEL=INFO
"""

    with open('.env', 'w') as f:
        f.write(env_content)

    print("✅ Environment setup completed!")

    print("\n📋 Next steps:")
    print("1. Install dependencies: pip install -e .[test]")
    print("2. Run the application: python run.py")
    print("3. Start a worker for batch scheduling: python start_celery_worker.py")
    print("4. Open http://localhost:8000/docs in your browser")

    print("\n🎯 API Endpoints:")
    print("   • Schedule one day: POST /schedule/preparation")
    print("   • Schedule from analysis: POST /schedule/preparation/analysis")
    print("   • Schedule several days: POST /schedule/preparation/batch")
    print("   • Health: GET /health")


if __name__ == "__main__":
    main()
