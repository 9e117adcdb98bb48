import pytest
from fastapi.testclient import TestClient

from prep_scheduler.celery_app import celery_app
from prep_scheduler.main import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def eager_celery():
    """Run Celery tasks in-process for the duration of a test."""
    celery_app.conf.task_always_eager = True
    yield celery_app
    celery_app.conf.task_always_eager = False
