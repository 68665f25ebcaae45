# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import (
    CELERY_BROKER_URL,
    CELERY_RESULT_BACKEND,
    CELERY_TASK_ALWAYS_EAGER,
)

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

#explicit imports so the worker registers the tasks
celery_app.conf.imports = (
    "storefront.tasks.promotions",
    "storefront.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "deactivate-expired-promotions-hourly": {
        "task": "storefront.tasks.promotions.deactivate_expired_promotions_task",
        "schedule": 3600.0,
    },
}

celery_app.conf.timezone = "UTC"
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
