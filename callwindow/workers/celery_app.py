from celery import Celery
from callwindow.core.config import settings

celery = Celery(
    "callwindow",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=[
        "callwindow.workers.tasks_calls",
    ],
)

celery.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    # eta values handed to apply_async are UTC instants from the business-hours engine
    timezone="UTC",
    enable_utc=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
)
