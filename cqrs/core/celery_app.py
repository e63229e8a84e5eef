"""Celery application configuration"""
from celery import Celery
from kombu import Queue
from cqrs.core.config import settings

# Create Celery instance
celery_app = Celery(
    "cqrs",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["cqrs.jobs.job"]
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    worker_prefetch_multiplier=1,
)

celery_app.conf.task_queues = (
    Queue(settings.QUEUE_DEFAULT, routing_key=settings.QUEUE_DEFAULT),
)

celery_app.conf.task_default_queue = settings.QUEUE_DEFAULT
celery_app.conf.task_default_routing_key = settings.QUEUE_DEFAULT

# Worker command:
#   celery -A cqrs.core.celery_app worker -Q default --concurrency=4
