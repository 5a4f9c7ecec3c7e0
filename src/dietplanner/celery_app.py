"""Celery application configuration for background optimization runs."""

import os

from celery import Celery

from dietplanner.config import get_settings

settings = get_settings()

celery_app = Celery(
    "dietplanner",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["dietplanner.tasks.optimization"],
)

celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # Optimizations are CPU bound and long running
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    task_track_started=True,
    # Result settings
    result_expires=86400,  # 1 day
    task_routes={
        "dietplanner.tasks.optimization.*": {"queue": "optimization"},
    },
    # Logging
    worker_hijack_root_logger=False,
)

if os.name == "nt":
    celery_app.conf.update(
        worker_pool="solo",
    )
