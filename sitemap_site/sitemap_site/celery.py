"""
Celery configuration for sitemap_site.

Celery refreshes the cached sitemap index in the background so requests
for /sitemap.xml are served from cache.
"""

import os

from celery import Celery

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "sitemap_site.settings")

app = Celery("sitemap_site")

# - namespace='CELERY' means all celery-related configuration keys
#   should have a `CELERY_` prefix.
app.config_from_object("django.conf:settings", namespace="CELERY")

# src.tasks is not a Django app, so the package and module are spelled out
app.autodiscover_tasks(["src.tasks"], related_name="sitemaps")

app.conf.update(
    broker_connection_retry_on_startup=True,
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_routes={
        "sitemaps.*": {"queue": "maintenance"},
    },
    task_default_queue="celery",
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    result_expires=3600,
    task_time_limit=300,  # Hard time limit: 5 minutes
    task_soft_time_limit=270,
    beat_schedule={
        "refresh-sitemap-index": {
            "task": "sitemaps.refresh_sitemap_index",
            "schedule": 3600.0,  # Every hour
        },
    },
)
