"""Celery configuration for scheduled jobs."""

from __future__ import annotations

import os

from celery import Celery
from celery.schedules import crontab

from offermap.utils.dates import timezone_name

broker_url = os.environ.get("REDIS_URL", "redis://redis:6379/0")

celery_app = Celery("offermap", broker=broker_url, include=["offermap.jobs.sitemap"])
celery_app.conf.timezone = timezone_name()
celery_app.conf.beat_schedule = {
    "offers-sitemap": {
        "task": "offermap.jobs.sitemap.run_sitemap",
        "schedule": crontab(hour=int(os.environ.get("SITEMAP_HOUR", "3")), minute=int(os.environ.get("SITEMAP_MINUTE", "0"))),
    },
}


@celery_app.task(name="offermap.jobs.sitemap.run_sitemap", ignore_result=True)
def run_sitemap_task() -> None:
    from offermap.jobs.sitemap import run_sitemap

    run_sitemap()
