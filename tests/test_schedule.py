from celery.schedules import crontab

from offermap.jobs import sitemap
from offermap.jobs.celery_app import celery_app, run_sitemap_task


def test_sitemap_is_scheduled_daily():
    entry = celery_app.conf.beat_schedule["offers-sitemap"]
    assert entry["task"] == "offermap.jobs.sitemap.run_sitemap"
    assert isinstance(entry["schedule"], crontab)
    assert "offermap.jobs.sitemap.run_sitemap" in celery_app.tasks


def test_task_runs_job_and_stores_no_result(monkeypatch):
    calls = []
    monkeypatch.setattr(sitemap, "run_sitemap", lambda: calls.append(True))
    assert run_sitemap_task.ignore_result is True
    assert run_sitemap_task() is None
    assert calls == [True]
