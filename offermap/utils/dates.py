"""Datetime helpers."""

from __future__ import annotations

import os
from datetime import datetime

import pendulum

DEFAULT_TZ = "UTC"
LASTMOD_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def timezone_name() -> str:
    return os.environ.get("TIMEZONE", DEFAULT_TZ)


def utc_now() -> pendulum.DateTime:
    return pendulum.now("UTC")


def as_utc(value: datetime) -> pendulum.DateTime:
    """Convert ``value`` to UTC. Naive datetimes are taken to be UTC already."""
    return pendulum.instance(value, tz="UTC").in_timezone("UTC")


def format_lastmod(value: datetime) -> str:
    return as_utc(value).strftime(LASTMOD_FORMAT)
