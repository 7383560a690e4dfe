"""Database engine helpers."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError

from offermap.config import ConfigurationError


def create_engine_from_dsn(dsn: str) -> Engine:
    """Create an engine from a URL or a libpq keyword DSN (``host=... dbname=...``)."""
    try:
        if "://" in dsn:
            return create_engine(dsn, pool_pre_ping=True, future=True)
        return create_engine(
            "postgresql+psycopg2://",
            connect_args={"dsn": dsn},
            pool_pre_ping=True,
            future=True,
        )
    except ArgumentError as exc:
        raise ConfigurationError(f"Invalid database DSN: {exc}") from exc
