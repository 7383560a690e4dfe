"""Database migration helpers."""

from __future__ import annotations

import pathlib
import sys
from typing import Iterator

from dotenv import load_dotenv
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from offermap.config import ConfigurationError, SitemapConfig
from offermap.db.session import create_engine_from_dsn

SCHEMA_PATH = pathlib.Path(__file__).with_name("schema.sql")


def run_migrations(engine: Engine) -> None:
    """Apply schema.sql to the database."""
    statements = _load_statements(SCHEMA_PATH.read_text())
    with engine.begin() as conn:
        for stmt in statements:
            conn.execute(text(stmt))


def _load_statements(sql: str) -> Iterator[str]:
    """Split on semicolons that sit outside single-quoted literals."""
    body = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    start = 0
    quoted = False
    for idx, char in enumerate(body):
        if char == "'":
            quoted = not quoted
        elif char == ";" and not quoted:
            statement = body[start : idx + 1].strip()
            start = idx + 1
            if statement != ";":
                yield statement
    tail = body[start:].strip()
    if tail:
        yield tail


def main() -> None:
    load_dotenv()
    try:
        engine = create_engine_from_dsn(SitemapConfig.from_env().require_dsn())
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    try:
        run_migrations(engine)
    except SQLAlchemyError as exc:
        print(f"Migration failed: {exc}", file=sys.stderr)
        sys.exit(2)
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
