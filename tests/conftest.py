import re
from datetime import datetime, timezone

import pytest
from sqlalchemy import Column, DateTime, Integer, MetaData, Table, Text, create_engine, event
from sqlalchemy.pool import StaticPool

metadata = MetaData()

offers = Table(
    "offers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("mpn", Text),
    Column("created_at", DateTime(timezone=True)),
)

SCENARIO_MPNS = ["WED15P2", "wed-15p2", "WED15P2", "XYZ", "xyz", "xyz", "xyz", " ", None]


def _register_postgres_functions(dbapi_conn, _record):
    dbapi_conn.create_function("lower", 1, lambda value: value.lower() if value is not None else None)
    dbapi_conn.create_function("btrim", 1, lambda value: value.strip(" ") if value is not None else None)
    dbapi_conn.create_function(
        "regexp_replace",
        4,
        lambda value, pattern, repl, _flags: re.sub(pattern, repl, value) if value is not None else None,
    )


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _register_postgres_functions)
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def add_offers(engine):
    def _add(rows):
        with engine.begin() as conn:
            conn.execute(offers.insert(), [{"mpn": mpn, "created_at": created_at} for mpn, created_at in rows])

    return _add


@pytest.fixture()
def scenario_engine(engine, add_offers):
    seen = datetime(2024, 5, 1, 12, 30, 45, tzinfo=timezone.utc)
    add_offers([(mpn, seen) for mpn in SCENARIO_MPNS])
    return engine
