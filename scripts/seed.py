"""Seed the offers table with demo rows for local sitemap runs."""

from __future__ import annotations

from datetime import timedelta

from dotenv import load_dotenv
from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.engine import Engine

from offermap.config import SitemapConfig
from offermap.db.migrate import run_migrations
from offermap.db.session import create_engine_from_dsn
from offermap.utils.dates import utc_now


DEMO_OFFERS = {
    "WPW10321304": 14,
    "wpw-10321304": 3,
    "W10295370A": 12,
    "DA97-07365G": 11,
    "5304506469": 4,
    "  ": 2,
}

INSERT_OFFER = text("INSERT INTO offers (mpn, created_at) VALUES (:mpn, :created_at)").bindparams(
    bindparam("created_at", type_=DateTime(timezone=True)),
)


def seed_offers(engine: Engine, offers: dict[str, int] | None = None) -> int:
    now = utc_now()
    rows = [
        {"mpn": mpn, "created_at": now - timedelta(hours=idx)}
        for mpn, copies in (offers or DEMO_OFFERS).items()
        for idx in range(copies)
    ]
    with engine.begin() as conn:
        conn.execute(INSERT_OFFER, rows)
    return len(rows)


def main() -> None:
    load_dotenv()
    engine = create_engine_from_dsn(SitemapConfig.from_env().require_dsn())
    try:
        run_migrations(engine)
        inserted = seed_offers(engine)
    finally:
        engine.dispose()
    print(f"Seed complete: {inserted} offers")


if __name__ == "__main__":
    main()
