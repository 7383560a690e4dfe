"""Offer queries against the catalog database."""

from __future__ import annotations

import logging

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import text

from offermap.ingest.models import OfferRecord
from offermap.logic.aggregate import AggregateEntry
from offermap.utils.dates import as_utc

logger = logging.getLogger(__name__)

OFFERS_QUERY = text(
    """
    SELECT mpn, created_at
    FROM offers
    """
).columns(mpn=Text, created_at=DateTime(timezone=True))

AGGREGATE_QUERY = text(
    """
    WITH normed AS (
      SELECT
        regexp_replace(lower(coalesce(o.mpn, '')), '[^a-z0-9]', '', 'g') AS mpn_norm,
        o.created_at
      FROM offers o
      WHERE o.mpn IS NOT NULL
        AND btrim(o.mpn) <> ''
    ),
    agg AS (
      SELECT
        mpn_norm,
        COUNT(*) AS offer_count,
        MAX(created_at) AS last_seen
      FROM normed
      WHERE mpn_norm <> ''
      GROUP BY mpn_norm
      HAVING COUNT(*) >= :min_count
    )
    SELECT mpn_norm, offer_count, last_seen
    FROM agg
    ORDER BY offer_count DESC, mpn_norm ASC
    """
).columns(mpn_norm=Text, offer_count=Integer, last_seen=DateTime(timezone=True))


class DataSourceError(RuntimeError):
    pass


def load_offers(engine: Engine) -> list[OfferRecord]:
    """Fetch every offer's raw MPN and timestamp for in-process aggregation."""
    try:
        with engine.connect() as conn:
            rows = conn.execute(OFFERS_QUERY).fetchall()
    except SQLAlchemyError as exc:
        raise DataSourceError(f"Failed to load offers: {exc}") from exc
    logger.info("Loaded %d offers", len(rows))
    return [OfferRecord(mpn=mpn, created_at=created_at) for mpn, created_at in rows]


def query_aggregates(engine: Engine, min_count: int) -> list[AggregateEntry]:
    """Run normalization, grouping and thresholding inside the database.

    Rows come back in the final sitemap order.
    """
    try:
        with engine.connect() as conn:
            rows = conn.execute(AGGREGATE_QUERY, {"min_count": min_count}).fetchall()
    except SQLAlchemyError as exc:
        raise DataSourceError(f"Offer aggregation query failed: {exc}") from exc
    logger.info("Aggregated %d MPNs with at least %d offers", len(rows), min_count)
    return [
        AggregateEntry(
            key=mpn_norm,
            count=int(offer_count),
            last_seen=as_utc(last_seen) if last_seen is not None else None,
        )
        for mpn_norm, offer_count, last_seen in rows
    ]
