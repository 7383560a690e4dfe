"""Offers sitemap job."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import Engine

from offermap.config import ConfigurationError, SitemapConfig
from offermap.db.session import create_engine_from_dsn
from offermap.ingest.offers import DataSourceError, load_offers, query_aggregates
from offermap.logic.aggregate import AggregateEntry, aggregate, filter_entries
from offermap.sitemap.render import build_document, render_sitemap
from offermap.sitemap.writer import SitemapWriteError, upload_sitemap, write_sitemap
from offermap.utils.dates import utc_now

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SitemapResult:
    path: Path
    url_count: int
    min_count: int
    uploaded: bool = False


def run_sitemap(
    config: SitemapConfig | None = None,
    *,
    engine: Engine | None = None,
    now: datetime | None = None,
) -> SitemapResult:
    config = config or SitemapConfig.from_env()
    owns_engine = engine is None
    if engine is None:
        engine = create_engine_from_dsn(config.require_dsn())
    run_time = now or utc_now()

    try:
        entries = _collect_entries(engine, config)
    finally:
        if owns_engine:
            engine.dispose()

    document = build_document(entries, config.base_url, run_time)
    path = write_sitemap(render_sitemap(document), config.output_path)
    uploaded = False
    if config.s3_bucket:
        upload_sitemap(path, config.s3_bucket)
        uploaded = True
    logger.info("Sitemap %s has %d URLs", path, len(document))
    return SitemapResult(path=path, url_count=len(document), min_count=config.min_count, uploaded=uploaded)


def _collect_entries(engine: Engine, config: SitemapConfig) -> list[AggregateEntry]:
    if config.aggregate_in_db:
        return query_aggregates(engine, config.min_count)
    return filter_entries(aggregate(load_offers(engine)), config.min_count)


def main() -> None:
    load_dotenv()
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = SitemapConfig.from_env()
        config.require_dsn()
        result = run_sitemap(config)
    except ConfigurationError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    except DataSourceError as exc:
        logger.exception("Offer data could not be loaded")
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(2)
    except SitemapWriteError as exc:
        logger.exception("Sitemap could not be written")
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(3)
    print(f"OK: wrote {result.path} with {result.url_count} URLs (MIN_COUNT={result.min_count})")


if __name__ == "__main__":
    main()
