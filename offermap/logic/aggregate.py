"""Offer aggregation and thresholding."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping

from offermap.ingest.models import OfferRecord
from offermap.logic.normalize import normalize_mpn
from offermap.utils.dates import as_utc

DEFAULT_MIN_COUNT = 10


@dataclass(slots=True, frozen=True)
class AggregateEntry:
    key: str
    count: int
    last_seen: datetime | None = None


def aggregate(records: Iterable[OfferRecord]) -> dict[str, AggregateEntry]:
    counts: dict[str, int] = {}
    last_seen: dict[str, datetime | None] = {}
    for record in records:
        if record.mpn is None or not record.mpn.strip():
            continue
        key = normalize_mpn(record.mpn)
        if not key:
            continue
        counts[key] = counts.get(key, 0) + 1
        current = last_seen.get(key)
        if record.created_at is not None:
            seen = as_utc(record.created_at)
            if current is None or seen > current:
                current = seen
        last_seen[key] = current
    return {key: AggregateEntry(key=key, count=count, last_seen=last_seen[key]) for key, count in counts.items()}


def filter_entries(
    entries: Mapping[str, AggregateEntry] | Iterable[AggregateEntry],
    min_count: int = DEFAULT_MIN_COUNT,
) -> list[AggregateEntry]:
    """Keep entries seen at least ``min_count`` times, most frequent first.

    Ties on count are broken by key ascending. This ordering is final; the
    sitemap is emitted in exactly this order.
    """
    if isinstance(min_count, bool) or not isinstance(min_count, int) or min_count < 0:
        raise ValueError(f"min_count must be a non-negative integer, got {min_count!r}")
    if isinstance(entries, Mapping):
        entries = entries.values()
    kept = [entry for entry in entries if entry.count >= min_count]
    kept.sort(key=lambda entry: (-entry.count, entry.key))
    return kept
