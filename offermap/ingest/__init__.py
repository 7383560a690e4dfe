"""Offer ingestion helpers."""

from __future__ import annotations

from offermap.ingest.models import OfferRecord

__all__ = ["OfferRecord"]
