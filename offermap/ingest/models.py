"""Offer data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class OfferRecord:
    mpn: str | None
    created_at: datetime | None = None
