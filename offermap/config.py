"""Job configuration loaded from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from offermap.logic.aggregate import DEFAULT_MIN_COUNT

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.appliancepartgeeks.com"
DEFAULT_OUT_PATH = "public/sitemap-offers.xml"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigurationError(ValueError):
    pass


@dataclass(slots=True, frozen=True)
class SitemapConfig:
    dsn: str | None = None
    base_url: str = DEFAULT_BASE_URL
    min_count: int = DEFAULT_MIN_COUNT
    output_path: Path = Path(DEFAULT_OUT_PATH)
    aggregate_in_db: bool = True
    s3_bucket: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.min_count, bool) or not isinstance(self.min_count, int) or self.min_count < 0:
            raise ConfigurationError(f"MIN_COUNT must be a non-negative integer, got {self.min_count!r}")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "output_path", Path(self.output_path))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SitemapConfig":
        env = os.environ if environ is None else environ
        dsn = (env.get("PG_DSN") or env.get("DATABASE_URL") or "").strip() or None
        return cls(
            dsn=dsn,
            base_url=env.get("BASE_URL", DEFAULT_BASE_URL),
            min_count=_parse_int("MIN_COUNT", env.get("MIN_COUNT"), DEFAULT_MIN_COUNT),
            output_path=Path(env.get("OUT_PATH", DEFAULT_OUT_PATH)),
            aggregate_in_db=_parse_bool("AGGREGATE_IN_DB", env.get("AGGREGATE_IN_DB"), True),
            s3_bucket=env.get("SITEMAP_S3_BUCKET") or None,
        )

    def require_dsn(self) -> str:
        if not self.dsn:
            raise ConfigurationError("PG_DSN env var is required")
        return self.dsn


def _parse_int(name: str, raw: str | None, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Rejecting %s=%r", name, raw)
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


def _parse_bool(name: str, raw: str | None, default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    logger.warning("Rejecting %s=%r", name, raw)
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")
