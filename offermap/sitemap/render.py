"""Sitemap document construction and rendering."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from offermap.logic.aggregate import AggregateEntry
from offermap.utils.dates import format_lastmod

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
REFURB_PATH = "/refurb/"
CHANGEFREQ = "daily"
PRIORITY = 0.7

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def xml_escape(value: str) -> str:
    # "&" must go first so entities are not escaped twice.
    for char, entity in _XML_ESCAPES:
        value = value.replace(char, entity)
    return value


TEMPLATE_DIR = Path(__file__).parent
ENV = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)
ENV.filters["xml_escape"] = xml_escape


@dataclass(slots=True, frozen=True)
class SitemapUrl:
    loc: str
    lastmod: str
    changefreq: str = CHANGEFREQ
    priority: float = PRIORITY


@dataclass(slots=True, frozen=True)
class SitemapDocument:
    urls: tuple[SitemapUrl, ...]
    generated_at: str

    def __len__(self) -> int:
        return len(self.urls)


def build_document(entries: Iterable[AggregateEntry], base_url: str, run_time: datetime) -> SitemapDocument:
    """Turn ordered aggregate entries into sitemap URLs.

    ``run_time`` is the single per-run snapshot used as ``lastmod`` for
    keys that were never observed with a timestamp. Entries keep the order
    they are given in.
    """
    fallback = format_lastmod(run_time)
    prefix = base_url.rstrip("/") + REFURB_PATH
    urls = tuple(
        SitemapUrl(
            loc=prefix + entry.key,
            lastmod=format_lastmod(entry.last_seen) if entry.last_seen is not None else fallback,
        )
        for entry in entries
    )
    return SitemapDocument(urls=urls, generated_at=fallback)


def render_sitemap(document: SitemapDocument) -> str:
    template = ENV.get_template("sitemap.xml.j2")
    return template.render(namespace=SITEMAP_NAMESPACE, urls=document.urls)
