"""Remote tile catalog: HTML index crawler and TileUrlResolver adapter.

Each resolution tier (finest first) is published as a tree of HTML index
pages whose links end in ``<TileName>.hgt.zip``. The tree is harvested once
per session, lazily on the first lookup, and kept in memory.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from html.parser import HTMLParser

from pydantic import BaseModel, ConfigDict

from domain.elevation.errors import NetworkError
from domain.elevation.repositories import Transport
from domain.elevation.value_objects import ARCHIVE_SUFFIX, TileUrl

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_BASE_URL = "http://srtm.kurviger.de"
DEFAULT_TIERS = ("SRTM1", "SRTM3")  # 1 arc-second first, then 3 arc-second
DEFAULT_MAX_DEPTH = 2
INDEX_PAGE = "/index.html"


class CatalogTier(BaseModel):
    """Tile names published by one resolution tier (Value Object)."""

    base_url: str  # e.g. "http://srtm.kurviger.de/SRTM1"
    entries: dict[str, str]  # tile name -> URL relative to base_url

    model_config = ConfigDict(frozen=True)

    def url_for(self, tile_name: str) -> TileUrl | None:
        relative = self.entries.get(tile_name)
        if relative is None:
            return None
        return TileUrl(base_url=self.base_url, relative_url=relative)


# ---------------------------------------------------------------------------
# Helper: Link Extraction
# ---------------------------------------------------------------------------
class _HrefCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.hrefs: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        for name, value in attrs:
            if name.lower() == "href" and value:
                self.hrefs.append(value.strip(" \r\t\n"))


def extract_links(html: str) -> list[str]:
    """Return every non-empty ``href`` value in document order."""
    collector = _HrefCollector()
    collector.feed(html)
    collector.close()
    return collector.hrefs


def _is_followable(href: str) -> bool:
    lowered = href.lower()
    return not (
        lowered.startswith(("/", "http", "?", "#", ".."))
        or lowered.endswith(".jpg")
    )


# ---------------------------------------------------------------------------
# Crawler
# ---------------------------------------------------------------------------
class HtmlCatalogCrawler:
    """Harvest ``.hgt.zip`` links from a tier's index pages.

    Parameters
    ----------
    transport: Transport
        Used to fetch each index page.
    max_depth: int
        Number of page levels visited below (and including) the tier root.
    """

    def __init__(
        self, transport: Transport, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> None:
        self.transport = transport
        self.max_depth = max_depth

    def crawl(self, base_url: str) -> CatalogTier:
        base_url = base_url.rstrip("/")
        entries: dict[str, str] = {}
        self._visit(base_url, base_url, 0, entries)
        logger.info("Catalog %s: %d tiles", base_url, len(entries))
        return CatalogTier(base_url=base_url, entries=entries)

    def _visit(
        self, base_url: str, url: str, depth: int, entries: dict[str, str]
    ) -> None:
        if depth >= self.max_depth:
            return

        try:
            body = self.transport.get(url)
        except NetworkError as e:
            # A broken sub-index only hides its own tiles; the tier root must load.
            if depth == 0:
                raise
            logger.warning("Skipping catalog page %s: %s", url, e)
            return

        page = body.decode("utf-8", errors="replace")
        for href in extract_links(page):
            if href.endswith(INDEX_PAGE):
                href = href[: -len(INDEX_PAGE)]
            if not href:
                continue

            child_url = f"{url.rstrip('/')}/{href}"
            if href.lower().endswith(ARCHIVE_SUFFIX):
                filename = href.rstrip("/").split("/")[-1]
                name = filename[: -len(ARCHIVE_SUFFIX)]
                relative = child_url[len(base_url) :]
                entries.setdefault(name, relative)
                logger.debug("> %s -> %s", name, relative)
            elif _is_followable(href):
                logger.debug("> %s", child_url)
                self._visit(base_url, child_url, depth + 1, entries)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------
class CatalogTileUrlResolver:
    """TileUrlResolver backed by the crawled catalog.

    Tiers are consulted in order, so list the finest resolution first. Pass
    ``catalog`` to use an already harvested catalog without any network I/O.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        base_url: str = DEFAULT_BASE_URL,
        tiers: Sequence[str] = DEFAULT_TIERS,
        max_depth: int = DEFAULT_MAX_DEPTH,
        catalog: Sequence[CatalogTier] | None = None,
    ) -> None:
        if transport is None and catalog is None:
            raise ValueError("Either transport or catalog is required")
        self.crawler = (
            HtmlCatalogCrawler(transport, max_depth=max_depth)
            if transport is not None
            else None
        )
        self.tier_urls = [
            f"{base_url.rstrip('/')}/{tier.strip('/')}" for tier in tiers
        ]
        self._tiers: tuple[CatalogTier, ...] | None = (
            tuple(catalog) if catalog is not None else None
        )

    @property
    def tiers(self) -> tuple[CatalogTier, ...]:
        if self._tiers is None:
            self._tiers = tuple(self.crawler.crawl(url) for url in self.tier_urls)
        return self._tiers

    def best_url_for(self, tile_name: str) -> TileUrl | None:
        for tier in self.tiers:
            url = tier.url_for(tile_name)
            if url is not None:
                return url
        return None
