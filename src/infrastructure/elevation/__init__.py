"""Infrastructure adapters for the elevation bounded context.

Concrete implementations of the domain ports (archive store, HTTP transport,
zip decompressor, catalog resolver) and a factory wiring them into an
ElevationEngine.
"""

from __future__ import annotations

import requests

from domain.elevation.engine import ElevationEngine
from domain.elevation.services import ArchivePipeline

from .catalog import CatalogTileUrlResolver
from .file_store import LocalFileArchiveStore
from .http_transport import RequestsTransport
from .settings import ElevationSettings
from .zip_decompressor import ZipArchiveDecompressor


def create_engine(
    settings: ElevationSettings | None = None,
    session: requests.Session | None = None,
) -> ElevationEngine:
    """Build an engine backed by the local file cache and the HTTP catalog.

    No network I/O happens here; the catalog is crawled on the first lookup.
    """
    settings = settings if settings is not None else ElevationSettings()
    transport = RequestsTransport(session=session, timeout_s=settings.timeout_s)
    resolver = CatalogTileUrlResolver(
        transport,
        base_url=settings.base_url,
        tiers=settings.tiers,
        max_depth=settings.max_crawl_depth,
    )
    pipeline = ArchivePipeline(
        store=LocalFileArchiveStore(settings.cache_dir),
        transport=transport,
        decompressor=ZipArchiveDecompressor(),
    )
    return ElevationEngine(resolver, pipeline)


__all__ = [
    "CatalogTileUrlResolver",
    "ElevationSettings",
    "LocalFileArchiveStore",
    "RequestsTransport",
    "ZipArchiveDecompressor",
    "create_engine",
]
