"""Elevation Bounded Context - Domain Services.

Orchestration of the fetch/decode pipeline over domain ports.
NO concrete I/O here - storage, HTTP and zip handling are implemented by
infrastructure adapters under `src/infrastructure/elevation/`.
"""

from __future__ import annotations

import logging

from domain.elevation.errors import ElevationError, FormatError
from domain.elevation.repositories import ArchiveDecompressor, ArchiveStore, Transport
from domain.elevation.tile import Tile
from domain.elevation.value_objects import archive_filename

logger = logging.getLogger(__name__)


class ArchivePipeline:
    """Fetch a tile archive through the local store and decompress it.

    Implements the TileLoader port.

    Steps:
    1) Derive the archive filename from the tile name
    2) Read it from the store
    3) On "not found": download once, persist under the same filename
    4) Decompress the single archive entry

    No retries anywhere: every store or network error propagates unchanged,
    except "not found" which triggers the download.
    """

    def __init__(
        self,
        store: ArchiveStore,
        transport: Transport,
        decompressor: ArchiveDecompressor,
    ) -> None:
        self.store = store
        self.transport = transport
        self.decompressor = decompressor

    def fetch_archive(self, tile: Tile) -> bytes:
        """Return archive bytes for a tile, downloading and caching on a miss."""
        filename = archive_filename(tile.name)

        try:
            return self.store.load(filename)
        except Exception as e:
            if not self.store.is_not_found(e):
                raise

        if not tile.download_url:
            raise ElevationError(f"Tile {tile.name} has no download URL")

        logger.info(
            "Archive %s not cached => retrieving %s", filename, tile.download_url
        )
        data = self.transport.get(tile.download_url)
        self.store.save(filename, data)
        logger.info("Written %d bytes to %s", len(data), filename)
        return data

    def load_grid(self, tile: Tile) -> bytes:
        """Return the raw (decompressed) grid bytes for a tile.

        A decompression failure is logged and yields empty contents; the error
        then surfaces as a FormatError when the grid size is validated.

        Raises:
            NetworkError: Download failed
            StorageError: Store read (other than not found) or write failed
        """
        data = self.fetch_archive(tile)
        filename = archive_filename(tile.name)

        try:
            contents = self.decompressor.decompress(data)
        except FormatError as e:
            logger.error("Error loading archive %s: %s", filename, e)
            contents = b""

        logger.debug("Loaded %d bytes from %s", len(contents), filename)
        return contents
