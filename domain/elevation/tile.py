"""Elevation Bounded Context - Tile Entity.

A Tile owns one lazily decoded grid plus its geographic origin. It is created
by the engine on first sight of its name and lives for the engine's lifetime.
"""

from __future__ import annotations

import logging
import math

from domain.elevation.interpolation import value_at
from domain.elevation.repositories import TileLoader
from domain.elevation.value_objects import ElevationGrid, TileAddress, TileUrl

logger = logging.getLogger(__name__)


class Tile:
    """One 1x1 degree elevation tile (Entity, identified by name).

    State:
        Unloaded: ``grid is None``
        Loaded: ``grid`` holds the decoded ElevationGrid

    A tile without a download URL is permanently invalid: it never loads and
    always reports NaN (e.g. open ocean, where nothing is published).
    """

    def __init__(
        self,
        name: str,
        origin_latitude: float,
        origin_longitude: float,
        download_url: str | None = None,
    ) -> None:
        self.name = name
        self.origin_latitude = origin_latitude
        self.origin_longitude = origin_longitude
        self.download_url = download_url
        self.grid: ElevationGrid | None = None

    @classmethod
    def at(cls, address: TileAddress, url: TileUrl | None) -> "Tile":
        """Build a tile for an address and its (possibly missing) catalog URL."""
        return cls(
            name=address.name,
            origin_latitude=float(address.origin_latitude),
            origin_longitude=float(address.origin_longitude),
            download_url=url.download_url if url is not None else None,
        )

    @property
    def valid(self) -> bool:
        return bool(self.download_url)

    @property
    def is_loaded(self) -> bool:
        return self.grid is not None

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "unloaded"
        return f"Tile({self.name!r}, valid={self.valid}, {state})"

    def ensure_loaded(self, loader: TileLoader) -> ElevationGrid:
        """Load and decode the grid once; later calls are no-ops.

        A failed load leaves the tile unloaded, so the next call tries again.

        Raises:
            NetworkError, StorageError: Propagated from the loader
            FormatError: If the decoded byte count is not a valid square grid
        """
        if self.grid is None:
            raw = loader.load_grid(self)
            self.grid = ElevationGrid.from_bytes(raw, self.name)
            logger.debug(
                "Decoded tile %s, square_size=%d", self.name, self.grid.square_size
            )
        return self.grid

    def row_and_column(self, latitude: float, longitude: float) -> tuple[int, int]:
        """Map a coordinate inside this tile to grid indices.

        Row grows southwards from the northern edge, column eastwards from the
        western edge. Coordinates outside the tile are not checked.
        """
        if self.grid is None:
            raise RuntimeError(f"Tile {self.name} is not loaded")
        span = self.grid.square_size - 1
        row = math.floor((self.origin_latitude + 1.0 - latitude) * span)
        column = math.floor((longitude - self.origin_longitude) * span)
        return row, column

    def elevation_at(
        self, latitude: float, longitude: float, loader: TileLoader
    ) -> float:
        """Return the elevation for a coordinate inside this tile.

        Args:
            latitude: Latitude in decimal degrees, within this tile
            longitude: Longitude in decimal degrees, within this tile
            loader: Source of the raw grid bytes on first use

        Returns:
            Elevation in meters, or NaN for an invalid tile or an
            unrecoverable void

        Raises:
            NetworkError, StorageError, FormatError: On first load only
        """
        if not self.valid:
            logger.debug("No data tile %s", self.name)
            return float("nan")

        grid = self.ensure_loaded(loader)
        row, column = self.row_and_column(latitude, longitude)
        return value_at(grid, row, column)
