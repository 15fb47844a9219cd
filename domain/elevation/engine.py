"""Elevation Bounded Context - Resolution Engine.

Top-level facade turning a coordinate into an elevation.

The engine is single-threaded: neither its tile cache nor a tile's
lazily loaded grid is synchronized. Use one engine per worker, or serialize
calls to `elevation_at` externally.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from domain.elevation.repositories import TileLoader, TileUrlResolver
from domain.elevation.tile import Tile
from domain.elevation.value_objects import tile_address

logger = logging.getLogger(__name__)


class TileCache:
    """Append-only map of tile name -> Tile, at most one Tile per name."""

    def __init__(self) -> None:
        self._tiles: dict[str, Tile] = {}

    def get(self, name: str) -> Tile | None:
        return self._tiles.get(name)

    def add(self, tile: Tile) -> Tile:
        if tile.name in self._tiles:
            raise ValueError(f"Tile {tile.name} already cached")
        self._tiles[tile.name] = tile
        return tile

    def __contains__(self, name: object) -> bool:
        return name in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles.values())


class ElevationEngine:
    """Resolve coordinates to elevations, caching tiles for the session.

    Parameters
    ----------
    resolver: TileUrlResolver
        Consulted once per tile name, on first sight.
    loader: TileLoader
        Supplies raw grid bytes the first time a tile needs them.
    """

    def __init__(self, resolver: TileUrlResolver, loader: TileLoader) -> None:
        self.resolver = resolver
        self.loader = loader
        self._cache = TileCache()

    @property
    def cache(self) -> TileCache:
        return self._cache

    def tile_for(self, latitude: float, longitude: float) -> Tile:
        """Return the cached tile for a coordinate, creating it on a miss.

        A tile is never refreshed within the engine's lifetime.
        """
        address = tile_address(latitude, longitude)
        tile = self._cache.get(address.name)
        if tile is None:
            url = self.resolver.best_url_for(address.name)
            tile = self._cache.add(Tile.at(address, url))
            logger.debug("Cached %r", tile)
        return tile

    def elevation_at(self, latitude: float, longitude: float) -> float:
        """Return the elevation in meters at a coordinate.

        Returns:
            Elevation (possibly interpolated over voids), or NaN when no tile
            is published for the location or no valid sample is reachable

        Raises:
            NetworkError: Tile download failed
            StorageError: Local archive store failed
            FormatError: Tile contents are not a valid grid
        """
        tile = self.tile_for(latitude, longitude)
        return tile.elevation_at(latitude, longitude, self.loader)

    def elevations_at(self, points: Iterable[tuple[float, float]]) -> list[float]:
        """Resolve a sequence of (latitude, longitude) pairs in order."""
        return [self.elevation_at(lat, lon) for lat, lon in points]
