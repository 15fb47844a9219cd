"""Domain Port(s) for Elevation I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .value_objects import TileUrl

if TYPE_CHECKING:
    from .tile import Tile


class TileUrlResolver(Protocol):
    """Port for locating a tile archive in the remote catalog."""

    def best_url_for(self, tile_name: str) -> TileUrl | None:
        """Return the finest-resolution download location, or None if unpublished."""
        ...


class ArchiveStore(Protocol):
    """Port for the local byte cache of downloaded archives.

    Implementations are append-only from the engine's point of view.
    """

    def load(self, filename: str) -> bytes: ...

    def save(self, filename: str, data: bytes) -> None: ...

    def is_not_found(self, error: Exception) -> bool:
        """Tell "absent, go fetch" apart from a real storage failure."""
        ...


class Transport(Protocol):
    """Port for fetching the bytes behind a URL (single attempt, no retry)."""

    def get(self, url: str) -> bytes: ...


class ArchiveDecompressor(Protocol):
    """Port for extracting the single entry of a tile archive."""

    def decompress(self, data: bytes) -> bytes: ...


class TileLoader(Protocol):
    """Port used by a Tile to obtain its raw, decompressed grid bytes."""

    def load_grid(self, tile: "Tile") -> bytes: ...
