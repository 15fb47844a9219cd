"""Elevation Bounded Context - Value Objects.

Immutable data structures for tile addressing and decoded elevation grids.
Grid validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, model_validator

from domain.elevation.errors import FormatError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
ARCHIVE_SUFFIX = ".hgt.zip"
BYTES_PER_SAMPLE = 2

# Big-endian unsigned 16-bit. Negative elevations (including the -32768 void
# marker) decode to values >= 32768 and therefore land in the void bucket.
SAMPLE_DTYPE = np.dtype(">u2")


# ---------------------------------------------------------------------------
# TileAddress
# ---------------------------------------------------------------------------
class TileAddress(NamedTuple):
    """Name and south-west origin of the 1x1 degree tile holding a coordinate."""

    name: str  # e.g. "N37W123"
    origin_latitude: int  # floor(latitude)
    origin_longitude: int  # floor(longitude)


def tile_address(latitude: float, longitude: float) -> TileAddress:
    """Compute the tile name and origin for a coordinate.

    Hemisphere letters come from the sign of the input, the digits from the
    magnitude of the floored value, so -1.2 maps to "S02" (origin -2).

    Args:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees

    Returns:
        TileAddress, e.g. (37.77, -122.4) -> ("N37W123", 37, -123)
    """
    origin_lat = math.floor(latitude)
    origin_lon = math.floor(longitude)

    north_south = "N" if latitude >= 0 else "S"
    east_west = "E" if longitude >= 0 else "W"

    name = f"{north_south}{abs(origin_lat):02d}{east_west}{abs(origin_lon):03d}"
    return TileAddress(name, origin_lat, origin_lon)


def archive_filename(tile_name: str) -> str:
    """Filename under which a tile's archive is kept in the store."""
    return f"{tile_name}{ARCHIVE_SUFFIX}"


# ---------------------------------------------------------------------------
# TileUrl
# ---------------------------------------------------------------------------
class TileUrl(BaseModel):
    """Download location of a tile archive as published by a catalog tier."""

    base_url: str  # Tier root, e.g. "http://srtm.kurviger.de/SRTM1"
    relative_url: str  # Below the tier root, e.g. "/Region_01/N37W123.hgt.zip"

    model_config = ConfigDict(frozen=True)

    @property
    def download_url(self) -> str:
        url = self.base_url + self.relative_url
        if not url.endswith(".zip"):
            url += ".zip"
        return url


# ---------------------------------------------------------------------------
# ElevationGrid
# ---------------------------------------------------------------------------
class ElevationGrid(BaseModel):
    """Square grid of raw elevation samples (Value Object).

    Row 0 is the northern edge of the tile, column 0 the western edge.
    The samples array is made read-only at construction time.
    """

    samples: NDArray[np.uint16]  # 2D (square_size x square_size), read-only

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_grid(self) -> "ElevationGrid":
        if self.samples.ndim != 2:
            raise ValueError(f"Samples must be 2D, got {self.samples.ndim}D")
        height, width = self.samples.shape
        if height != width:
            raise ValueError(f"Grid must be square, got {height}x{width}")
        if height == 0:
            raise ValueError("Grid cannot be empty")

        # Owned, contiguous copy so callers' arrays are never frozen in place.
        immutable = np.array(self.samples, dtype=np.uint16, copy=True, order="C")
        immutable.flags.writeable = False
        object.__setattr__(self, "samples", immutable)
        return self

    @property
    def square_size(self) -> int:
        return int(self.samples.shape[0])

    @classmethod
    def from_bytes(cls, raw: bytes, tile_name: str = "") -> "ElevationGrid":
        """Decode raw .hgt contents into a grid.

        Args:
            raw: Decompressed bytes, 2 bytes per sample, row-major
            tile_name: Used in the error message only

        Raises:
            FormatError: If the byte count is not 2 * square_size**2 with
                square_size > 0
        """
        square_size = int(math.sqrt(len(raw) / BYTES_PER_SAMPLE))
        if (
            square_size <= 0
            or square_size * square_size * BYTES_PER_SAMPLE != len(raw)
        ):
            raise FormatError(f"Invalid size for tile {tile_name}: {len(raw)}")

        samples = np.frombuffer(raw, dtype=SAMPLE_DTYPE).reshape(
            square_size, square_size
        )
        return cls(samples=samples.astype(np.uint16))
