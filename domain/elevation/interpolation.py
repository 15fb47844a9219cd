"""Elevation Bounded Context - Void Interpolation.

Pure domain logic: estimate an elevation where the raw sample is void.

Very simple heuristic, not a physical model:
    * Step along the column (rows above and below) until a valid sample is
      found in each direction, giving the row-wise neighbours.
    * Do the same along the row (columns left and right).
    * A complete pair of neighbours is linearly interpolated.
    * Row-wise and column-wise estimates are averaged when both exist.
    * Otherwise the single nearest neighbour found is returned as is.
    * No neighbour anywhere on the row or column gives NaN.

Never extrapolates, and ties are broken by a fixed priority order rather than
by distance.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

from domain.elevation.value_objects import ElevationGrid

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
VOID_THRESHOLD = 9000  # Decoded samples >= this value carry no data


class Neighbour(NamedTuple):
    """Nearest valid sample found while scanning away from a void sample."""

    index: int  # Row or column index of the sample
    value: int  # Raw elevation value


# ---------------------------------------------------------------------------
# Helper: Directional Scan
# ---------------------------------------------------------------------------
def is_void(value: int) -> bool:
    return value >= VOID_THRESHOLD


def nearest_valid(
    line: NDArray[np.uint16], start: int, step: int
) -> Neighbour | None:
    """Find the first valid sample in ``line`` moving from ``start`` by ``step``.

    The sample at ``start`` itself is not inspected.

    Args:
        line: 1D slice of the grid (a full row or a full column)
        start: Index of the void sample
        step: -1 to scan towards index 0, +1 to scan towards the end

    Returns:
        Neighbour, or None when the edge is reached without a valid sample
    """
    if step < 0:
        candidates = line[:start][::-1]
    else:
        candidates = line[start + 1 :]

    hits = np.flatnonzero(candidates < VOID_THRESHOLD)
    if hits.size == 0:
        return None

    offset = int(hits[0]) + 1
    index = start + step * offset
    return Neighbour(index=index, value=int(line[index]))


def _linear(position: int, low: Neighbour, high: Neighbour) -> float:
    per_step = (high.value - low.value) / (high.index - low.index)
    return low.value + (position - low.index) * per_step


# ---------------------------------------------------------------------------
# Main Service: value_at
# ---------------------------------------------------------------------------
def value_at(grid: ElevationGrid, row: int, column: int) -> float:
    """Return the elevation at (row, column), estimating it if void.

    Args:
        grid: Decoded tile grid
        row: Row index (0 = northern edge)
        column: Column index (0 = western edge)

    Returns:
        Raw sample as float when valid, an interpolated estimate when void,
        or NaN when the whole row and column are void.
    """
    samples = grid.samples
    raw = int(samples[row, column])
    if not is_void(raw):
        return float(raw)

    # r => along the column (row index varies), c => along the row.
    # 1 => towards index 0, 2 => towards the far edge.
    vertical = samples[:, column]
    horizontal = samples[row, :]
    r1 = nearest_valid(vertical, row, -1)
    r2 = nearest_valid(vertical, row, +1)
    c1 = nearest_valid(horizontal, column, -1)
    c2 = nearest_valid(horizontal, column, +1)

    rv = _linear(row, r1, r2) if r1 is not None and r2 is not None else None
    cv = _linear(column, c1, c2) if c1 is not None and c2 is not None else None

    if rv is not None and cv is not None:
        return (rv + cv) / 2.0
    if rv is not None:
        return rv
    if cv is not None:
        return cv

    for neighbour in (r1, r2, c1, c2):
        if neighbour is not None:
            return float(neighbour.value)

    return float("nan")
