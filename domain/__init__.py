"""Elevation Resolution Domain Layer.

This package contains the core logic organized by bounded context:
- elevation: tile addressing, grid decoding, void interpolation, tile caching
"""

from domain import elevation

__all__ = ["elevation"]
