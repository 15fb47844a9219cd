"""Elevation Bounded Context.

Responsible for resolving coordinates to ground elevation:
- Value Objects: TileAddress, TileUrl, ElevationGrid
- Entities: Tile
- Services: value_at (void interpolation), ArchivePipeline, ElevationEngine
"""
