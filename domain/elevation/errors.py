"""Elevation Bounded Context - Error Hierarchy.

Custom exceptions for tile fetching, caching and decoding.

A tile with no published archive is NOT an error (it yields NaN), and void
samples inside a decoded grid are never errors either.
"""

from __future__ import annotations


class ElevationError(Exception):
    """Base error for elevation operations."""


class NetworkError(ElevationError):
    """Downloading bytes from a remote URL failed.

    Attributes:
        url: The URL that could not be fetched
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Failed to fetch {url}: {reason}")


class StorageError(ElevationError):
    """Reading or writing an archive in the local store failed.

    Attributes:
        filename: Archive filename inside the store
    """

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        super().__init__(f"Storage failure for {filename}: {reason}")


class ArchiveNotFoundError(StorageError):
    """Archive is not present in the store (go fetch it)."""

    def __init__(self, filename: str) -> None:
        super().__init__(filename, "not found")


class FormatError(ElevationError):
    """Archive could not be decompressed or grid size is invalid."""
