"""Local filesystem adapter for ArchiveStore.

Keeps downloaded tile archives as plain files in a cache directory. Files are
written once and never rewritten or deleted by the engine; there is no
eviction.
"""

from __future__ import annotations

import logging
from pathlib import Path

from domain.elevation.errors import ArchiveNotFoundError, StorageError

logger = logging.getLogger(__name__)


class LocalFileArchiveStore:
    """Archive store backed by a directory.

    Parameters
    ----------
    cache_dir: Path | str
        Directory holding ``<TileName>.hgt.zip`` files. Created if missing.
    """

    def __init__(self, cache_dir: Path | str) -> None:
        self.cache_dir = Path(cache_dir).expanduser()
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(str(self.cache_dir), e.strerror or str(e)) from e
        logger.debug("Archive store at %s", self.cache_dir)

    def _path(self, filename: str) -> Path:
        # Filenames are tile-derived; refuse anything that escapes the directory.
        if Path(filename).name != filename:
            raise StorageError(filename, "invalid archive filename")
        return self.cache_dir / filename

    def load(self, filename: str) -> bytes:
        path = self._path(filename)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise ArchiveNotFoundError(filename) from e
        except OSError as e:
            logger.error(
                "Failed to read %s (errno=%s, strerror=%s)",
                filename,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise StorageError(filename, e.strerror or str(e)) from e

    def save(self, filename: str, data: bytes) -> None:
        path = self._path(filename)
        partial = path.with_name(path.name + ".part")
        try:
            partial.write_bytes(data)
            partial.replace(path)
        except OSError as e:
            logger.error(
                "Failed to write %s (errno=%s, strerror=%s)",
                filename,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise StorageError(filename, e.strerror or str(e)) from e

    def is_not_found(self, error: Exception) -> bool:
        return isinstance(error, ArchiveNotFoundError)

    def __contains__(self, filename: object) -> bool:
        return isinstance(filename, str) and (self.cache_dir / filename).is_file()
