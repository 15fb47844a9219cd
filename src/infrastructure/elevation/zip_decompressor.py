"""Zip adapter for the ArchiveDecompressor port.

Tile archives hold exactly one logical entry, the raw ``.hgt`` grid.
"""

from __future__ import annotations

import io
import zipfile
import zlib

from domain.elevation.errors import FormatError


class ZipArchiveDecompressor:
    """Extract the first entry of a zip archive held in memory."""

    def decompress(self, data: bytes) -> bytes:
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                entries = [info for info in archive.infolist() if not info.is_dir()]
                if not entries:
                    raise FormatError("Archive has no entries")
                return archive.read(entries[0])
        except (
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
            zlib.error,
            EOFError,
            RuntimeError,  # encrypted entry
            NotImplementedError,  # unsupported compression method
        ) as e:
            raise FormatError(f"Corrupted or invalid archive: {e}") from e
