"""Tests for ZipArchiveDecompressor."""

from __future__ import annotations

import io
import logging
import zipfile

import pytest

from domain.elevation.errors import FormatError
from domain.elevation.services import ArchivePipeline
from domain.elevation.tile import Tile
from domain.elevation.value_objects import tile_address
from infrastructure.elevation.zip_decompressor import ZipArchiveDecompressor
from tests.conftest_utils import FakeStore, FakeTransport, tile_url, zip_bytes


def test_extracts_single_entry():
    raw = b"\x00\x01" * 9

    assert ZipArchiveDecompressor().decompress(zip_bytes(raw)) == raw


def test_skips_directory_entries():
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("N00E000/", b"")
        archive.writestr("N00E000/N00E000.hgt", b"\x00\x05")

    assert ZipArchiveDecompressor().decompress(buffer.getvalue()) == b"\x00\x05"


def test_garbage_raises_format_error():
    with pytest.raises(FormatError, match="Corrupted or invalid archive"):
        ZipArchiveDecompressor().decompress(b"<html>404 Not Found</html>")


def test_empty_bytes_raise_format_error():
    with pytest.raises(FormatError):
        ZipArchiveDecompressor().decompress(b"")


def test_archive_without_entries_raises_format_error():
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w"):
        pass

    with pytest.raises(FormatError, match="no entries"):
        ZipArchiveDecompressor().decompress(buffer.getvalue())


# ===========================================================================
# Entries zipfile cannot extract
# ===========================================================================
def patch_central_header(data: bytes, offset: int, value: int) -> bytes:
    """Overwrite a 2-byte field of the first central directory record."""
    patched = bytearray(data)
    start = patched.find(b"PK\x01\x02") + offset
    patched[start : start + 2] = value.to_bytes(2, "little")
    return bytes(patched)


def encrypted_zip(raw: bytes) -> bytes:
    return patch_central_header(zip_bytes(raw), 8, 0x0001)  # flag bit 0


def unsupported_compression_zip(raw: bytes) -> bytes:
    return patch_central_header(zip_bytes(raw), 10, 99)  # compression method


@pytest.mark.parametrize("make_archive", [encrypted_zip, unsupported_compression_zip])
def test_unextractable_entry_raises_format_error(make_archive):
    with pytest.raises(FormatError, match="Corrupted or invalid archive"):
        ZipArchiveDecompressor().decompress(make_archive(b"\x00\x01" * 9))


def test_encrypted_archive_logged_and_emptied_by_pipeline(caplog):
    filename = "N00E000.hgt.zip"
    store = FakeStore({filename: encrypted_zip(b"\x00\x01" * 9)})
    pipeline = ArchivePipeline(store, FakeTransport(), ZipArchiveDecompressor())
    tile = Tile.at(tile_address(0.5, 0.5), tile_url("N00E000"))

    with caplog.at_level(logging.ERROR, logger="domain.elevation.services"):
        contents = pipeline.load_grid(tile)

    assert contents == b""
    assert f"Error loading archive {filename}" in caplog.text
