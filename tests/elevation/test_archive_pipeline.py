"""Tests for the fetch/decode pipeline (ArchivePipeline).

All ports are in-memory fakes from tests/conftest_utils.py.
"""

from __future__ import annotations

import logging

import pytest

from domain.elevation.errors import ElevationError, NetworkError, StorageError
from domain.elevation.services import ArchivePipeline
from domain.elevation.tile import Tile
from domain.elevation.value_objects import tile_address
from tests.conftest_utils import (
    FakeStore,
    FakeTransport,
    PassthroughDecompressor,
    tile_url,
)

NAME = "N37W123"
FILENAME = "N37W123.hgt.zip"
DOWNLOAD_URL = "http://tiles.test/SRTM1/Region/N37W123.hgt.zip"
ARCHIVE = b"\x00\x01\x00\x02\x00\x03\x00\x04"


@pytest.fixture
def tile() -> Tile:
    return Tile.at(tile_address(37.9, -122.1), tile_url(NAME))


# ===========================================================================
# Store hit
# ===========================================================================
def test_store_hit_skips_network(tile, store, transport, pipeline):
    store.files[FILENAME] = ARCHIVE

    assert pipeline.load_grid(tile) == ARCHIVE
    assert store.loads == [FILENAME]
    assert transport.calls == []
    assert store.saves == []


# ===========================================================================
# Store miss -> download and persist
# ===========================================================================
def test_store_miss_downloads_and_persists(tile, store, transport, pipeline):
    transport.responses[DOWNLOAD_URL] = ARCHIVE

    assert pipeline.load_grid(tile) == ARCHIVE
    assert transport.calls == [DOWNLOAD_URL]
    assert store.saves == [FILENAME]
    assert store.files[FILENAME] == ARCHIVE


def test_persisted_before_decompression(tile, store, transport):
    transport.responses[DOWNLOAD_URL] = ARCHIVE
    seen_in_store: list[bool] = []

    class CheckingDecompressor:
        def decompress(self, data: bytes) -> bytes:
            seen_in_store.append(FILENAME in store.files)
            return data

    pipeline = ArchivePipeline(store, transport, CheckingDecompressor())
    pipeline.load_grid(tile)

    assert seen_in_store == [True]


def test_download_logged(tile, transport, pipeline, caplog):
    transport.responses[DOWNLOAD_URL] = ARCHIVE

    with caplog.at_level(logging.INFO, logger="domain.elevation.services"):
        pipeline.load_grid(tile)

    assert f"retrieving {DOWNLOAD_URL}" in caplog.text
    assert f"Written 8 bytes to {FILENAME}" in caplog.text


# ===========================================================================
# Error propagation (no retry)
# ===========================================================================
def test_network_error_propagates_and_nothing_saved(tile, store, transport, pipeline):
    transport.responses[DOWNLOAD_URL] = NetworkError(DOWNLOAD_URL, "timed out")

    with pytest.raises(NetworkError, match="timed out"):
        pipeline.load_grid(tile)

    assert transport.calls == [DOWNLOAD_URL]
    assert store.saves == []


def test_storage_read_error_propagates_without_fetch(tile, transport, decompressor):
    store = FakeStore(load_error=StorageError(FILENAME, "permission denied"))
    pipeline = ArchivePipeline(store, transport, decompressor)

    with pytest.raises(StorageError, match="permission denied"):
        pipeline.load_grid(tile)

    assert transport.calls == []


def test_storage_write_error_is_fatal(tile, decompressor):
    store = FakeStore(save_error=StorageError(FILENAME, "disk full"))
    transport = FakeTransport({DOWNLOAD_URL: ARCHIVE})
    pipeline = ArchivePipeline(store, transport, decompressor)

    with pytest.raises(StorageError, match="disk full"):
        pipeline.load_grid(tile)

    assert decompressor.calls == 0


def test_tile_without_url_cannot_be_downloaded(pipeline, transport):
    tile = Tile.at(tile_address(0.5, -29.5), None)

    with pytest.raises(ElevationError, match="no download URL") as exc_info:
        pipeline.load_grid(tile)

    assert type(exc_info.value) is ElevationError
    assert transport.calls == []


# ===========================================================================
# Permissive decompression failure
# ===========================================================================
def test_decompression_failure_yields_empty_contents(tile, store, caplog):
    store.files[FILENAME] = b"garbage"
    decompressor = PassthroughDecompressor(corrupt=(b"garbage",))
    pipeline = ArchivePipeline(store, FakeTransport(), decompressor)

    with caplog.at_level(logging.ERROR, logger="domain.elevation.services"):
        contents = pipeline.load_grid(tile)

    assert contents == b""
    assert f"Error loading archive {FILENAME}" in caplog.text
