"""Root pytest configuration for all tests.

Provides in-memory fakes for the elevation ports so domain tests never touch
disk or network. Infrastructure tests use ``tmp_path`` and mocked sessions.
"""

from __future__ import annotations

import pytest

from domain.elevation.engine import ElevationEngine
from domain.elevation.services import ArchivePipeline
from tests.conftest_utils import (
    FakeResolver,
    FakeStore,
    FakeTransport,
    PassthroughDecompressor,
)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def decompressor() -> PassthroughDecompressor:
    return PassthroughDecompressor()


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def pipeline(
    store: FakeStore,
    transport: FakeTransport,
    decompressor: PassthroughDecompressor,
) -> ArchivePipeline:
    return ArchivePipeline(store=store, transport=transport, decompressor=decompressor)


@pytest.fixture
def engine(resolver: FakeResolver, pipeline: ArchivePipeline) -> ElevationEngine:
    return ElevationEngine(resolver, pipeline)
