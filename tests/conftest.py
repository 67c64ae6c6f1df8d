"""Shared test fixtures and configuration."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from cpsearch.adapters.base.adapter import SearchAdapter
from cpsearch.config.settings import Settings
from cpsearch.models.document import Document, Location


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        backend={"index": "test-postal-codes", "create_index_on_startup": False},
        observability={"log_format": "console"},
    )


@pytest.fixture
def mock_adapter() -> AsyncMock:
    """An adapter double whose coroutine methods are AsyncMocks."""
    return AsyncMock(spec=SearchAdapter)


@pytest.fixture
def roma_norte() -> Document:
    return Document(
        id="6a9f72f5-eb28-4be4-a9d2-8f328d938123",
        ciudad="Ciudad de México",
        colonia="Roma Norte",
        cp="06700",
        delegacion="Cuauhtémoc",
        location=Location(lat=19.4194, lon=-99.1617),
    )


@pytest.fixture
def roma_sur() -> Document:
    return Document(
        id="0b3c2d8e-4f7a-4c1e-9d55-1f2e3a4b5c6d",
        ciudad="Ciudad de México",
        colonia="Roma Sur",
        cp="06760",
        delegacion="Cuauhtémoc",
        location=Location(lat=19.4051, lon=-99.1608),
    )
