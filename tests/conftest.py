"""Shared test fixtures and configuration."""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import AsyncMock

import pytest

from solrid.backend.connector import Connector
from solrid.backend.handlers import DefaultHandlerMap
from solrid.config.settings import Settings


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo handler and level changes made by setup_logging()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance that ignores any local .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        solr={"base_url": "http://solr.test:8983/solr", "collection": "biblio", "id_fields": "id, marc_001"},
    )


@pytest.fixture
def solr_response() -> dict[str, Any]:
    """Sample Solr JSON response for an identifier lookup."""
    return {
        "responseHeader": {"status": 0, "QTime": 2},
        "response": {
            "numFound": 1,
            "start": 0,
            "docs": [{"id": "AC01234567", "marc_001": "990001234", "title": "Die Arbeiterkammer"}],
        },
    }


@pytest.fixture
def executor(solr_response: dict[str, Any]) -> AsyncMock:
    """Executor double that returns ``solr_response``."""
    mock = AsyncMock()
    mock.execute.return_value = solr_response
    return mock


@pytest.fixture
def connector(executor: AsyncMock) -> Connector:
    return Connector(
        handler_map=DefaultHandlerMap.for_solr(),
        executor=executor,
        id_fields="id, marc_001",
    )
