"""Integration test fixtures — Docker-based Solr with mock catalogue records.

Expects Solr to be running with a ``documents`` core, e.g.:
    docker run -d -p 8983:8983 solr:9 solr-precreate documents

Seed data is automatically loaded on first use.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from typing import Any

import httpx
import pytest

SOLR_HOST = "http://localhost:8983/solr"
SOLR_COLLECTION = "documents"

MOCK_RECORDS: list[dict[str, Any]] = [
    {
        "id": "AC00012345",
        "marc_001": "990000123450204517",
        "title": "Geschichte der österreichischen Arbeiterbewegung",
    },
    {
        "id": "AC00067890",
        "marc_001": "990000678900204517",
        "title": "Gewerkschaften und Sozialpartnerschaft in Österreich",
    },
    {
        "id": "local-0003",
        "marc_001": 'quoted "id" 42',
        "title": "Arbeitsrecht im Wandel",
    },
]


def _wait_for_service(url: str, timeout: float = 120.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=30)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


async def _seed_solr(host: str = SOLR_HOST, collection: str = SOLR_COLLECTION) -> None:
    async with httpx.AsyncClient(base_url=host, timeout=30) as client:
        for field in [
            {"name": "title", "type": "text_general", "stored": True, "multiValued": False},
            {"name": "marc_001", "type": "string", "stored": True},
        ]:
            with contextlib.suppress(httpx.HTTPError):
                await client.post(f"/{collection}/schema", json={"add-field": field})

        await client.post(
            f"/{collection}/update",
            json={"delete": {"query": "*:*"}},
            params={"commit": "true"},
        )
        resp = await client.post(
            f"/{collection}/update",
            json=MOCK_RECORDS,
            params={"commit": "true"},
        )
        resp.raise_for_status()


@pytest.fixture(scope="session")
def solr_ready() -> str:
    """Ensure Solr is running and seeded."""
    if not _wait_for_service(f"{SOLR_HOST}/{SOLR_COLLECTION}/admin/ping", timeout=30.0):
        pytest.skip(f"Solr not available at {SOLR_HOST}")
    asyncio.run(_seed_solr())
    return SOLR_HOST
