"""Integration test fixtures — OpenSearch backend with seeded postal codes.

Expects a backend listening on localhost:9200, e.g.:
    docker run -p 9200:9200 -e discovery.type=single-node \
        -e DISABLE_SECURITY_PLUGIN=true opensearchproject/opensearch:2

The test index is recreated once per session.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
import pytest

from cpsearch.adapters.opensearch.adapter import OpenSearchAdapter

HOST = "http://localhost:9200"
INDEX = "test-postal-codes"

SEED_DOCUMENTS: list[dict[str, Any]] = [
    {
        "id": "seed-roma-sur",
        "ciudad": "Ciudad de México",
        "colonia": "Roma Sur",
        "cp": "06760",
        "delegacion": "Cuauhtémoc",
        "location": {"lat": 19.4051, "lon": -99.1608},
    },
    {
        "id": "seed-condesa",
        "ciudad": "Ciudad de México",
        "colonia": "Condesa",
        "cp": "06140",
        "delegacion": "Cuauhtémoc",
        "location": {"lat": 19.4113, "lon": -99.1733},
    },
    {
        "id": "seed-roma-norte",
        "ciudad": "Ciudad de México",
        "colonia": "Roma Norte",
        "cp": "06700",
        "delegacion": "Cuauhtémoc",
        "location": {"lat": 19.4194, "lon": -99.1617},
    },
    {
        "id": "seed-del-valle",
        "ciudad": "Ciudad de México",
        "colonia": "Del Valle Centro",
        "cp": "03100",
        "delegacion": "Benito Juárez",
        "location": {"lat": 19.3872, "lon": -99.1663},
    },
]


def _wait_for_service(url: str, timeout: float = 60.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=10)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


async def _seed_opensearch(host: str = HOST, index: str = INDEX) -> None:
    async with httpx.AsyncClient(base_url=host, timeout=30) as client:
        await client.delete(f"/{index}", params={"ignore_unavailable": "true"})

    adapter = OpenSearchAdapter(hosts=[host], index=index)
    await adapter.initialize()
    try:
        await adapter.ensure_index()
    finally:
        await adapter.shutdown()

    async with httpx.AsyncClient(base_url=host, timeout=30) as client:
        for doc in SEED_DOCUMENTS:
            resp = await client.put(f"/{index}/_doc/{doc['id']}", json=doc)
            resp.raise_for_status()
        await client.post(f"/{index}/_refresh")


@pytest.fixture
def index_name() -> str:
    return INDEX


@pytest.fixture
def refresh_index(opensearch_ready: str):
    """Callable that makes recent writes visible to search."""

    def _refresh() -> None:
        httpx.post(f"{opensearch_ready}/{INDEX}/_refresh", timeout=30).raise_for_status()

    return _refresh


@pytest.fixture(scope="session")
def opensearch_ready() -> str:
    """Ensure OpenSearch is running and seeded."""
    if not _wait_for_service(HOST, timeout=10.0):
        pytest.skip(f"OpenSearch not available at {HOST}")
    asyncio.run(_seed_opensearch())
    return HOST


@pytest.fixture
async def adapter(opensearch_ready: str):
    a = OpenSearchAdapter(hosts=[opensearch_ready], index=INDEX)
    await a.initialize()
    yield a
    await a.shutdown()
