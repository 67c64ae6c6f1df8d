"""Status endpoints — Backend liveness check and health."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from cpsearch.adapters.base.adapter import AdapterHealth, SearchAdapter
from cpsearch.api.deps import get_adapter

router = APIRouter()


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Backend Ping",
    description="Probe the search backend and report its response code and version.",
)
async def ping(adapter: SearchAdapter = Depends(get_adapter)) -> str:
    return await adapter.ping()


@router.get(
    "/health",
    response_model=AdapterHealth,
    summary="Backend Health",
    description="Cluster health of the search backend with the latency of the check.",
)
async def health(adapter: SearchAdapter = Depends(get_adapter)) -> AdapterHealth:
    return await adapter.health_check()
