"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cpsearch import __version__
from cpsearch.adapters.base.adapter import SearchAdapter
from cpsearch.adapters.base.exceptions import AdapterError, DocumentNotFoundError, EmptyQueryError
from cpsearch.api.deps import set_adapter
from cpsearch.api.endpoints.documents import router as documents_router
from cpsearch.api.endpoints.status import router as status_router
from cpsearch.config.settings import Settings
from cpsearch.core.failure import FailurePolicy, failure_policy
from cpsearch.observability.logging import setup_logging

logger = logging.getLogger(__name__)

CORS_HEADERS = ["Origin", "Content-Type", "Accept"]


def build_adapter(settings: Settings) -> SearchAdapter:
    """Construct the search adapter described by ``settings.backend``."""
    from cpsearch.adapters.opensearch.adapter import OpenSearchAdapter

    backend = settings.backend
    return OpenSearchAdapter(
        hosts=[backend.entrypoint],
        index=backend.index,
        username=backend.username,
        password=backend.password,
        verify_certs=backend.verify_certs,
        size=backend.max_results,
    )


def create_app(
    settings: Settings | None = None,
    adapter: SearchAdapter | None = None,
    policy: FailurePolicy | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.
        adapter: Search adapter to serve. If None, one is built from settings
            and initialised during startup.
        policy: Failure policy for backend errors. If None, chosen from
            ``settings.fail_fast``.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        # CPSEARCH_CONFIG_FILE is set by the CLI; otherwise auto-detect cpsearch-config.yaml
        yaml_path = Path(os.environ.get("CPSEARCH_CONFIG_FILE", "cpsearch-config.yaml"))
        if yaml_path.exists():
            logger.info("Loading configuration from %s", yaml_path)
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    setup_logging(settings.observability)
    on_failure = policy or failure_policy(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting cpsearch v%s", __version__)

        owned = adapter is None
        active = adapter or build_adapter(settings)
        if owned:
            await active.initialize()
        if settings.backend.create_index_on_startup:
            try:
                await active.ensure_index()
            except Exception:
                if owned:
                    await active.shutdown()
                raise

        set_adapter(active)
        app.state.settings = settings
        app.state.adapter = active

        logger.info("cpsearch is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down cpsearch...")
        set_adapter(None)
        if owned:
            await active.shutdown()
        logger.info("cpsearch shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        description="Postal-code search and autocomplete over an OpenSearch index.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=CORS_HEADERS,
    )

    @app.exception_handler(EmptyQueryError)
    async def empty_query_handler(request: Request, exc: EmptyQueryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(DocumentNotFoundError)
    async def not_found_handler(request: Request, exc: DocumentNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(AdapterError)
    async def backend_error_handler(request: Request, exc: AdapterError) -> JSONResponse:
        logger.error("Backend error on %s %s: %s", request.method, request.url.path, exc)
        with contextlib.suppress(AdapterError):
            on_failure(exc)
        return JSONResponse(status_code=502, content={"detail": f"Search backend error: {exc!s}"})

    app.include_router(status_router)
    app.include_router(documents_router)

    return app
