"""OpenSearch adapter — Postal-code index on OpenSearch (v2+).

OpenSearch is an AWS-maintained fork of Elasticsearch with a compatible
query DSL and API surface, so this adapter also works against
Elasticsearch clusters that accept typeless requests.  It uses the async
``opensearch-py`` client.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from cpsearch.adapters.base.adapter import AdapterHealth, SearchAdapter
from cpsearch.adapters.base.exceptions import (
    ConfigurationError,
    ConnectionError,
    DocumentNotFoundError,
    IndexCreationError,
    QueryError,
)
from cpsearch.adapters.opensearch.schema import DEFAULT_SIZE, INDEX_BODY, build_term_query
from cpsearch.models.document import Document, DocumentCreate, DocumentUpdate

logger = logging.getLogger(__name__)


def _is_not_found(exc: Exception) -> bool:
    return "NotFoundError" in type(exc).__name__ or getattr(exc, "status_code", None) == 404


class OpenSearchAdapter(SearchAdapter):
    """Search adapter for OpenSearch (v2+).

    Args:
        hosts: List of OpenSearch node URLs.
        index: Name of the postal-code index.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        verify_certs: Whether to verify TLS certificates.
        size: Maximum number of hits returned by ``search``.
        **kwargs: Additional keyword arguments forwarded to ``AsyncOpenSearch``.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        index: str = "postal_codes",
        username: str | None = None,
        password: str | None = None,
        verify_certs: bool = False,
        size: int = DEFAULT_SIZE,
        **kwargs: Any,
    ) -> None:
        self._hosts = hosts or ["http://localhost:9200"]
        self._index = index
        self._username = username
        self._password = password
        self._verify_certs = verify_certs
        self._size = size
        self._extra_kwargs = kwargs
        self._client: Any = None

    @property
    def name(self) -> str:
        return "opensearch"

    @property
    def index(self) -> str:
        return self._index

    async def initialize(self) -> None:
        """Create and verify the ``AsyncOpenSearch`` client."""
        try:
            from opensearchpy import AsyncOpenSearch
        except ImportError as e:
            raise ConfigurationError(
                "opensearch-py package is required.  Install with: pip install 'opensearch-py[async]'"
            ) from e

        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "verify_certs": self._verify_certs,
            "ssl_show_warn": False,
        }
        if self._username and self._password:
            client_kwargs["http_auth"] = (self._username, self._password)

        client_kwargs.update(self._extra_kwargs)

        try:
            self._client = AsyncOpenSearch(**client_kwargs)
            info = await self._client.info()
            version = info.get("version", {}).get("number", "unknown")
            cluster = info.get("cluster_name", "unknown")
            logger.info("Connected to OpenSearch cluster: %s (v%s)", cluster, version)
        except Exception as e:
            raise ConnectionError(f"Failed to connect to OpenSearch: {e}") from e

    async def shutdown(self) -> None:
        """Close the OpenSearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    def _require_client(self) -> Any:
        if not self._client:
            raise ConnectionError("OpenSearch client not initialized.")
        return self._client

    # ── Index ────────────────────────────────────────────────────────────

    async def ensure_index(self) -> bool:
        """Create the postal-code index with the autocomplete schema if missing."""
        client = self._require_client()
        try:
            if await client.indices.exists(index=self._index):
                logger.debug("Index '%s' already exists", self._index)
                return False
            response = await client.indices.create(index=self._index, body=INDEX_BODY)
        except Exception as e:
            raise QueryError(f"Failed to create index '{self._index}': {e}") from e

        if not response.get("acknowledged", False):
            raise IndexCreationError(f"Creation of index '{self._index}' was not acknowledged")

        logger.info("Created index '%s'", self._index)
        return True

    async def ping(self) -> str:
        """Describe the backend's response code and version."""
        client = self._require_client()
        try:
            info = await client.info()
        except Exception as e:
            raise ConnectionError(f"OpenSearch ping failed: {e}") from e

        # info() raises on any non-2xx status
        version = info.get("version", {}).get("number", "unknown")
        cluster = info.get("cluster_name", "OpenSearch")
        return f"{cluster} returned with code 200 and version {version}"

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, term: str) -> list[Document]:
        """Execute a term search and map the hits to ``Document``."""
        body = build_term_query(term, size=self._size)
        client = self._require_client()

        try:
            start = time.monotonic()
            response = await client.search(index=self._index, body=body)
            took_ms = int((time.monotonic() - start) * 1000)
        except Exception as e:
            raise QueryError(f"OpenSearch query failed: {e}") from e

        hits = response.get("hits", {}).get("hits", [])
        logger.debug("Search %r returned %d hits in %d ms", term, len(hits), took_ms)
        try:
            return [Document.model_validate(hit.get("_source", {})) for hit in hits]
        except ValidationError as e:
            raise QueryError(f"Malformed document in search results: {e}") from e

    # ── Documents ────────────────────────────────────────────────────────

    async def read_document(self, doc_id: str) -> dict[str, Any]:
        """Return the stored ``_source`` of a document."""
        client = self._require_client()
        try:
            response = await client.get(index=self._index, id=doc_id)
        except Exception as e:
            if _is_not_found(e):
                raise DocumentNotFoundError(f"Document '{doc_id}' not found.") from e
            raise QueryError(f"Failed to fetch document: {e}") from e
        return dict(response.get("_source", {}))

    async def create_document(self, doc: DocumentCreate) -> str:
        """Index ``doc`` under a new UUID4 identifier."""
        client = self._require_client()
        doc_id = str(uuid.uuid4())
        document = Document(id=doc_id, **doc.model_dump())
        try:
            response = await client.index(index=self._index, id=doc_id, body=document.model_dump())
        except Exception as e:
            raise QueryError(f"Failed to index document: {e}") from e
        logger.info("Created document %s", doc_id)
        return response.get("_id", doc_id)

    async def update_document(self, doc_id: str, changes: DocumentUpdate) -> str:
        """Write the fields present in ``changes`` onto an existing document."""
        client = self._require_client()
        fields = changes.model_dump(exclude_unset=True, exclude_none=True)
        try:
            if not fields:
                if not await client.exists(index=self._index, id=doc_id):
                    raise DocumentNotFoundError(f"Document '{doc_id}' not found.")
                return doc_id
            response = await client.update(index=self._index, id=doc_id, body={"doc": fields})
        except DocumentNotFoundError:
            raise
        except Exception as e:
            if _is_not_found(e):
                raise DocumentNotFoundError(f"Document '{doc_id}' not found.") from e
            raise QueryError(f"Failed to update document: {e}") from e
        logger.info("Updated document %s (%s)", doc_id, ", ".join(sorted(fields)))
        return response.get("_id", doc_id)

    async def delete_document(self, doc_id: str) -> bool:
        """Delete a document; a missing document is reported, not raised."""
        client = self._require_client()
        try:
            response = await client.delete(index=self._index, id=doc_id)
        except Exception as e:
            if _is_not_found(e):
                return False
            raise QueryError(f"Failed to delete document: {e}") from e
        return response.get("result") == "deleted"

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> AdapterHealth:
        """Check OpenSearch cluster health."""
        if not self._client:
            return AdapterHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            health = await self._client.cluster.health()
            latency_ms = int((time.monotonic() - start) * 1000)

            status_map = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}

            return AdapterHealth(
                status=status_map.get(health.get("status", "red"), "unhealthy"),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
            )
        except Exception as e:
            return AdapterHealth(status="unhealthy", message=str(e))
