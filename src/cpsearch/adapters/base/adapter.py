"""Base search adapter — Abstract interface for the search backend connector.

The adapter is responsible for:
  1. Creating the index with the postal-code schema when it is missing
  2. Executing term searches and mapping hits to ``Document``
  3. Reading, creating, updating and deleting single documents
  4. Reporting liveness and health status

Adapters raise ``AdapterError`` subclasses and never terminate the process;
what happens to an error is decided by the caller's failure policy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from cpsearch.models.document import Document, DocumentCreate, DocumentUpdate


class AdapterHealth(BaseModel):
    """Health status of a search adapter."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class SearchAdapter(ABC):
    """Abstract base class for search backend adapters.

    A single instance is created at startup, initialized once and shared by
    every request; implementations must not keep per-request state.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'opensearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create the backend client and verify connectivity.

        Raises:
            ConnectionError: If the backend cannot be reached.
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Close connections and release resources."""

    @abstractmethod
    async def ensure_index(self) -> bool:
        """Create the configured index if it does not exist.

        Returns:
            True if the index was created, False if it already existed.

        Raises:
            IndexCreationError: If the backend does not acknowledge creation.
        """

    @abstractmethod
    async def ping(self) -> str:
        """Probe the backend and describe the response code and version."""

    @abstractmethod
    async def search(self, term: str) -> list[Document]:
        """Match ``term`` against all fields and return the sorted hits.

        Raises:
            EmptyQueryError: If ``term`` is empty or whitespace.
        """

    @abstractmethod
    async def read_document(self, doc_id: str) -> dict[str, Any]:
        """Return the stored payload of one document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """

    @abstractmethod
    async def create_document(self, doc: DocumentCreate) -> str:
        """Store ``doc`` under a freshly generated identifier and return it."""

    @abstractmethod
    async def update_document(self, doc_id: str, changes: DocumentUpdate) -> str:
        """Apply a partial update and return the document identifier.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """

    @abstractmethod
    async def delete_document(self, doc_id: str) -> bool:
        """Delete one document; return whether it existed."""

    @abstractmethod
    async def health_check(self) -> AdapterHealth:
        """Check the health of the search backend. Must not raise."""
