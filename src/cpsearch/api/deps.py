"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from cpsearch.adapters.base.adapter import SearchAdapter

# Adapter instance (set during application lifespan or by tests)
_adapter: SearchAdapter | None = None


def set_adapter(adapter: SearchAdapter | None) -> None:
    """Set the adapter instance served by the API."""
    global _adapter
    _adapter = adapter


def get_adapter() -> SearchAdapter:
    """Get the search adapter serving the API.

    Raises:
        RuntimeError: If no adapter has been set.
    """
    if _adapter is None:
        raise RuntimeError("Search adapter not initialized. Is the server running?")
    return _adapter
