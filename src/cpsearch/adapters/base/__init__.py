"""Base adapter interface — Abstract class for search backend connectors."""

from cpsearch.adapters.base.adapter import SearchAdapter

__all__ = ["SearchAdapter"]
