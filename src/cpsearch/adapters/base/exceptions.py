"""Adapter-specific exceptions."""


class AdapterError(Exception):
    """Base exception for adapter errors."""


class ConnectionError(AdapterError):
    """Raised when the adapter cannot connect to the search backend."""


class DocumentNotFoundError(AdapterError):
    """Raised when a requested document does not exist."""


class QueryError(AdapterError):
    """Raised when a search, read or write request fails."""


class EmptyQueryError(AdapterError):
    """Raised when a search term is empty or only whitespace.

    This is the one condition callers are expected to recover from; it is
    raised before any request reaches the backend.
    """


class ConfigurationError(AdapterError):
    """Raised when adapter configuration is invalid."""


class IndexCreationError(AdapterError):
    """Raised when the backend does not acknowledge index creation."""
