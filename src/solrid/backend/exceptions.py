"""Backend-specific exceptions."""


class BackendError(Exception):
    """Base exception for search backend errors."""


class ConnectionError(BackendError):
    """Raised when the backend cannot be reached or is not initialized."""


class QueryError(BackendError):
    """Raised when a request to the backend fails."""


class HandlerNotFoundError(BackendError):
    """Raised when no request handler is mapped to an operation."""
