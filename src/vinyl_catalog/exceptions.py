"""Custom exceptions for the vinyl catalog."""

from typing import Optional


class VinylCatalogError(Exception):
    """Base exception for vinyl catalog errors."""
    pass


class ConfigurationError(VinylCatalogError):
    """Raised when there's an error in configuration."""
    pass


class LookupClientError(VinylCatalogError):
    """Base exception for failures talking to the Discogs API."""
    pass


class LookupHttpError(LookupClientError):
    """Raised when the Discogs API answers with a non-success status."""

    def __init__(self, status: int, status_text: str = "", message: str = ""):
        self.status = status
        self.status_text = status_text or ""
        self.message = message or ""
        super().__init__(
            f"Discogs API error: {self.status} {self.status_text}. {self.message}".rstrip()
        )


class LookupTransportError(LookupClientError):
    """Raised when a request could not complete (DNS, connection, timeout)."""
    pass


class LookupResponseError(LookupClientError):
    """Raised when a successful response carries a body that is not JSON."""
    pass


class NotFoundError(VinylCatalogError):
    """Raised when a record id is not present in the collection."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Record not found: {record_id}")


class PersistenceError(VinylCatalogError):
    """Raised when the collection could not be written to the backing store."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
