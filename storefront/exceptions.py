"""Storefront exceptions.

Raised by the catalog service when a page cannot be produced. The fetch
client never raises these; it reports failures inside FetchResult.
"""

from typing import Any


class StorefrontError(Exception):
    """Base class for storefront exceptions."""

    error_code = "STOREFRONT_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize storefront error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(StorefrontError):
    """Raised when requested catalog data is absent or fails verification."""

    error_code = "NOT_FOUND"

    def __init__(self, resource: str, handle: str, reason: str | None = None) -> None:
        """Initialize not found error.

        Args:
            resource: Kind of resource (e.g., "Product", "Collection").
            handle: Handle that was requested.
            reason: Optional explanation for logs and clients.
        """
        message = f"{resource} '{handle}' not found"
        details: dict[str, Any] = {"resource": resource, "handle": handle}
        if reason:
            details["reason"] = reason
        super().__init__(message, details)
        self.resource = resource
        self.handle = handle


class CatalogUnavailableError(StorefrontError):
    """Raised when a listing page could not be loaded from upstream."""

    error_code = "CATALOG_UNAVAILABLE"

    def __init__(self, what: str, errors: list[str] | None = None) -> None:
        """Initialize catalog unavailable error.

        Args:
            what: What failed to load (e.g., "collections").
            errors: Upstream error messages.
        """
        super().__init__(
            f"Could not load {what}.",
            details={"errors": errors or []},
        )
