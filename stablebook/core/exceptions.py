"""
Exception hierarchy for the Stablebook application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class StablebookException(Exception):
    """Base exception for all Stablebook application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(StablebookException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class RecordNotFoundError(StablebookException):
    """Raised when a record does not exist or is not owned by the tenant."""

    def __init__(self, entity: str, record_id: int, details: dict[str, Any] | None = None) -> None:
        """
        Initialize not found error.

        Args:
            entity: Entity name (horse, visit, vaccine, pregnancy)
            record_id: Local identifier that was looked up
            details: Additional context
        """
        details = details or {}
        details.update({"entity": entity, "record_id": record_id})
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity.capitalize()} not found", details)


class UnauthorizedError(StablebookException):
    """Raised when the tenant identifier header is missing."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ImageStorageError(StablebookException):
    """Raised when an image cannot be stored or removed."""

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if reference:
            details["reference"] = reference
        super().__init__(message, details)


class RemoteStoreError(StablebookException):
    """Raised when a remote document store operation fails."""

    def __init__(
        self,
        message: str,
        collection: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize remote store error.

        Args:
            message: Error message
            collection: Remote collection involved
            operation: Operation that failed (fetch, add, update, delete)
            details: Additional context
        """
        details = details or {}
        if collection:
            details["collection"] = collection
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class AssistantUnavailableError(StablebookException):
    """Raised when the chat assistant cannot produce a reply."""

    pass
