"""Domain exceptions for the headless CMS.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class CmsException(Exception):
    """Base exception for all CMS application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body: error code, message and details."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CmsException):
    """Raised when input validation fails (e.g. unknown field type or bad slug)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(CmsException):
    """Raised when authentication fails (missing, malformed, or rejected token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(CmsException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'collection', 'asset').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class CollectionDeletionError(CmsException):
    """Raised when cascading deletion aborts at a fatal stage.

    The public message is generic; stage and reason stay in details for
    logging. The schema record is left in place whenever the failure
    happened before it was removed, so the whole operation can be retried.
    """

    def __init__(self, slug: str, stage: str, reason: str) -> None:
        """Initialize with collection slug, failed stage, and reason.

        Args:
            slug: Collection being deleted.
            stage: Stage that failed (e.g. 'enumerate_documents').
            reason: Underlying error text.
        """
        super().__init__(
            "Failed to delete schema and content",
            "INTERNAL_ERROR",
            {"slug": slug, "stage": stage, "reason": reason},
        )
        self.slug = slug
        self.stage = stage
        self.reason = reason


class DocumentBatchDeleteError(CmsException):
    """Raised when one atomic batch of document deletes fails to commit.

    Batches before batch_index are committed; the failed batch and every
    later batch are not.
    """

    def __init__(self, batch_index: int, committed_batches: int, reason: str) -> None:
        """Initialize with the failed batch position and reason.

        Args:
            batch_index: Zero-based index of the batch that failed.
            committed_batches: Number of batches committed before the failure.
            reason: Underlying error text.
        """
        super().__init__(
            f"Document batch {batch_index} failed to commit",
            "DOCUMENT_BATCH_DELETE_ERROR",
            {
                "batch_index": batch_index,
                "committed_batches": committed_batches,
                "reason": reason,
            },
        )
        self.batch_index = batch_index
        self.committed_batches = committed_batches
        self.reason = reason
