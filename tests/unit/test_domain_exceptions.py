"""Tests for domain and infrastructure exceptions (error_code, message, details)."""

from headless_cms.domain.exceptions import (
    AuthenticationException,
    CmsException,
    CollectionDeletionError,
    DocumentBatchDeleteError,
    ResourceNotFoundException,
    ValidationException,
)
from headless_cms.infrastructure.exceptions import (
    AssetDeleteError,
    AssetStoreConfigError,
    DocumentStoreError,
)


def test_cms_exception_default_error_code() -> None:
    """Base CmsException uses class name as error_code when not provided."""
    exc = CmsException("Something failed")
    assert exc.error_code == "CmsException"
    assert exc.to_dict() == {"error": "CmsException", "message": "Something failed", "details": {}}


def test_validation_exception_carries_field() -> None:
    exc = ValidationException("bad", field="slug")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "slug"}


def test_authentication_exception() -> None:
    assert AuthenticationException().error_code == "AUTHENTICATION_ERROR"


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("collection", "posts")
    assert exc.message == "collection not found: posts"
    assert exc.error_code == "RESOURCE_NOT_FOUND"


def test_collection_deletion_error_message_is_generic() -> None:
    exc = CollectionDeletionError("posts", "delete_documents", "quota exceeded")
    assert exc.message == "Failed to delete schema and content"
    assert exc.error_code == "INTERNAL_ERROR"
    assert exc.stage == "delete_documents"
    assert exc.details["reason"] == "quota exceeded"


def test_document_batch_delete_error() -> None:
    exc = DocumentBatchDeleteError(2, 2, "aborted")
    assert exc.error_code == "DOCUMENT_BATCH_DELETE_ERROR"
    assert (exc.batch_index, exc.committed_batches, exc.reason) == (2, 2, "aborted")


def test_infrastructure_errors_are_cms_exceptions() -> None:
    for exc in (
        AssetDeleteError(["a"], "timeout"),
        AssetStoreConfigError("s3", "no bucket"),
        DocumentStoreError("GET", "unavailable", 503),
    ):
        assert isinstance(exc, CmsException)
    assert "timeout" in AssetDeleteError(["a"], "timeout").message
