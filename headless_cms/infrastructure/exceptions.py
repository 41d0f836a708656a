"""Infrastructure exceptions for asset and document store operations.

Store errors extend CmsException so presentation can map them
to HTTP responses consistently.
"""

from headless_cms.domain.exceptions import CmsException


class AssetStoreException(CmsException):
    """Base exception for asset store operations."""


class AssetDeleteError(AssetStoreException):
    """A bulk or single asset deletion call failed as a whole."""

    def __init__(self, public_ids: list[str], reason: str) -> None:
        super().__init__(
            f"Failed to delete {len(public_ids)} asset(s): {reason}",
            "ASSET_DELETE_ERROR",
            {"public_ids": list(public_ids), "reason": reason},
        )
        self.public_ids = list(public_ids)
        self.reason = reason


class AssetStoreConfigError(AssetStoreException):
    """Asset backend is missing credentials or is unknown."""

    def __init__(self, backend: str, reason: str) -> None:
        super().__init__(
            f"Asset store '{backend}' is not configured: {reason}",
            "ASSET_STORE_CONFIG_ERROR",
            {"backend": backend, "reason": reason},
        )


class DocumentStoreError(CmsException):
    """Firestore request failed (read, list, or commit)."""

    def __init__(self, operation: str, reason: str, status_code: int | None = None) -> None:
        details: dict = {"operation": operation, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"Document store {operation} failed",
            "DOCUMENT_STORE_ERROR",
            details,
        )
        self.status_code = status_code
