"""Application DTOs (plain dataclasses; no ORM or HTTP types)."""

from headless_cms.application.dtos.collection_deletion import (
    AssetDeletionWarning,
    CollectionDeletionResult,
)
from headless_cms.application.dtos.content import (
    DocumentRef,
    PublicPermissions,
    StoredDocument,
)

__all__ = [
    "AssetDeletionWarning",
    "CollectionDeletionResult",
    "DocumentRef",
    "PublicPermissions",
    "StoredDocument",
]
