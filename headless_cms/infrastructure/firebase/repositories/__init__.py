"""Firestore-backed repository implementations."""

from headless_cms.infrastructure.firebase.repositories.content_repo_firestore import (
    FirestoreContentDocumentRepository,
)
from headless_cms.infrastructure.firebase.repositories.permission_repo_firestore import (
    FirestorePublicPermissionRepository,
)
from headless_cms.infrastructure.firebase.repositories.schema_repo_firestore import (
    FirestoreCollectionSchemaRepository,
)

__all__ = [
    "FirestoreCollectionSchemaRepository",
    "FirestoreContentDocumentRepository",
    "FirestorePublicPermissionRepository",
]
