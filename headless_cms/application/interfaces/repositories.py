"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from headless_cms.application.dtos.content import (
        DocumentRef,
        PublicPermissions,
        StoredDocument,
    )
    from headless_cms.domain.entities.collection import CollectionConfig


# Schema registry interface
class ICollectionSchemaRepository(Protocol):
    """Protocol for the schema registry (CollectionConfig records keyed by slug)."""

    async def get(self, slug: str) -> CollectionConfig | None:
        """Return the collection config for slug, or None if absent."""

    async def get_for_deletion(self, slug: str) -> CollectionConfig | None:
        """Like get, but malformed field entries are dropped instead of failing."""

    async def delete(self, slug: str) -> None:
        """Delete the collection config. Idempotent if already missing."""

    async def list_all(self) -> list[CollectionConfig]:
        """Return all collection configs ordered by label."""


# Content document store interface
class IContentDocumentRepository(Protocol):
    """Protocol for the content document store."""

    batch_limit: int
    """Maximum number of deletes accepted in one atomic batch_delete call."""

    async def list_all(self, collection: str) -> list[StoredDocument]:
        """Return every document in collection (reference + full field map)."""

    async def batch_delete(self, refs: list[DocumentRef]) -> None:
        """Atomically delete refs (at most batch_limit). Raises on failure."""


# Public permission registry interface
class IPublicPermissionRepository(Protocol):
    """Protocol for per-collection public API permission flags."""

    async def get(self, slug: str) -> PublicPermissions:
        """Return stored flags merged over closed defaults."""

    async def update(self, slug: str, permissions: PublicPermissions) -> None:
        """Persist flags (merge into any existing record)."""

    async def delete(self, slug: str) -> None:
        """Delete the permission record. Idempotent if already missing."""
