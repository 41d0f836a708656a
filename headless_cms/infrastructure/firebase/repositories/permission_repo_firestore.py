"""Firestore-backed public permission registry (implements IPublicPermissionRepository)."""

from __future__ import annotations

from headless_cms.application.dtos.content import PublicPermissions
from headless_cms.infrastructure.firebase._rest_client import FirestoreRESTClient
from headless_cms.infrastructure.firebase.collections import COLLECTION_PERMISSIONS


class FirestorePublicPermissionRepository:
    """Flags stored in `_permissions/{slug}`."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_PERMISSIONS)

    async def get(self, slug: str) -> PublicPermissions:
        """Return stored flags merged over the closed defaults."""
        doc = await self._coll.document(slug).get()
        return PublicPermissions.from_dict(doc.to_dict() if doc else None)

    async def update(self, slug: str, permissions: PublicPermissions) -> None:
        """Write all flags, keeping any other stored fields (merge)."""
        await self._coll.document(slug).set(permissions.to_dict(), merge=True)

    async def delete(self, slug: str) -> None:
        """Delete the record. Idempotent if already missing."""
        await self._coll.document(slug).delete()
