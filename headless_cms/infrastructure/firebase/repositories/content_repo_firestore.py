"""Firestore-backed content document store (implements IContentDocumentRepository)."""

from __future__ import annotations

from headless_cms.application.dtos.content import DocumentRef, StoredDocument
from headless_cms.infrastructure.firebase._rest_client import (
    MAX_BATCH_WRITES,
    FirestoreRESTClient,
)


class FirestoreContentDocumentRepository:
    """Content documents live in the Firestore collection named by the schema."""

    def __init__(self, client: FirestoreRESTClient, batch_limit: int = MAX_BATCH_WRITES) -> None:
        if not 1 <= batch_limit <= MAX_BATCH_WRITES:
            raise ValueError(f"batch_limit must be between 1 and {MAX_BATCH_WRITES}")
        self._client = client
        self.batch_limit = batch_limit

    async def list_all(self, collection: str) -> list[StoredDocument]:
        """Return every document of collection with its full field map (all pages)."""
        coll = self._client.collection(collection)
        return [
            StoredDocument(ref=DocumentRef(collection, snapshot.id), data=snapshot.to_dict())
            async for snapshot in coll.stream()
        ]

    async def batch_delete(self, refs: list[DocumentRef]) -> None:
        """Delete refs in one atomic commit.

        Raises:
            ValueError: More than batch_limit refs.
            DocumentStoreError: Commit rejected; none of the deletes applied.
        """
        if len(refs) > self.batch_limit:
            raise ValueError(
                f"batch_delete accepts at most {self.batch_limit} refs, got {len(refs)}"
            )
        batch = self._client.batch()
        for ref in refs:
            batch.delete(self._client.collection(ref.collection).document(ref.id))
        await batch.commit()
