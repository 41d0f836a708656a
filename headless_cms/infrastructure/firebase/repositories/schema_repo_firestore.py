"""Firestore-backed schema registry (implements ICollectionSchemaRepository)."""

from __future__ import annotations

import logging

from headless_cms.domain.entities.collection import SLUG_PATTERN, CollectionConfig
from headless_cms.domain.exceptions import ValidationException
from headless_cms.infrastructure.exceptions import DocumentStoreError
from headless_cms.infrastructure.firebase._rest_client import (
    DocumentSnapshot,
    FirestoreRESTClient,
)
from headless_cms.infrastructure.firebase.collections import COLLECTION_SCHEMAS

logger = logging.getLogger(__name__)


class FirestoreCollectionSchemaRepository:
    """CollectionConfig records stored in `_collections`, one document per slug."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_SCHEMAS)

    async def get(self, slug: str) -> CollectionConfig | None:
        """Return the collection config, or None if absent or slug is malformed.

        Raises:
            DocumentStoreError: Store failure or a stored record that does not parse.
        """
        doc = await self._fetch(slug)
        if doc is None:
            return None
        try:
            return CollectionConfig.from_dict(doc.to_dict(), slug=doc.id)
        except ValidationException as e:
            logger.error("Stored schema '%s' is invalid: %s", slug, e.message)
            raise DocumentStoreError("parse_schema", e.message) from e

    async def get_for_deletion(self, slug: str) -> CollectionConfig | None:
        """Return the collection config with malformed field entries dropped.

        A record whose fields are damaged still yields its slug, kind and
        well-formed media fields so it can be removed; the dropped entries are
        logged as a warning.

        Raises:
            DocumentStoreError: Store failure, or a slug or kind that does not parse.
        """
        doc = await self._fetch(slug)
        if doc is None:
            return None
        try:
            collection, problems = CollectionConfig.from_dict_lenient(doc.to_dict(), slug=doc.id)
        except ValidationException as e:
            logger.error("Stored schema '%s' is invalid: %s", slug, e.message)
            raise DocumentStoreError("parse_schema", e.message) from e
        if problems:
            logger.warning(
                "Stored schema '%s' has malformed fields, ignored for deletion: %s",
                slug,
                "; ".join(problems),
            )
        return collection

    async def _fetch(self, slug: str) -> DocumentSnapshot | None:
        if not SLUG_PATTERN.match(slug):
            logger.warning("Schema lookup with malformed slug %r treated as not found", slug)
            return None
        return await self._coll.document(slug).get()

    async def delete(self, slug: str) -> None:
        """Delete the schema record. Idempotent if already missing."""
        await self._coll.document(slug).delete()

    async def list_all(self) -> list[CollectionConfig]:
        """Return every parseable collection config ordered by label.

        Records that fail to parse are logged and skipped.
        """
        configs: list[CollectionConfig] = []
        async for snapshot in self._coll.stream():
            try:
                configs.append(CollectionConfig.from_dict(snapshot.to_dict(), slug=snapshot.id))
            except ValidationException as e:
                logger.warning("Skipping invalid schema '%s': %s", snapshot.id, e.message)
        configs.sort(key=lambda c: (c.label.lower(), c.slug))
        return configs
