"""Collect the asset identifiers referenced by a collection's documents.

Only fields typed MEDIA are consulted. A media value is either one
reference object or a list of them; each reference carries a publicId
naming the hosted asset. Truthy string or numeric publicIds are collected
(numbers as their string form); anything else is skipped without error,
since stored documents are never validated against their schema.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from headless_cms.application.dtos.content import StoredDocument
from headless_cms.domain.entities.collection import CollectionConfig

PUBLIC_ID_KEY = "publicId"


def _public_id(value: Any) -> str | None:
    if not isinstance(value, Mapping):
        return None
    public_id = value.get(PUBLIC_ID_KEY)
    if not public_id or isinstance(public_id, bool):
        return None
    if isinstance(public_id, str):
        return public_id
    if isinstance(public_id, int | float):
        return str(public_id)
    return None


def extract_media_public_ids(
    collection: CollectionConfig,
    documents: Iterable[StoredDocument],
) -> set[str]:
    """Return the set of asset ids referenced by media fields across documents.

    Args:
        collection: Schema whose media fields are inspected.
        documents: Stored documents of that collection.

    Returns:
        Unique public ids. Empty when the schema has no media fields or
        there are no documents.
    """
    fields = collection.media_fields
    if not fields:
        return set()

    ids: set[str] = set()
    for document in documents:
        for f in fields:
            value = document.data.get(f.name)
            if isinstance(value, list):
                for item in value:
                    public_id = _public_id(item)
                    if public_id:
                        ids.add(public_id)
            else:
                public_id = _public_id(value)
                if public_id:
                    ids.add(public_id)
    return ids
