"""Firestore collection names used by the CMS itself.

Firestore has no DDL or migrations. Collections are created automatically
when the first document is written. Content collections are named after
their schema slug; the names below are the reserved system collections.

Example:
    from headless_cms.infrastructure.firebase.client import get_firestore_client
    from headless_cms.infrastructure.firebase.collections import COLLECTION_SCHEMAS

    db = get_firestore_client()
    if db:
        snapshot = await db.collection(COLLECTION_SCHEMAS).document(slug).get()
"""

# Schema registry: one CollectionConfig record per slug
COLLECTION_SCHEMAS = "_collections"

# Public API permission flags: one record per slug
COLLECTION_PERMISSIONS = "_permissions"
