"""Collection use cases: cascading deletion."""

from headless_cms.application.use_cases.collections.delete_collection import (
    CollectionDeletionService,
)

__all__ = ["CollectionDeletionService"]
