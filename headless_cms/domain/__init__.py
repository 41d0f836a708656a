"""Domain layer: entities, field type catalog, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from headless_cms.domain.entities import CollectionConfig, CollectionKind, Field
from headless_cms.domain.exceptions import (
    AuthenticationException,
    CmsException,
    CollectionDeletionError,
    DocumentBatchDeleteError,
    ResourceNotFoundException,
    ValidationException,
)
from headless_cms.domain.field_types import FIELD_TYPE_CONFIG, FieldCategory, FieldType

__all__ = [
    # Entities
    "CollectionConfig",
    "CollectionKind",
    "Field",
    # Field types
    "FIELD_TYPE_CONFIG",
    "FieldCategory",
    "FieldType",
    # Exceptions
    "AuthenticationException",
    "CmsException",
    "CollectionDeletionError",
    "DocumentBatchDeleteError",
    "ResourceNotFoundException",
    "ValidationException",
]
