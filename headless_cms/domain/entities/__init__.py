"""Domain entities (immutable collection schema types)."""

from headless_cms.domain.entities.collection import (
    CollectionConfig,
    CollectionKind,
    ComponentConfig,
    DynamicZoneConfig,
    EnumerationOption,
    Field,
    RelationConfig,
    RelationType,
    validate_slug,
)

__all__ = [
    "CollectionConfig",
    "CollectionKind",
    "ComponentConfig",
    "DynamicZoneConfig",
    "EnumerationOption",
    "Field",
    "RelationConfig",
    "RelationType",
    "validate_slug",
]
