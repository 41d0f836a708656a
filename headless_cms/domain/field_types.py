"""Field type catalog.

Closed set of field types a collection schema may declare, with static
metadata (label, description, semantic category). Shared by the media
reference extractor (only MEDIA matters) and the OpenAPI generator (full
type table).
"""

from dataclasses import dataclass
from enum import Enum


class FieldType(str, Enum):
    """Type tag of a schema field. Stored as the lowercase string value."""

    TEXT = "text"
    TEXTAREA = "textarea"
    RICHTEXT = "richtext"
    NUMBER = "number"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    EMAIL = "email"
    PASSWORD = "password"
    UID = "uid"
    JSON = "json"
    ENUMERATION = "enumeration"
    MEDIA = "media"
    RELATION = "relation"
    COMPONENT = "component"
    DYNAMICZONE = "dynamiczone"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid field type values as strings."""
        return [t.value for t in cls]


class FieldCategory(str, Enum):
    """Semantic grouping of field types."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    MEDIA = "media"
    RELATION = "relation"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class FieldTypeInfo:
    """Display metadata for one field type."""

    label: str
    description: str
    category: FieldCategory


FIELD_TYPE_CONFIG: dict[FieldType, FieldTypeInfo] = {
    FieldType.TEXT: FieldTypeInfo(
        "Short Text", "Small or long text like title or description", FieldCategory.TEXT
    ),
    FieldType.TEXTAREA: FieldTypeInfo("Long Text", "Multi-line text area", FieldCategory.TEXT),
    FieldType.RICHTEXT: FieldTypeInfo(
        "Rich Text", "WYSIWYG text editor with formatting", FieldCategory.TEXT
    ),
    FieldType.NUMBER: FieldTypeInfo("Number", "Integer number", FieldCategory.NUMBER),
    FieldType.DECIMAL: FieldTypeInfo("Decimal", "Floating point number", FieldCategory.NUMBER),
    FieldType.BOOLEAN: FieldTypeInfo("Boolean", "True or false toggle", FieldCategory.BOOLEAN),
    FieldType.DATE: FieldTypeInfo("Date", "Date picker (no time)", FieldCategory.DATE),
    FieldType.DATETIME: FieldTypeInfo("DateTime", "Date and time picker", FieldCategory.DATE),
    FieldType.TIME: FieldTypeInfo("Time", "Time picker only", FieldCategory.DATE),
    FieldType.EMAIL: FieldTypeInfo("Email", "Email field with validation", FieldCategory.TEXT),
    FieldType.PASSWORD: FieldTypeInfo("Password", "Hashed password field", FieldCategory.TEXT),
    FieldType.UID: FieldTypeInfo(
        "UID / Slug", "Auto-generated unique identifier", FieldCategory.TEXT
    ),
    FieldType.JSON: FieldTypeInfo("JSON", "Raw JSON data", FieldCategory.ADVANCED),
    FieldType.ENUMERATION: FieldTypeInfo(
        "Enumeration", "List of predefined values", FieldCategory.ADVANCED
    ),
    FieldType.MEDIA: FieldTypeInfo("Media", "Images, videos, or files", FieldCategory.MEDIA),
    FieldType.RELATION: FieldTypeInfo(
        "Relation", "Reference to other content", FieldCategory.RELATION
    ),
    FieldType.COMPONENT: FieldTypeInfo(
        "Component", "Reusable group of fields", FieldCategory.ADVANCED
    ),
    FieldType.DYNAMICZONE: FieldTypeInfo(
        "Dynamic Zone", "Flexible content area", FieldCategory.ADVANCED
    ),
}


def category_of(field_type: FieldType) -> FieldCategory:
    """Return the semantic category of a field type."""
    return FIELD_TYPE_CONFIG[field_type].category


def is_media(field_type: FieldType) -> bool:
    """Return True if values of this type reference externally hosted assets."""
    return category_of(field_type) is FieldCategory.MEDIA
