"""CollectionConfig and Field domain entities.

A collection is a user-defined content type: an immutable slug (also the
name of its document collection), display labels, a kind, and an ordered
list of typed fields. Entities are parsed from the camelCase records the
schema builder stores in the `_collections` registry.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from headless_cms.domain.exceptions import ValidationException
from headless_cms.domain.field_types import FieldType, is_media

SLUG_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{0,127}$")

# Single types keep their one document under _single_{slug}.
SINGLE_TYPE_COLLECTION_PREFIX = "_single_"


class CollectionKind(str, Enum):
    """Whether a collection holds many documents or exactly one."""

    COLLECTION_TYPE = "collectionType"
    SINGLE_TYPE = "singleType"


class RelationType(str, Enum):
    """Cardinality of a relation field."""

    HAS_ONE = "hasOne"
    HAS_MANY = "hasMany"
    BELONGS_TO = "belongsTo"
    MANY_TO_MANY = "manyToMany"


def validate_slug(slug: str) -> str:
    """Return slug if it is a valid collection identifier; raise ValidationException otherwise."""
    if not slug or not SLUG_PATTERN.match(slug):
        raise ValidationException(
            f"Invalid collection slug: {slug!r} (lowercase letters, digits, '-' and '_')",
            field="slug",
        )
    return slug


@dataclass(frozen=True)
class EnumerationOption:
    label: str
    value: str


@dataclass(frozen=True)
class RelationConfig:
    type: RelationType
    target: str
    display_field: str | None = None


@dataclass(frozen=True)
class ComponentConfig:
    component: str
    repeatable: bool = False
    min: int | None = None
    max: int | None = None


@dataclass(frozen=True)
class DynamicZoneConfig:
    components: tuple[str, ...] = ()


@dataclass(frozen=True)
class Field:
    """One attribute definition within a collection or component schema."""

    name: str
    type: FieldType
    label: str = ""
    required: bool = False
    unique: bool = False
    private: bool = False
    default_value: Any = None
    placeholder: str | None = None
    description: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    min: float | None = None
    max: float | None = None
    enum_options: tuple[EnumerationOption, ...] = ()
    relation: RelationConfig | None = None
    component: ComponentConfig | None = None
    dynamiczone: DynamicZoneConfig | None = None
    target_field: str | None = None

    @property
    def is_media(self) -> bool:
        return is_media(self.type)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Field:
        """Parse a stored field record (camelCase keys). Unknown keys are ignored.

        Raises:
            ValidationException: Missing name or a type outside the closed set.
        """
        name = data.get("name")
        if not name or not isinstance(name, str):
            raise ValidationException("Field name is required", field="name")
        raw_type = data.get("type")
        try:
            field_type = FieldType(raw_type)
        except ValueError:
            raise ValidationException(
                f"Unknown field type {raw_type!r} for field '{name}'", field="type"
            ) from None

        relation = None
        raw_relation = data.get("relation")
        if isinstance(raw_relation, Mapping) and raw_relation.get("target"):
            try:
                relation = RelationConfig(
                    type=RelationType(raw_relation.get("type", RelationType.HAS_ONE.value)),
                    target=raw_relation["target"],
                    display_field=raw_relation.get("displayField"),
                )
            except ValueError:
                raise ValidationException(
                    f"Unknown relation type {raw_relation.get('type')!r} for field '{name}'",
                    field="relation",
                ) from None

        component = None
        raw_component = data.get("component")
        if isinstance(raw_component, Mapping) and raw_component.get("component"):
            component = ComponentConfig(
                component=raw_component["component"],
                repeatable=bool(raw_component.get("repeatable", False)),
                min=raw_component.get("min"),
                max=raw_component.get("max"),
            )

        dynamiczone = None
        raw_zone = data.get("dynamiczone")
        if isinstance(raw_zone, Mapping):
            dynamiczone = DynamicZoneConfig(
                components=tuple(raw_zone.get("components") or ())
            )

        return cls(
            name=name,
            type=field_type,
            label=data.get("label") or name,
            required=bool(data.get("required", False)),
            unique=bool(data.get("unique", False)),
            private=bool(data.get("private", False)),
            default_value=data.get("defaultValue"),
            placeholder=data.get("placeholder"),
            description=data.get("description"),
            min_length=data.get("minLength"),
            max_length=data.get("maxLength"),
            min=data.get("min"),
            max=data.get("max"),
            enum_options=tuple(
                EnumerationOption(label=o.get("label", o.get("value", "")), value=o["value"])
                for o in data.get("enumOptions") or ()
                if isinstance(o, Mapping) and "value" in o
            ),
            relation=relation,
            component=component,
            dynamiczone=dynamiczone,
            target_field=data.get("targetField"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to the stored camelCase shape (None values omitted)."""
        out: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
            "unique": self.unique,
            "private": self.private,
        }
        optional = {
            "defaultValue": self.default_value,
            "placeholder": self.placeholder,
            "description": self.description,
            "minLength": self.min_length,
            "maxLength": self.max_length,
            "min": self.min,
            "max": self.max,
            "targetField": self.target_field,
        }
        out.update({k: v for k, v in optional.items() if v is not None})
        if self.enum_options:
            out["enumOptions"] = [
                {"label": o.label, "value": o.value} for o in self.enum_options
            ]
        if self.relation:
            rel: dict[str, Any] = {
                "type": self.relation.type.value,
                "target": self.relation.target,
            }
            if self.relation.display_field:
                rel["displayField"] = self.relation.display_field
            out["relation"] = rel
        if self.component:
            comp: dict[str, Any] = {
                "component": self.component.component,
                "repeatable": self.component.repeatable,
            }
            if self.component.min is not None:
                comp["min"] = self.component.min
            if self.component.max is not None:
                comp["max"] = self.component.max
            out["component"] = comp
        if self.dynamiczone:
            out["dynamiczone"] = {"components": list(self.dynamiczone.components)}
        return out


@dataclass(frozen=True)
class CollectionConfig:
    """User-defined content type descriptor (immutable).

    The slug is the primary key in the schema registry and the name of the
    document collection; renaming it would orphan existing documents, so
    entities never change it.
    """

    slug: str
    label: str
    kind: CollectionKind = CollectionKind.COLLECTION_TYPE
    fields: tuple[Field, ...] = field(default_factory=tuple)
    label_plural: str | None = None
    icon: str | None = None
    description: str | None = None
    draft_and_publish: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate schema rules. Raises ValidationException if invalid."""
        validate_slug(self.slug)
        if not self.label:
            raise ValidationException("Collection label is required", field="label")
        seen: set[str] = set()
        for f in self.fields:
            if f.name in seen:
                raise ValidationException(
                    f"Duplicate field name '{f.name}' in collection '{self.slug}'",
                    field="fields",
                )
            seen.add(f.name)

    @property
    def document_collection(self) -> str:
        """Name of the document collection holding this collection's content."""
        if self.kind is CollectionKind.SINGLE_TYPE:
            return f"{SINGLE_TYPE_COLLECTION_PREFIX}{self.slug}"
        return self.slug

    @property
    def media_fields(self) -> tuple[Field, ...]:
        """Media-typed fields in schema order."""
        return tuple(f for f in self.fields if f.is_media)

    @property
    def required_field_names(self) -> list[str]:
        return [f.name for f in self.fields if f.required]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], slug: str | None = None) -> CollectionConfig:
        """Parse a registry record. slug defaults to data['slug'] (document id wins when given).

        Raises:
            ValidationException: Invalid slug, label, kind or field definitions.
        """
        resolved_slug = slug or data.get("slug") or ""
        kind = _parse_kind(data)
        raw_fields = data.get("fields") or []
        if not isinstance(raw_fields, list):
            raise ValidationException("Collection fields must be a list", field="fields")
        return cls(
            slug=resolved_slug,
            label=data.get("label") or resolved_slug,
            kind=kind,
            fields=tuple(Field.from_dict(f) for f in raw_fields if isinstance(f, Mapping)),
            label_plural=data.get("labelPlural"),
            icon=data.get("icon"),
            description=data.get("description"),
            draft_and_publish=bool(data.get("draftAndPublish", False)),
        )

    @classmethod
    def from_dict_lenient(
        cls, data: Mapping[str, Any], slug: str | None = None
    ) -> tuple[CollectionConfig, list[str]]:
        """Parse a registry record, dropping field entries that do not parse.

        Keeps the slug, kind and every well-formed field; nameless, unknown-type
        and duplicate field entries are left out and described in the returned
        problem list. Used where a damaged record must still be acted on.

        Raises:
            ValidationException: Invalid slug or unknown kind, since either
                would leave the document collection undetermined.
        """
        resolved_slug = slug or data.get("slug") or ""
        kind = _parse_kind(data)
        problems: list[str] = []
        raw_fields = data.get("fields") or []
        if not isinstance(raw_fields, list):
            problems.append("fields is not a list")
            raw_fields = []
        fields: list[Field] = []
        seen: set[str] = set()
        for index, raw in enumerate(raw_fields):
            if not isinstance(raw, Mapping):
                problems.append(f"fields[{index}] is not an object")
                continue
            try:
                parsed = Field.from_dict(raw)
            except ValidationException as e:
                problems.append(f"fields[{index}]: {e.message}")
                continue
            if parsed.name in seen:
                problems.append(f"fields[{index}]: duplicate field name '{parsed.name}'")
                continue
            seen.add(parsed.name)
            fields.append(parsed)
        return (
            cls(
                slug=resolved_slug,
                label=data.get("label") or resolved_slug,
                kind=kind,
                fields=tuple(fields),
                label_plural=data.get("labelPlural"),
                icon=data.get("icon"),
                description=data.get("description"),
                draft_and_publish=bool(data.get("draftAndPublish", False)),
            ),
            problems,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored camelCase shape."""
        out: dict[str, Any] = {
            "slug": self.slug,
            "label": self.label,
            "kind": self.kind.value,
            "fields": [f.to_dict() for f in self.fields],
            "draftAndPublish": self.draft_and_publish,
        }
        if self.label_plural is not None:
            out["labelPlural"] = self.label_plural
        if self.icon is not None:
            out["icon"] = self.icon
        if self.description is not None:
            out["description"] = self.description
        return out


def _parse_kind(data: Mapping[str, Any]) -> CollectionKind:
    raw_kind = data.get("kind") or CollectionKind.COLLECTION_TYPE.value
    try:
        return CollectionKind(raw_kind)
    except ValueError:
        raise ValidationException(f"Unknown collection kind {raw_kind!r}", field="kind") from None
