"""Generate an OpenAPI 3.0 document from collection schemas.

Each collection yields one component schema (named after its label with
whitespace removed) and two paths: the list/create endpoint and the
single-resource endpoint. Pure and deterministic; no I/O.
"""

import logging
import re
from collections.abc import Sequence
from typing import Any, assert_never

from headless_cms.domain.entities.collection import CollectionConfig, Field
from headless_cms.domain.field_types import FieldType

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Headless Firebase API"
DEFAULT_VERSION = "1.0.0"
DEFAULT_DESCRIPTION = "Automated API documentation for your headless CMS"

_WHITESPACE = re.compile(r"\s+")


def component_name(collection: CollectionConfig) -> str:
    """Return the component schema name for a collection (label without whitespace)."""
    return _WHITESPACE.sub("", collection.label)


def _ref(name: str) -> dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


def field_schema(f: Field) -> dict[str, Any]:
    """Map one field definition to its JSON Schema fragment."""
    match f.type:
        case FieldType.NUMBER:
            return {"type": "integer"}
        case FieldType.DECIMAL:
            return {"type": "number"}
        case FieldType.BOOLEAN:
            return {"type": "boolean"}
        case FieldType.DATE:
            return {"type": "string", "format": "date"}
        case FieldType.DATETIME:
            return {"type": "string", "format": "date-time"}
        case FieldType.JSON:
            return {"type": "object"}
        case FieldType.ENUMERATION:
            return {"type": "string", "enum": [o.value for o in f.enum_options]}
        case FieldType.MEDIA:
            return {
                "type": "object",
                "properties": {
                    "url": {"type": "string"},
                    "id": {"type": "string"},
                },
            }
        case (
            FieldType.TEXT
            | FieldType.TEXTAREA
            | FieldType.RICHTEXT
            | FieldType.TIME
            | FieldType.EMAIL
            | FieldType.PASSWORD
            | FieldType.UID
            | FieldType.RELATION
            | FieldType.COMPONENT
            | FieldType.DYNAMICZONE
        ):
            return {"type": "string"}
        case _:
            assert_never(f.type)


def collection_schema(collection: CollectionConfig) -> dict[str, Any]:
    """Build the component schema for one collection (every declared field)."""
    properties: dict[str, Any] = {
        "id": {"type": "string"},
        "createdAt": {"type": "string", "format": "date-time"},
        "updatedAt": {"type": "string", "format": "date-time"},
    }
    required: list[str] = []
    for f in collection.fields:
        properties[f.name] = field_schema(f)
        if f.required:
            required.append(f.name)

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _collection_paths(collection: CollectionConfig, name: str) -> dict[str, Any]:
    label = collection.label
    tags = [label]
    return {
        f"/api/{collection.slug}": {
            "get": {
                "summary": f"Find all {label}",
                "tags": tags,
                "responses": {
                    "200": {
                        "description": "Success",
                        "content": {
                            "application/json": {
                                "schema": {"type": "array", "items": _ref(name)},
                            }
                        },
                    }
                },
            },
            "post": {
                "summary": f"Create a {label}",
                "tags": tags,
                "requestBody": {
                    "content": {"application/json": {"schema": _ref(name)}},
                },
                "responses": {"201": {"description": "Created"}},
            },
        },
        f"/api/{collection.slug}/{{id}}": {
            "parameters": [
                {
                    "name": "id",
                    "in": "path",
                    "required": True,
                    "schema": {"type": "string"},
                }
            ],
            "get": {
                "summary": f"Get a single {label}",
                "tags": tags,
                "responses": {
                    "200": {
                        "description": "Success",
                        "content": {"application/json": {"schema": _ref(name)}},
                    }
                },
            },
            "patch": {
                "summary": f"Update a {label}",
                "tags": tags,
                "requestBody": {
                    "content": {"application/json": {"schema": _ref(name)}},
                },
                "responses": {"200": {"description": "Updated"}},
            },
            "delete": {
                "summary": f"Delete a {label}",
                "tags": tags,
                "responses": {"200": {"description": "Deleted"}},
            },
        },
    }


def find_component_name_collisions(
    collections: Sequence[CollectionConfig],
) -> dict[str, list[str]]:
    """Return component names claimed by more than one collection, mapped to their slugs."""
    claimed: dict[str, list[str]] = {}
    for collection in collections:
        claimed.setdefault(component_name(collection), []).append(collection.slug)
    return {name: slugs for name, slugs in claimed.items() if len(slugs) > 1}


def generate_openapi_spec(
    collections: Sequence[CollectionConfig],
    *,
    title: str = DEFAULT_TITLE,
    version: str = DEFAULT_VERSION,
) -> dict[str, Any]:
    """Generate the OpenAPI 3.0.0 document for the given collections.

    Collections whose labels collapse to the same component name share it;
    the later collection's schema wins and a warning is logged.

    Args:
        collections: Collection schemas, in the order they should appear.
        title: info.title of the document.
        version: info.version of the document.

    Returns:
        JSON-serializable OpenAPI document.
    """
    for name, slugs in find_component_name_collisions(collections).items():
        logger.warning(
            "OpenAPI component name '%s' shared by collections %s; last one wins",
            name,
            ", ".join(slugs),
        )

    paths: dict[str, Any] = {}
    schemas: dict[str, Any] = {}
    for collection in collections:
        name = component_name(collection)
        schemas[name] = collection_schema(collection)
        paths.update(_collection_paths(collection, name))

    return {
        "openapi": "3.0.0",
        "info": {
            "title": title,
            "version": version,
            "description": DEFAULT_DESCRIPTION,
        },
        "paths": paths,
        "components": {"schemas": schemas},
    }
