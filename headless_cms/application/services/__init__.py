"""Application services: media extraction, batch erase, OpenAPI generation, public permissions."""

from headless_cms.application.services.document_batch_eraser import DocumentBatchEraser
from headless_cms.application.services.media_reference_extractor import (
    extract_media_public_ids,
)
from headless_cms.application.services.openapi_generator import (
    find_component_name_collisions,
    generate_openapi_spec,
)
from headless_cms.application.services.public_permission_service import (
    PublicPermissionService,
)

__all__ = [
    "DocumentBatchEraser",
    "PublicPermissionService",
    "extract_media_public_ids",
    "find_component_name_collisions",
    "generate_openapi_spec",
]
