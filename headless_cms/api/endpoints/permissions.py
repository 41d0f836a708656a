"""Public API permission flags per collection."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from headless_cms.api.dependencies import get_public_permission_service, require_auth
from headless_cms.application.services.public_permission_service import (
    PublicPermissionService,
)
from headless_cms.core.limiter import limit_writes
from headless_cms.schemas.permissions import (
    PublicPermissionsBody,
    PublicPermissionsResponse,
)

router = APIRouter()


@router.get("/{slug}", response_model=PublicPermissionsResponse)
async def get_permissions(
    slug: str,
    _: Annotated[dict, Depends(require_auth)],
    service: Annotated[PublicPermissionService, Depends(get_public_permission_service)],
):
    """Return the public flags for slug (all closed when none are stored)."""
    permissions = await service.get_permissions(slug)
    return PublicPermissionsResponse(
        slug=slug, permissions=PublicPermissionsBody.from_dto(permissions)
    )


@router.put("/{slug}", response_model=PublicPermissionsResponse)
@limit_writes
async def update_permissions(
    request: Request,
    slug: str,
    body: PublicPermissionsBody,
    _: Annotated[dict, Depends(require_auth)],
    service: Annotated[PublicPermissionService, Depends(get_public_permission_service)],
):
    """Store the public flags for slug."""
    permissions = await service.update_permissions(slug, body.to_dto())
    return PublicPermissionsResponse(
        slug=slug, permissions=PublicPermissionsBody.from_dto(permissions)
    )
