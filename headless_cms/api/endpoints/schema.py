"""Collection schema API: list, read and cascading delete."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from headless_cms.api.dependencies import (
    get_bearer_token,
    get_collection_deletion_service,
    get_schema_repo,
    require_auth,
)
from headless_cms.application.interfaces.repositories import ICollectionSchemaRepository
from headless_cms.application.use_cases.collections import CollectionDeletionService
from headless_cms.core.limiter import limit_destructive
from headless_cms.domain.exceptions import ResourceNotFoundException
from headless_cms.schemas.collection import (
    CollectionDeletionResponse,
    CollectionListResponse,
)

router = APIRouter()


@router.get("", response_model=CollectionListResponse)
async def list_collections(
    _: Annotated[dict, Depends(require_auth)],
    schema_repo: Annotated[ICollectionSchemaRepository, Depends(get_schema_repo)],
):
    """List every collection config, ordered by label."""
    collections = await schema_repo.list_all()
    return CollectionListResponse(collections=[c.to_dict() for c in collections])


@router.get("/{slug}", response_model=dict[str, Any])
async def get_collection(
    slug: str,
    _: Annotated[dict, Depends(require_auth)],
    schema_repo: Annotated[ICollectionSchemaRepository, Depends(get_schema_repo)],
):
    """Return one collection config."""
    collection = await schema_repo.get(slug)
    if collection is None:
        raise ResourceNotFoundException("collection", slug)
    return collection.to_dict()


@router.delete(
    "/{slug}",
    response_model=CollectionDeletionResponse,
    responses={
        401: {"description": "Missing or invalid bearer token"},
        404: {"description": "No schema record for slug"},
        500: {"description": "Deletion aborted; safe to retry"},
    },
)
@limit_destructive
async def delete_collection(
    request: Request,
    slug: str,
    token: Annotated[str | None, Depends(get_bearer_token)],
    service: Annotated[CollectionDeletionService, Depends(get_collection_deletion_service)],
):
    """Delete the collection, all of its documents, their media assets and its schema.

    Asset deletion is best effort: failures are listed in warnings and never
    fail the request.
    """
    result = await service.delete_collection(slug, token)
    return CollectionDeletionResponse.from_result(result)
