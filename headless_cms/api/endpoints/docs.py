"""Generated OpenAPI document for the content API."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from headless_cms.api.dependencies import get_schema_repo
from headless_cms.application.interfaces.repositories import ICollectionSchemaRepository
from headless_cms.application.services.openapi_generator import generate_openapi_spec
from headless_cms.core.config import get_settings

router = APIRouter()


@router.get("/openapi.json", response_model=dict[str, Any])
async def get_content_openapi(
    schema_repo: Annotated[ICollectionSchemaRepository, Depends(get_schema_repo)],
):
    """Return the OpenAPI 3.0 document describing every collection's endpoints."""
    settings = get_settings()
    collections = await schema_repo.list_all()
    return generate_openapi_spec(
        collections, title=settings.openapi_title, version=settings.app_version
    )
