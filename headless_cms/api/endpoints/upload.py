"""Single media asset deletion."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from headless_cms.api.dependencies import get_asset_store, require_auth
from headless_cms.application.interfaces.services import IAssetStore
from headless_cms.core.limiter import limit_writes
from headless_cms.schemas.upload import AssetDeleteResponse

router = APIRouter()


@router.delete("/{public_id:path}", response_model=AssetDeleteResponse)
@limit_writes
async def delete_asset(
    request: Request,
    public_id: str,
    _: Annotated[dict, Depends(require_auth)],
    asset_store: Annotated[IAssetStore, Depends(get_asset_store)],
):
    """Delete one asset by public id (may contain '/'). Succeeds if it was already gone."""
    deleted = await asset_store.delete(public_id)
    return AssetDeleteResponse(public_id=public_id, deleted=deleted)
