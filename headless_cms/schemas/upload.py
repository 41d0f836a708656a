"""Asset deletion API schemas."""

from pydantic import BaseModel


class AssetDeleteResponse(BaseModel):
    """Response for DELETE /upload/{public_id}. Missing assets also succeed."""

    success: bool = True
    public_id: str
    deleted: bool
