"""Collection schema and cascading deletion API schemas."""

from typing import Any

from pydantic import BaseModel, Field

from headless_cms.application.dtos.collection_deletion import CollectionDeletionResult


class AssetDeletionWarningResponse(BaseModel):
    """One non-fatal failure from a deletion run."""

    stage: str
    reason: str
    public_ids: list[str] = Field(default_factory=list)
    chunk_index: int | None = None


class CollectionDeletionResponse(BaseModel):
    """Response for DELETE /schema/{slug}."""

    success: bool = True
    slug: str
    documents_deleted: int
    document_batches: int
    asset_ids_requested: int
    assets_deleted: int
    assets_not_found: int
    warnings: list[AssetDeletionWarningResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: CollectionDeletionResult) -> "CollectionDeletionResponse":
        return cls(
            slug=result.slug,
            documents_deleted=result.documents_deleted,
            document_batches=result.document_batches,
            asset_ids_requested=result.asset_ids_requested,
            assets_deleted=result.assets_deleted,
            assets_not_found=result.assets_not_found,
            warnings=[
                AssetDeletionWarningResponse(
                    stage=w.stage,
                    reason=w.reason,
                    public_ids=list(w.public_ids),
                    chunk_index=w.chunk_index,
                )
                for w in result.warnings
            ],
        )


class CollectionListResponse(BaseModel):
    """Response for GET /schema: stored collection configs (camelCase records)."""

    collections: list[dict[str, Any]]
