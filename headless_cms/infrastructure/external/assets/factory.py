"""Asset store factory: creates the Cloudinary, S3 or local backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from headless_cms.application.interfaces.services import IAssetStore
from headless_cms.infrastructure.exceptions import AssetStoreConfigError

if TYPE_CHECKING:
    from headless_cms.core.config import Settings


class AssetStoreFactory:
    """Factory for asset store instances based on configuration."""

    @staticmethod
    def create_asset_store(settings: Settings | None = None) -> IAssetStore:
        """Create the asset store selected by ASSET_BACKEND.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            CloudinaryAssetStore, S3AssetStore or LocalAssetStore.

        Raises:
            AssetStoreConfigError: Unknown backend or missing required config.
        """
        from headless_cms.core.config import get_settings

        s = settings or get_settings()
        backend = s.asset_backend.lower()

        if backend == "cloudinary":
            from headless_cms.infrastructure.external.assets.cloudinary_assets import (
                CloudinaryAssetStore,
            )

            if not (s.cloudinary_cloud_name and s.cloudinary_api_key and s.cloudinary_api_secret):
                raise AssetStoreConfigError(backend, "Cloudinary credentials are required")
            return CloudinaryAssetStore(
                cloud_name=s.cloudinary_cloud_name,
                api_key=s.cloudinary_api_key,
                api_secret=s.cloudinary_api_secret.get_secret_value(),
                resource_type=s.cloudinary_resource_type,
                batch_limit=s.asset_batch_limit,
            )
        if backend == "s3":
            from headless_cms.infrastructure.external.assets.s3_assets import S3AssetStore

            if not s.s3_bucket:
                raise AssetStoreConfigError(backend, "S3_BUCKET required for s3 backend")
            return S3AssetStore(
                bucket=s.s3_bucket,
                region=s.s3_region,
                endpoint_url=s.s3_endpoint_url,
                access_key=s.s3_access_key,
                secret_key=s.s3_secret_key.get_secret_value() if s.s3_secret_key else None,
                batch_limit=s.asset_batch_limit,
            )
        if backend == "local":
            from headless_cms.infrastructure.external.assets.local_assets import LocalAssetStore

            if not s.storage_root:
                raise AssetStoreConfigError(backend, "STORAGE_ROOT required for local backend")
            return LocalAssetStore(storage_root=s.storage_root, batch_limit=s.asset_batch_limit)
        raise AssetStoreConfigError(
            backend, "Unknown asset backend. Supported: 'cloudinary', 's3', 'local'"
        )
