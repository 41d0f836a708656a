"""Asset store backends (Cloudinary, S3, local) and factory."""

from headless_cms.infrastructure.external.assets.factory import AssetStoreFactory

__all__ = ["AssetStoreFactory"]
