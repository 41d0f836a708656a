"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from headless_cms.infrastructure or headless_cms.api.
"""

from headless_cms.application.interfaces.repositories import (
    ICollectionSchemaRepository,
    IContentDocumentRepository,
    IPublicPermissionRepository,
)
from headless_cms.application.interfaces.services import (
    ASSET_DELETED,
    ASSET_NOT_FOUND,
    IAssetStore,
    ITokenVerifier,
)

__all__ = [
    "ASSET_DELETED",
    "ASSET_NOT_FOUND",
    "IAssetStore",
    "ICollectionSchemaRepository",
    "IContentDocumentRepository",
    "IPublicPermissionRepository",
    "ITokenVerifier",
]
