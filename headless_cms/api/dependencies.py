"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for repositories, the asset store, the token
verifier and application services. Routes depend only on these, not on
infrastructure directly; tests replace them with app.dependency_overrides.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from headless_cms.application.interfaces.repositories import (
    ICollectionSchemaRepository,
    IContentDocumentRepository,
    IPublicPermissionRepository,
)
from headless_cms.application.interfaces.services import IAssetStore, ITokenVerifier
from headless_cms.application.services.public_permission_service import (
    PublicPermissionService,
)
from headless_cms.application.use_cases.collections import CollectionDeletionService
from headless_cms.core.config import get_settings
from headless_cms.domain.exceptions import AuthenticationException
from headless_cms.infrastructure.external.assets.factory import AssetStoreFactory
from headless_cms.infrastructure.firebase._rest_client import FirestoreRESTClient
from headless_cms.infrastructure.firebase.client import get_firestore_client
from headless_cms.infrastructure.firebase.repositories import (
    FirestoreCollectionSchemaRepository,
    FirestoreContentDocumentRepository,
    FirestorePublicPermissionRepository,
)
from headless_cms.infrastructure.security.token_verifier import create_token_verifier

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str | None:
    """Return the raw bearer token, or None when the header is missing or not Bearer."""
    if not credentials or not credentials.credentials:
        return None
    return credentials.credentials


def get_firestore() -> FirestoreRESTClient:
    """Return the Firestore client; 503 when Firebase is not configured."""
    client = get_firestore_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Firestore is not configured")
    return client


def get_token_verifier() -> ITokenVerifier:
    """Token verifier for the configured auth provider (composition root)."""
    client = get_firestore_client()
    return create_token_verifier(
        get_settings(), project_id=client.project_id if client else None
    )


async def require_auth(
    token: Annotated[str | None, Depends(get_bearer_token)],
    verifier: Annotated[ITokenVerifier, Depends(get_token_verifier)],
) -> dict[str, Any]:
    """Return verified token claims; raise AuthenticationException (401) otherwise."""
    if not token:
        raise AuthenticationException("Unauthorized")
    try:
        return await verifier.verify(token)
    except AuthenticationException:
        raise
    except Exception as e:
        logger.warning("Token verification failed: %s", e)
        raise AuthenticationException("Unauthorized") from e


class _VerifiedToken:
    """ITokenVerifier for the one token require_auth already accepted this request."""

    def __init__(self, token: str, claims: dict[str, Any]) -> None:
        self._token = token
        self._claims = claims

    async def verify(self, token: str) -> dict[str, Any]:
        if token != self._token:
            raise AuthenticationException("Unauthorized")
        return self._claims


def get_schema_repo(
    db: Annotated[FirestoreRESTClient, Depends(get_firestore)],
) -> ICollectionSchemaRepository:
    return FirestoreCollectionSchemaRepository(db)


def get_content_repo(
    db: Annotated[FirestoreRESTClient, Depends(get_firestore)],
) -> IContentDocumentRepository:
    return FirestoreContentDocumentRepository(db, batch_limit=get_settings().document_batch_limit)


def get_permission_repo(
    db: Annotated[FirestoreRESTClient, Depends(get_firestore)],
) -> IPublicPermissionRepository:
    return FirestorePublicPermissionRepository(db)


def get_asset_store(request: Request) -> IAssetStore:
    """Asset store for the configured backend; created once and kept on app.state."""
    store = getattr(request.app.state, "asset_store", None)
    if store is None:
        store = AssetStoreFactory.create_asset_store(get_settings())
        request.app.state.asset_store = store
    return store


def get_collection_deletion_service(
    token: Annotated[str | None, Depends(get_bearer_token)],
    claims: Annotated[dict[str, Any], Depends(require_auth)],
    schema_repo: Annotated[ICollectionSchemaRepository, Depends(get_schema_repo)],
    content_repo: Annotated[IContentDocumentRepository, Depends(get_content_repo)],
    asset_store: Annotated[IAssetStore, Depends(get_asset_store)],
    permission_repo: Annotated[IPublicPermissionRepository, Depends(get_permission_repo)],
) -> CollectionDeletionService:
    """Cascading deletion use case (composition root).

    Authentication is resolved before the store dependencies, so a request
    without a valid token gets 401 even when Firestore is unavailable.
    """
    settings = get_settings()
    return CollectionDeletionService(
        token_verifier=_VerifiedToken(token, claims),
        schema_repo=schema_repo,
        document_repo=content_repo,
        asset_store=asset_store,
        permission_repo=permission_repo,
        document_batch_limit=settings.document_batch_limit,
        asset_delete_concurrency=settings.asset_delete_concurrency,
    )


def get_public_permission_service(
    permission_repo: Annotated[IPublicPermissionRepository, Depends(get_permission_repo)],
) -> PublicPermissionService:
    return PublicPermissionService(permission_repo)
