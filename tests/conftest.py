"""Pytest configuration and fixtures for headless_cms.

Environment is set before any headless_cms import so Settings validate with
the jwt auth provider and the local asset backend. HTTP tests run against
create_app() with repositories and the asset store replaced by in-memory
fakes through app.dependency_overrides.
"""

import os
import tempfile

os.environ["AUTH_PROVIDER"] = "jwt"
os.environ["SECRET_KEY"] = "test-secret-key-for-headless-cms-0123456789"
os.environ["ASSET_BACKEND"] = "local"
os.environ["STORAGE_ROOT"] = os.path.join(tempfile.gettempdir(), "headless-cms-test-media")
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ.pop("FIREBASE_SERVICE_ACCOUNT_KEY", None)
os.environ.pop("FIREBASE_SERVICE_ACCOUNT_PATH", None)

from collections.abc import Iterable  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from headless_cms.api.dependencies import (  # noqa: E402
    get_asset_store,
    get_content_repo,
    get_permission_repo,
    get_schema_repo,
)
from headless_cms.application.dtos.content import (  # noqa: E402
    DocumentRef,
    PublicPermissions,
    StoredDocument,
)
from headless_cms.application.interfaces.services import (  # noqa: E402
    ASSET_DELETED,
    ASSET_NOT_FOUND,
)
from headless_cms.core.config import get_settings  # noqa: E402
from headless_cms.core.limiter import limiter  # noqa: E402
from headless_cms.domain.entities.collection import CollectionConfig  # noqa: E402
from headless_cms.domain.exceptions import AuthenticationException  # noqa: E402
from headless_cms.infrastructure.exceptions import (  # noqa: E402
    AssetDeleteError,
    DocumentStoreError,
)
from headless_cms.infrastructure.security.jwt import create_access_token  # noqa: E402
from headless_cms.main import create_app  # noqa: E402

VALID_TOKEN = "valid-token"


class FakeTokenVerifier:
    """Accepts only the tokens it was given."""

    def __init__(self, valid_tokens: Iterable[str] = (VALID_TOKEN,)) -> None:
        self.valid_tokens = set(valid_tokens)
        self.calls: list[str] = []

    async def verify(self, token: str) -> dict[str, Any]:
        self.calls.append(token)
        if token not in self.valid_tokens:
            raise AuthenticationException("Unauthorized")
        return {"sub": "admin", "uid": "admin"}


class FakeSchemaRepository:
    """In-memory schema registry that counts reads."""

    def __init__(self, collections: Iterable[CollectionConfig] = ()) -> None:
        self.collections = {c.slug: c for c in collections}
        self.reads = 0
        self.deleted: list[str] = []
        self.fail_get: Exception | None = None
        self.fail_delete: Exception | None = None

    def add(self, collection: CollectionConfig) -> None:
        self.collections[collection.slug] = collection

    async def get(self, slug: str) -> CollectionConfig | None:
        self.reads += 1
        if self.fail_get:
            raise self.fail_get
        return self.collections.get(slug)

    async def get_for_deletion(self, slug: str) -> CollectionConfig | None:
        return await self.get(slug)

    async def delete(self, slug: str) -> None:
        if self.fail_delete:
            raise self.fail_delete
        self.deleted.append(slug)
        self.collections.pop(slug, None)

    async def list_all(self) -> list[CollectionConfig]:
        self.reads += 1
        return sorted(self.collections.values(), key=lambda c: c.label.lower())


class FakeContentRepository:
    """In-memory document store with atomic batches and optional failure injection."""

    def __init__(self, batch_limit: int = 500) -> None:
        self.batch_limit = batch_limit
        self.documents: dict[str, dict[str, dict[str, Any]]] = {}
        self.batches: list[list[DocumentRef]] = []
        self.listed: list[str] = []
        self.fail_list: Exception | None = None
        self.fail_on_batch: int | None = None

    def put(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self.documents.setdefault(collection, {})[doc_id] = data

    def count(self, collection: str) -> int:
        return len(self.documents.get(collection, {}))

    @property
    def mutated(self) -> bool:
        return bool(self.batches)

    async def list_all(self, collection: str) -> list[StoredDocument]:
        self.listed.append(collection)
        if self.fail_list:
            raise self.fail_list
        return [
            StoredDocument(ref=DocumentRef(collection, doc_id), data=data)
            for doc_id, data in self.documents.get(collection, {}).items()
        ]

    async def batch_delete(self, refs: list[DocumentRef]) -> None:
        if len(refs) > self.batch_limit:
            raise ValueError(f"batch of {len(refs)} exceeds {self.batch_limit}")
        if self.fail_on_batch is not None and len(self.batches) == self.fail_on_batch:
            raise DocumentStoreError("commit", "simulated commit failure", 503)
        self.batches.append(list(refs))
        for ref in refs:
            self.documents.get(ref.collection, {}).pop(ref.id, None)


class FakeAssetStore:
    """In-memory asset store recording every bulk call."""

    def __init__(self, existing: Iterable[str] = (), batch_limit: int = 100) -> None:
        self.batch_limit = batch_limit
        self.existing = set(existing)
        self.calls: list[list[str]] = []
        self.fail_ids: set[str] = set()
        self.error_ids: dict[str, str] = {}

    async def bulk_delete(self, public_ids: list[str]) -> dict[str, str]:
        if not public_ids:
            return {}
        if len(public_ids) > self.batch_limit:
            raise ValueError(f"bulk_delete got {len(public_ids)} ids")
        self.calls.append(list(public_ids))
        if self.fail_ids.intersection(public_ids):
            raise AssetDeleteError(public_ids, "simulated outage")
        outcomes: dict[str, str] = {}
        for public_id in public_ids:
            if public_id in self.error_ids:
                outcomes[public_id] = self.error_ids[public_id]
            elif public_id in self.existing:
                self.existing.discard(public_id)
                outcomes[public_id] = ASSET_DELETED
            else:
                outcomes[public_id] = ASSET_NOT_FOUND
        return outcomes

    async def delete(self, public_id: str) -> bool:
        outcome = (await self.bulk_delete([public_id]))[public_id]
        return outcome == ASSET_DELETED


class FakePermissionRepository:
    """In-memory public permission registry."""

    def __init__(self) -> None:
        self.records: dict[str, dict[str, bool]] = {}
        self.fail_get: Exception | None = None
        self.fail_delete: Exception | None = None

    async def get(self, slug: str) -> PublicPermissions:
        if self.fail_get:
            raise self.fail_get
        return PublicPermissions.from_dict(self.records.get(slug))

    async def update(self, slug: str, permissions: PublicPermissions) -> None:
        self.records.setdefault(slug, {}).update(permissions.to_dict())

    async def delete(self, slug: str) -> None:
        if self.fail_delete:
            raise self.fail_delete
        self.records.pop(slug, None)


@pytest.fixture
def posts_collection() -> CollectionConfig:
    """`posts` with a required title and a media cover."""
    return CollectionConfig.from_dict(
        {
            "slug": "posts",
            "label": "Posts",
            "fields": [
                {"name": "title", "type": "text", "required": True},
                {"name": "cover", "type": "media"},
            ],
        }
    )


@pytest.fixture
def token_verifier() -> FakeTokenVerifier:
    return FakeTokenVerifier()


@pytest.fixture
def schema_repo() -> FakeSchemaRepository:
    return FakeSchemaRepository()


@pytest.fixture
def content_repo() -> FakeContentRepository:
    return FakeContentRepository()


@pytest.fixture
def asset_store() -> FakeAssetStore:
    return FakeAssetStore()


@pytest.fixture
def permission_repo() -> FakePermissionRepository:
    return FakePermissionRepository()


@pytest.fixture
def app(schema_repo, content_repo, asset_store, permission_repo):
    """FastAPI app wired to the in-memory fakes (jwt auth stays real)."""
    get_settings.cache_clear()
    limiter.reset()
    application = create_app()
    application.dependency_overrides[get_schema_repo] = lambda: schema_repo
    application.dependency_overrides[get_content_repo] = lambda: content_repo
    application.dependency_overrides[get_permission_repo] = lambda: permission_repo
    application.dependency_overrides[get_asset_store] = lambda: asset_store
    return application


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization header carrying a valid HS256 token."""
    token = create_access_token({"sub": "admin@example.com"})
    return {"Authorization": f"Bearer {token}"}
