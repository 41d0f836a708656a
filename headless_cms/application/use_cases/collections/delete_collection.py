"""Cascading collection deletion use case.

Removes a collection's documents, the media assets those documents
reference, and finally its schema record. The document store and the
asset store share no transaction, so stage order is what keeps a failed
run retryable:

1. authenticate the caller
2. load the schema (absent -> not found, nothing mutated)
3. enumerate every stored document
4. extract media public ids from media-typed fields
5. delete assets in chunks (best effort, failures become warnings)
6. erase documents in atomic batches (fatal on failure)
7. delete the schema record (fatal on failure), then its public permissions

Stages 6 and 7 are shielded from cancellation: once documents start
disappearing the run continues even if the caller goes away.
"""

from __future__ import annotations

import asyncio
import logging

from headless_cms.application.dtos.collection_deletion import (
    AssetDeletionWarning,
    CollectionDeletionResult,
)
from headless_cms.application.dtos.content import DocumentRef, StoredDocument
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
from headless_cms.application.services.document_batch_eraser import (
    DEFAULT_DOCUMENT_BATCH_LIMIT,
    DocumentBatchEraser,
)
from headless_cms.application.services.media_reference_extractor import (
    extract_media_public_ids,
)
from headless_cms.domain.entities.collection import CollectionConfig
from headless_cms.domain.exceptions import (
    AuthenticationException,
    CollectionDeletionError,
    ResourceNotFoundException,
)
from headless_cms.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)
from headless_cms.shared.utils.batching import chunked

logger = logging.getLogger(__name__)

STAGE_ENUMERATE_DOCUMENTS = "enumerate_documents"
STAGE_LOAD_SCHEMA = "load_schema"
STAGE_DELETE_ASSETS = "delete_assets"
STAGE_DELETE_DOCUMENTS = "delete_documents"
STAGE_DELETE_SCHEMA = "delete_schema"
STAGE_DELETE_PERMISSIONS = "delete_permissions"

# Shielded erase tasks outlive a cancelled caller; keep them referenced until done.
_background_erasures: set[asyncio.Task] = set()


class _AssetTally:
    """Mutable per-run counters for stage 5."""

    def __init__(self) -> None:
        self.deleted = 0
        self.not_found = 0
        self.warnings: list[AssetDeletionWarning] = []


class CollectionDeletionService:
    """Delete a collection, its documents and their media assets."""

    def __init__(
        self,
        token_verifier: ITokenVerifier,
        schema_repo: ICollectionSchemaRepository,
        document_repo: IContentDocumentRepository,
        asset_store: IAssetStore,
        permission_repo: IPublicPermissionRepository | None = None,
        document_batch_limit: int = DEFAULT_DOCUMENT_BATCH_LIMIT,
        asset_delete_concurrency: int = 4,
    ) -> None:
        if asset_delete_concurrency < 1:
            raise ValueError("asset_delete_concurrency must be at least 1")
        self._token_verifier = token_verifier
        self._schema_repo = schema_repo
        self._document_repo = document_repo
        self._asset_store = asset_store
        self._permission_repo = permission_repo
        self._eraser = DocumentBatchEraser(document_repo, document_batch_limit)
        self._asset_delete_concurrency = asset_delete_concurrency

    @traced("collection.delete")
    async def delete_collection(
        self, slug: str, bearer_token: str | None
    ) -> CollectionDeletionResult:
        """Run the cascading deletion for slug.

        Args:
            slug: Collection to delete.
            bearer_token: Raw bearer token from the Authorization header.

        Returns:
            CollectionDeletionResult with counts and non-fatal warnings.

        Raises:
            AuthenticationException: Token missing or rejected. Nothing is read.
            ResourceNotFoundException: No schema record for slug. Nothing is mutated.
            CollectionDeletionError: A fatal stage failed; the schema record is
                left in place unless the failure was in deleting it.
        """
        await self._authenticate(bearer_token)

        collection = await self._load_schema(slug)
        documents = await self._enumerate_documents(collection)

        public_ids = sorted(extract_media_public_ids(collection, documents))
        add_span_event(
            "media_extracted",
            {"documents": len(documents), "public_ids": len(public_ids)},
        )
        tally = _AssetTally()
        if public_ids:
            await self._delete_assets(slug, public_ids, tally)

        refs = [doc.ref for doc in documents]
        task = asyncio.ensure_future(self._erase_and_unregister(collection, refs))
        _background_erasures.add(task)
        task.add_done_callback(_log_background_outcome)
        try:
            document_batches, cleanup_warnings = await asyncio.shield(task)
        except asyncio.CancelledError:
            logger.warning(
                "Caller cancelled deletion of '%s' during erase; continuing in background",
                slug,
            )
            raise

        result = CollectionDeletionResult(
            slug=slug,
            documents_deleted=len(refs),
            document_batches=document_batches,
            asset_ids_requested=len(public_ids),
            assets_deleted=tally.deleted,
            assets_not_found=tally.not_found,
            warnings=tuple(tally.warnings + cleanup_warnings),
        )
        logger.info(
            "Deleted collection '%s': %d documents in %d batches, %d/%d assets%s",
            slug,
            result.documents_deleted,
            result.document_batches,
            result.assets_deleted,
            result.asset_ids_requested,
            f", {len(result.warnings)} warning(s)" if result.degraded else "",
        )
        return result

    async def _authenticate(self, bearer_token: str | None) -> None:
        if not bearer_token:
            raise AuthenticationException("Unauthorized")
        try:
            await self._token_verifier.verify(bearer_token)
        except AuthenticationException:
            raise
        except Exception as e:
            logger.warning("Token verification failed: %s", e)
            raise AuthenticationException("Unauthorized") from e

    async def _load_schema(self, slug: str) -> CollectionConfig:
        try:
            collection = await self._schema_repo.get_for_deletion(slug)
        except Exception as e:
            logger.exception("Failed to load schema '%s'", slug)
            raise CollectionDeletionError(slug, STAGE_LOAD_SCHEMA, str(e)) from e
        if collection is None:
            raise ResourceNotFoundException("collection", slug)
        add_span_attributes(kind=collection.kind.value, fields=len(collection.fields))
        logger.info("Deleting collection '%s' (%s)", slug, collection.kind.value)
        return collection

    async def _enumerate_documents(
        self, collection: CollectionConfig
    ) -> list[StoredDocument]:
        try:
            documents = await self._document_repo.list_all(collection.document_collection)
        except Exception as e:
            logger.exception("Failed to enumerate documents of '%s'", collection.slug)
            raise CollectionDeletionError(
                collection.slug, STAGE_ENUMERATE_DOCUMENTS, str(e)
            ) from e
        add_span_event("documents_enumerated", {"count": len(documents)})
        return documents

    async def _delete_assets(
        self, slug: str, public_ids: list[str], tally: _AssetTally
    ) -> None:
        semaphore = asyncio.Semaphore(self._asset_delete_concurrency)
        chunks = list(chunked(public_ids, self._asset_store.batch_limit))

        async def run_chunk(index: int, chunk: list[str]) -> None:
            async with semaphore:
                try:
                    outcomes = await self._asset_store.bulk_delete(chunk)
                except Exception as e:
                    logger.warning(
                        "Asset chunk %d of '%s' failed (%d ids): %s",
                        index,
                        slug,
                        len(chunk),
                        e,
                    )
                    tally.warnings.append(
                        AssetDeletionWarning(
                            stage=STAGE_DELETE_ASSETS,
                            reason=str(e),
                            public_ids=tuple(chunk),
                            chunk_index=index,
                        )
                    )
                    return
            failed: list[str] = []
            for public_id in chunk:
                outcome = outcomes.get(public_id)
                if outcome == ASSET_DELETED:
                    tally.deleted += 1
                elif outcome == ASSET_NOT_FOUND:
                    tally.not_found += 1
                else:
                    failed.append(public_id)
            if failed:
                logger.warning(
                    "Asset chunk %d of '%s': %d id(s) not deleted", index, slug, len(failed)
                )
                tally.warnings.append(
                    AssetDeletionWarning(
                        stage=STAGE_DELETE_ASSETS,
                        reason="Asset store did not confirm deletion",
                        public_ids=tuple(failed),
                        chunk_index=index,
                    )
                )

        await asyncio.gather(*(run_chunk(i, c) for i, c in enumerate(chunks)))
        add_span_event(
            "assets_deleted",
            {"chunks": len(chunks), "deleted": tally.deleted, "warnings": len(tally.warnings)},
        )

    async def _erase_and_unregister(
        self, collection: CollectionConfig, refs: list[DocumentRef]
    ) -> tuple[int, list[AssetDeletionWarning]]:
        slug = collection.slug
        try:
            batches = await self._eraser.erase(refs)
        except Exception as e:
            logger.exception("Failed to delete documents of '%s'", slug)
            raise CollectionDeletionError(slug, STAGE_DELETE_DOCUMENTS, str(e)) from e
        add_span_event("documents_deleted", {"batches": batches})

        try:
            await self._schema_repo.delete(slug)
        except Exception as e:
            logger.exception("Failed to delete schema record '%s'", slug)
            raise CollectionDeletionError(slug, STAGE_DELETE_SCHEMA, str(e)) from e

        warnings: list[AssetDeletionWarning] = []
        if self._permission_repo is not None:
            try:
                await self._permission_repo.delete(slug)
            except Exception as e:
                logger.warning("Failed to delete public permissions of '%s': %s", slug, e)
                warnings.append(
                    AssetDeletionWarning(stage=STAGE_DELETE_PERMISSIONS, reason=str(e))
                )
        return batches, warnings


def _log_background_outcome(task: asyncio.Task) -> None:
    _background_erasures.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Collection erase finished with error: %s", exc)
    else:
        logger.debug("Collection erase finished: %d batch(es)", task.result()[0])
