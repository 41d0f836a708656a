"""Firestore repository tests against an in-memory REST server (no network)."""

import logging
from datetime import UTC, datetime

import httpx
import pytest

from headless_cms.application.dtos.content import DocumentRef, PublicPermissions
from headless_cms.application.use_cases.collections import CollectionDeletionService
from headless_cms.infrastructure.exceptions import DocumentStoreError
from headless_cms.infrastructure.firebase.repositories import (
    FirestoreCollectionSchemaRepository,
    FirestoreContentDocumentRepository,
    FirestorePublicPermissionRepository,
)


class TestContentDocumentRepository:
    async def test_list_all_follows_pages(self, firestore, rest_client) -> None:
        for i in range(650):
            firestore.put("posts", f"d{i:04d}", {"title": f"Post {i}"})
        firestore.put("other", "x", {"title": "elsewhere"})
        repo = FirestoreContentDocumentRepository(rest_client)

        docs = await repo.list_all("posts")

        assert len(docs) == 650
        assert docs[0].ref == DocumentRef("posts", "d0000")
        assert docs[0].data == {"title": "Post 0"}
        assert len([r for r in firestore.requests if r.method == "GET"]) == 3

    async def test_list_all_decodes_nested_values(self, firestore, rest_client) -> None:
        published = datetime(2024, 5, 1, 12, 30, tzinfo=UTC)
        firestore.put(
            "posts",
            "a",
            {"cover": {"publicId": "pid1", "url": "u"}, "gallery": [{"publicId": "pid2"}], "at": published},
        )
        docs = await FirestoreContentDocumentRepository(rest_client).list_all("posts")
        assert docs[0].data["cover"] == {"publicId": "pid1", "url": "u"}
        assert docs[0].data["gallery"] == [{"publicId": "pid2"}]
        assert docs[0].data["at"] == published

    async def test_empty_collection(self, rest_client) -> None:
        assert await FirestoreContentDocumentRepository(rest_client).list_all("posts") == []

    async def test_batch_delete_commits_once(self, firestore, rest_client) -> None:
        for doc_id in ("a", "b", "c"):
            firestore.put("posts", doc_id, {"n": 1})
        repo = FirestoreContentDocumentRepository(rest_client)

        await repo.batch_delete([DocumentRef("posts", "a"), DocumentRef("posts", "b")])

        assert firestore.commits == [
            {"writes": [{"delete": f"{firestore.root}/posts/a"}, {"delete": f"{firestore.root}/posts/b"}]}
        ]
        assert firestore.ids("posts") == ["c"]

    async def test_rejected_commit_applies_nothing(self, firestore, rest_client) -> None:
        firestore.put("posts", "a", {"n": 1})
        firestore.fail_commit_status = 503
        repo = FirestoreContentDocumentRepository(rest_client)

        with pytest.raises(DocumentStoreError) as exc_info:
            await repo.batch_delete([DocumentRef("posts", "a")])

        assert exc_info.value.status_code == 503
        assert firestore.ids("posts") == ["a"]

    async def test_batch_over_limit_is_rejected(self, rest_client) -> None:
        repo = FirestoreContentDocumentRepository(rest_client, batch_limit=2)
        with pytest.raises(ValueError):
            await repo.batch_delete([DocumentRef("posts", str(i)) for i in range(3)])

    def test_batch_limit_bounds(self, rest_client) -> None:
        with pytest.raises(ValueError):
            FirestoreContentDocumentRepository(rest_client, batch_limit=501)


class TestCollectionSchemaRepository:
    async def test_get_parses_record(self, firestore, rest_client) -> None:
        firestore.put(
            "_collections",
            "posts",
            {"label": "Posts", "fields": [{"name": "cover", "type": "media"}]},
        )
        config = await FirestoreCollectionSchemaRepository(rest_client).get("posts")
        assert config.slug == "posts"
        assert [f.name for f in config.media_fields] == ["cover"]

    async def test_get_missing_returns_none(self, rest_client) -> None:
        assert await FirestoreCollectionSchemaRepository(rest_client).get("posts") is None

    async def test_malformed_slug_makes_no_request(self, firestore, rest_client) -> None:
        assert await FirestoreCollectionSchemaRepository(rest_client).get("../etc") is None
        assert firestore.requests == []

    async def test_malformed_slug_is_logged(self, rest_client, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            assert await FirestoreCollectionSchemaRepository(rest_client).get("Bad Slug") is None
        assert "'Bad Slug'" in caplog.text

    async def test_get_for_deletion_drops_malformed_fields(self, firestore, rest_client, caplog) -> None:
        firestore.put(
            "_collections",
            "posts",
            {
                "label": "Posts",
                "kind": "singleType",
                "fields": [
                    {"name": "cover", "type": "media"},
                    {"name": "cover", "type": "text"},
                    {"type": "media"},
                    {"name": "odd", "type": "hologram"},
                    {"name": "gallery", "type": "media"},
                ],
            },
        )
        repo = FirestoreCollectionSchemaRepository(rest_client)

        with caplog.at_level(logging.WARNING):
            config = await repo.get_for_deletion("posts")

        assert config.slug == "posts"
        assert config.document_collection == "_single_posts"
        assert [f.name for f in config.media_fields] == ["cover", "gallery"]
        assert "duplicate field name 'cover'" in caplog.text
        assert "hologram" in caplog.text

    async def test_get_for_deletion_rejects_unknown_kind(self, firestore, rest_client) -> None:
        firestore.put("_collections", "posts", {"label": "Posts", "kind": "nope"})
        with pytest.raises(DocumentStoreError):
            await FirestoreCollectionSchemaRepository(rest_client).get_for_deletion("posts")

    async def test_damaged_schema_can_still_be_deleted(
        self, firestore, rest_client, token_verifier, asset_store
    ) -> None:
        firestore.put(
            "_collections",
            "posts",
            {
                "label": "Posts",
                "fields": [
                    {"name": "cover", "type": "media"},
                    {"name": "cover", "type": "media"},
                    {"name": "", "type": "text"},
                ],
            },
        )
        firestore.put("_permissions", "posts", {"find": True})
        firestore.put("posts", "a", {"cover": {"publicId": "pid1"}})
        firestore.put("posts", "b", {"cover": {"publicId": "pid2"}})
        asset_store.existing.update({"pid1", "pid2"})
        service = CollectionDeletionService(
            token_verifier=token_verifier,
            schema_repo=FirestoreCollectionSchemaRepository(rest_client),
            document_repo=FirestoreContentDocumentRepository(rest_client),
            asset_store=asset_store,
            permission_repo=FirestorePublicPermissionRepository(rest_client),
        )

        result = await service.delete_collection("posts", "valid-token")

        assert result.documents_deleted == 2
        assert result.assets_deleted == 2
        assert firestore.ids("posts") == []
        assert firestore.ids("_collections") == []
        assert firestore.ids("_permissions") == []

    async def test_unparseable_record_raises(self, firestore, rest_client) -> None:
        firestore.put("_collections", "posts", {"label": "Posts", "fields": [{"name": "x", "type": "?"}]})
        with pytest.raises(DocumentStoreError):
            await FirestoreCollectionSchemaRepository(rest_client).get("posts")

    async def test_list_all_sorted_and_skips_invalid(self, firestore, rest_client) -> None:
        firestore.put("_collections", "tags", {"label": "tags"})
        firestore.put("_collections", "articles", {"label": "Articles"})
        firestore.put("_collections", "broken", {"label": "B", "kind": "nope"})
        configs = await FirestoreCollectionSchemaRepository(rest_client).list_all()
        assert [c.slug for c in configs] == ["articles", "tags"]

    async def test_delete_is_idempotent(self, firestore, rest_client) -> None:
        firestore.put("_collections", "posts", {"label": "Posts"})
        repo = FirestoreCollectionSchemaRepository(rest_client)
        await repo.delete("posts")
        await repo.delete("posts")
        assert firestore.ids("_collections") == []


class TestPublicPermissionRepository:
    async def test_update_merges_and_get_reads_back(self, firestore, rest_client) -> None:
        firestore.put("_permissions", "posts", {"note": "keep me"})
        repo = FirestorePublicPermissionRepository(rest_client)

        await repo.update("posts", PublicPermissions(find=True))

        assert await repo.get("posts") == PublicPermissions(find=True)
        patch = next(r for r in firestore.requests if r.method == "PATCH")
        assert "find" in patch.url.params.get_list("updateMask.fieldPaths")
        assert "note" in firestore.docs[f"{firestore.root}/_permissions/posts"]

    async def test_missing_record_is_closed(self, rest_client) -> None:
        assert await FirestorePublicPermissionRepository(rest_client).get("posts") == PublicPermissions()

    async def test_delete(self, firestore, rest_client) -> None:
        firestore.put("_permissions", "posts", {"find": True})
        await FirestorePublicPermissionRepository(rest_client).delete("posts")
        assert firestore.ids("_permissions") == []


class TestRestClient:
    def test_rejects_nested_ids(self, rest_client) -> None:
        with pytest.raises(ValueError):
            rest_client.collection("a/b")
        with pytest.raises(ValueError):
            rest_client.collection("posts").document("")

    async def test_server_error_raises(self, make_rest_client) -> None:
        client = make_rest_client(httpx.MockTransport(lambda r: httpx.Response(500, text="x")))
        with pytest.raises(DocumentStoreError) as exc_info:
            await client.collection("posts").document("a").get()
        assert exc_info.value.status_code == 500
