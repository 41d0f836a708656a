"""Unit tests for the Cloudinary, S3 and local asset stores."""

from unittest.mock import MagicMock

import httpx
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from pydantic import SecretStr

from headless_cms.core.config import Settings
from headless_cms.infrastructure.exceptions import AssetDeleteError, AssetStoreConfigError
from headless_cms.infrastructure.external.assets import AssetStoreFactory
from headless_cms.infrastructure.external.assets.cloudinary_assets import CloudinaryAssetStore
from headless_cms.infrastructure.external.assets.local_assets import LocalAssetStore
from headless_cms.infrastructure.external.assets.s3_assets import S3AssetStore


def _cloudinary(handler) -> CloudinaryAssetStore:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CloudinaryAssetStore("demo", "key", "secret", http_client=client)


class TestCloudinaryAssetStore:
    async def test_bulk_delete_sends_ids_and_maps_outcomes(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"deleted": {"a": "deleted", "b": "not_found"}})

        store = _cloudinary(handler)
        outcomes = await store.bulk_delete(["a", "b", "c"])

        assert outcomes == {"a": "deleted", "b": "not_found", "c": "not_found"}
        request = seen[0]
        assert request.method == "DELETE"
        assert request.url.path == "/v1_1/demo/resources/image/upload"
        assert request.url.params.get_list("public_ids[]") == ["a", "b", "c"]
        assert request.headers["Authorization"].startswith("Basic ")

    async def test_empty_input_makes_no_call(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("unexpected request")

        assert await _cloudinary(handler).bulk_delete([]) == {}

    async def test_over_limit_is_rejected(self) -> None:
        store = _cloudinary(lambda request: httpx.Response(200, json={}))
        with pytest.raises(ValueError):
            await store.bulk_delete([f"id{i}" for i in range(101)])

    async def test_error_status_raises(self) -> None:
        store = _cloudinary(lambda request: httpx.Response(420, text="Rate Limited"))
        with pytest.raises(AssetDeleteError) as exc_info:
            await store.bulk_delete(["a"])
        assert exc_info.value.public_ids == ["a"]
        assert "420" in exc_info.value.reason

    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(AssetDeleteError):
            await _cloudinary(handler).bulk_delete(["a"])

    async def test_single_delete(self) -> None:
        store = _cloudinary(lambda request: httpx.Response(200, json={"deleted": {"a": "deleted"}}))
        assert await store.delete("a") is True
        store = _cloudinary(lambda request: httpx.Response(200, json={"deleted": {}}))
        assert await store.delete("a") is False

    def test_batch_limit_capped(self) -> None:
        with pytest.raises(ValueError):
            CloudinaryAssetStore("demo", "key", "secret", batch_limit=101)


class TestS3AssetStore:
    async def test_bulk_delete_reports_errors(self) -> None:
        client = MagicMock()
        client.delete_objects.return_value = {
            "Deleted": [{"Key": "a"}],
            "Errors": [{"Key": "b", "Code": "AccessDenied"}],
        }
        store = S3AssetStore("media", client=client)

        outcomes = await store.bulk_delete(["a", "b"])

        assert outcomes == {"a": "deleted", "b": "AccessDenied"}
        kwargs = client.delete_objects.call_args.kwargs
        assert kwargs["Bucket"] == "media"
        assert kwargs["Delete"]["Objects"] == [{"Key": "a"}, {"Key": "b"}]

    async def test_request_failure_raises(self) -> None:
        client = MagicMock()
        client.delete_objects.side_effect = EndpointConnectionError(endpoint_url="http://s3")
        with pytest.raises(AssetDeleteError):
            await S3AssetStore("media", client=client).bulk_delete(["a"])

    async def test_single_delete_missing_key(self) -> None:
        client = MagicMock()
        client.head_object.side_effect = ClientError(
            {"Error": {"Code": "404", "Message": "Not Found"}}, "HeadObject"
        )
        assert await S3AssetStore("media", client=client).delete("gone") is False
        client.delete_object.assert_not_called()

    async def test_single_delete_existing_key(self) -> None:
        client = MagicMock()
        assert await S3AssetStore("media", client=client).delete("a") is True
        client.delete_object.assert_called_once_with(Bucket="media", Key="a")


class TestLocalAssetStore:
    async def test_deletes_file_with_extension(self, tmp_path) -> None:
        (tmp_path / "cms-media").mkdir()
        photo = tmp_path / "cms-media" / "photo.jpg"
        photo.write_bytes(b"x")
        store = LocalAssetStore(str(tmp_path))

        outcomes = await store.bulk_delete(["cms-media/photo", "cms-media/missing"])

        assert outcomes == {"cms-media/photo": "deleted", "cms-media/missing": "not_found"}
        assert not photo.exists()

    async def test_exact_name_match(self, tmp_path) -> None:
        (tmp_path / "raw.bin").write_bytes(b"x")
        assert await LocalAssetStore(str(tmp_path)).delete("raw.bin") is True

    async def test_traversal_is_reported_per_id(self, tmp_path) -> None:
        store = LocalAssetStore(str(tmp_path / "root"))
        outcomes = await store.bulk_delete(["../etc/passwd"])
        assert outcomes["../etc/passwd"] not in ("deleted", "not_found")

    async def test_traversal_raises_on_single_delete(self, tmp_path) -> None:
        with pytest.raises(AssetDeleteError):
            await LocalAssetStore(str(tmp_path)).delete("../../outside")


class TestAssetStoreFactory:
    def _settings(self, **overrides) -> Settings:
        values = {"auth_provider": "jwt", "secret_key": SecretStr("k"), "asset_backend": "local"}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    def test_local(self, tmp_path) -> None:
        store = AssetStoreFactory.create_asset_store(self._settings(storage_root=str(tmp_path)))
        assert isinstance(store, LocalAssetStore)

    def test_cloudinary(self) -> None:
        store = AssetStoreFactory.create_asset_store(
            self._settings(
                asset_backend="cloudinary",
                cloudinary_cloud_name="demo",
                cloudinary_api_key="key",
                cloudinary_api_secret=SecretStr("secret"),
            )
        )
        assert isinstance(store, CloudinaryAssetStore)
        assert store.batch_limit == 100

    def test_s3(self) -> None:
        store = AssetStoreFactory.create_asset_store(
            self._settings(asset_backend="s3", s3_bucket="media")
        )
        assert isinstance(store, S3AssetStore)

    def test_empty_storage_root_is_rejected(self) -> None:
        with pytest.raises(AssetStoreConfigError):
            AssetStoreFactory.create_asset_store(self._settings(storage_root=""))
