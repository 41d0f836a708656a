"""S3-compatible asset store (AWS S3, MinIO, etc.): public ids are object keys."""

from __future__ import annotations

import asyncio

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from headless_cms.application.interfaces.services import ASSET_DELETED
from headless_cms.infrastructure.exceptions import AssetDeleteError

# DeleteObjects accepts 1000 keys; keep chunks aligned with the CDN limit.
S3_BATCH_LIMIT = 100


class S3AssetStore:
    """Delete objects by key with DeleteObjects.

    Uses boto3 (sync) via asyncio.to_thread for async API. S3 reports
    deleting a missing key as a success, so bulk_delete never returns
    "not_found"; single delete checks existence first.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        *,
        batch_limit: int = S3_BATCH_LIMIT,
        client=None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            batch_limit: Maximum keys per bulk_delete call.
            client: Pre-built boto3 S3 client (tests).
        """
        self.bucket = bucket
        self.batch_limit = batch_limit
        if client is None:
            extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
            client = boto3.client(
                "s3",
                region_name=region,
                aws_access_key_id=access_key,
                aws_secret_access_key=secret_key,
                **extra,
            )
        self._client = client

    async def bulk_delete(self, public_ids: list[str]) -> dict[str, str]:
        """Delete up to batch_limit objects; return key -> outcome.

        Keys listed under Errors carry the S3 error code as their outcome.

        Raises:
            ValueError: More than batch_limit ids.
            AssetDeleteError: The request itself failed.
        """
        if not public_ids:
            return {}
        if len(public_ids) > self.batch_limit:
            raise ValueError(
                f"bulk_delete accepts at most {self.batch_limit} ids, got {len(public_ids)}"
            )

        def _delete() -> dict:
            return self._client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": key} for key in public_ids], "Quiet": False},
            )

        try:
            resp = await asyncio.to_thread(_delete)
        except (ClientError, BotoCoreError) as e:
            raise AssetDeleteError(public_ids, str(e)) from e

        outcomes = {key: ASSET_DELETED for key in public_ids}
        for error in resp.get("Errors") or []:
            key = error.get("Key")
            if key in outcomes:
                outcomes[key] = error.get("Code") or "error"
        return outcomes

    async def delete(self, public_id: str) -> bool:
        """Delete one object. Returns True if deleted, False if not found."""
        def _delete() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=public_id)
            except ClientError as e:
                if e.response["Error"]["Code"] in ("404", "NoSuchKey"):
                    return False
                raise
            self._client.delete_object(Bucket=self.bucket, Key=public_id)
            return True

        try:
            return await asyncio.to_thread(_delete)
        except (ClientError, BotoCoreError) as e:
            raise AssetDeleteError([public_id], str(e)) from e
