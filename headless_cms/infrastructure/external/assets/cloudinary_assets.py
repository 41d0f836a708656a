"""Cloudinary asset store over the Admin REST API (httpx, basic auth)."""

from __future__ import annotations

import logging

import httpx

from headless_cms.application.interfaces.services import ASSET_DELETED, ASSET_NOT_FOUND
from headless_cms.infrastructure.exceptions import AssetDeleteError

logger = logging.getLogger(__name__)

_API_BASE = "https://api.cloudinary.com/v1_1"

# delete_resources accepts at most 100 public ids per call.
CLOUDINARY_BATCH_LIMIT = 100


class CloudinaryAssetStore:
    """Delete uploaded resources by public id.

    Uses DELETE /resources/{resource_type}/upload with public_ids[] query
    parameters. The response maps each id to "deleted" or "not_found".
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        resource_type: str = "image",
        *,
        batch_limit: int = CLOUDINARY_BATCH_LIMIT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not 1 <= batch_limit <= CLOUDINARY_BATCH_LIMIT:
            raise ValueError(f"batch_limit must be between 1 and {CLOUDINARY_BATCH_LIMIT}")
        self.cloud_name = cloud_name
        self.resource_type = resource_type
        self.batch_limit = batch_limit
        self._auth = httpx.BasicAuth(api_key, api_secret)
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @property
    def _resources_url(self) -> str:
        return f"{_API_BASE}/{self.cloud_name}/resources/{self.resource_type}/upload"

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it."""
        if self._owns_http:
            await self._http.aclose()

    async def bulk_delete(self, public_ids: list[str]) -> dict[str, str]:
        """Delete up to batch_limit resources; return public_id -> outcome.

        Ids missing from the response are reported as "not_found".

        Raises:
            ValueError: More than batch_limit ids.
            AssetDeleteError: Transport failure or non-2xx response.
        """
        if not public_ids:
            return {}
        if len(public_ids) > self.batch_limit:
            raise ValueError(
                f"bulk_delete accepts at most {self.batch_limit} ids, got {len(public_ids)}"
            )
        params = [("public_ids[]", public_id) for public_id in public_ids]
        try:
            resp = await self._http.delete(self._resources_url, params=params, auth=self._auth)
        except httpx.HTTPError as e:
            raise AssetDeleteError(public_ids, str(e)) from e
        if resp.status_code != 200:
            raise AssetDeleteError(
                public_ids, f"Cloudinary returned {resp.status_code}: {resp.text[:300]}"
            )
        deleted = (resp.json() or {}).get("deleted") or {}
        outcomes = {public_id: deleted.get(public_id, ASSET_NOT_FOUND) for public_id in public_ids}
        logger.debug(
            "Cloudinary deleted %d of %d resources",
            sum(1 for o in outcomes.values() if o == ASSET_DELETED),
            len(public_ids),
        )
        return outcomes

    async def delete(self, public_id: str) -> bool:
        """Delete one resource. True if deleted, False if it did not exist."""
        outcome = (await self.bulk_delete([public_id]))[public_id]
        if outcome == ASSET_DELETED:
            return True
        if outcome == ASSET_NOT_FOUND:
            return False
        raise AssetDeleteError([public_id], outcome)
