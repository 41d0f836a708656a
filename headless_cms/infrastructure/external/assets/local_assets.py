"""Local filesystem asset store with path traversal protection."""

from __future__ import annotations

from pathlib import Path

import aiofiles.os

from headless_cms.application.interfaces.services import ASSET_DELETED, ASSET_NOT_FOUND
from headless_cms.infrastructure.exceptions import AssetDeleteError

LOCAL_BATCH_LIMIT = 100


class LocalAssetStore:
    """Assets stored as files under storage_root, addressed by public id.

    A public id names a file with or without its extension
    (e.g. "cms-media/photo" matches "cms-media/photo.jpg").
    """

    def __init__(self, storage_root: str, batch_limit: int = LOCAL_BATCH_LIMIT) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.batch_limit = batch_limit

    def _get_full_path(self, public_id: str) -> Path:
        """Resolve and validate path under storage_root. Raises ValueError on traversal."""
        full_path = (self.storage_root / public_id).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise ValueError(f"Public id escapes storage root: {public_id!r}") from e
        return full_path

    def _matching_files(self, public_id: str) -> list[Path]:
        path = self._get_full_path(public_id)
        if path.is_file():
            return [path]
        if not path.parent.is_dir():
            return []
        return sorted(p for p in path.parent.glob(f"{path.name}.*") if p.is_file())

    async def delete(self, public_id: str) -> bool:
        """Delete the asset file(s). Returns True if deleted, False if not found."""
        try:
            files = self._matching_files(public_id)
            for file_path in files:
                await aiofiles.os.remove(file_path)
        except (OSError, ValueError) as e:
            raise AssetDeleteError([public_id], str(e)) from e
        return bool(files)

    async def bulk_delete(self, public_ids: list[str]) -> dict[str, str]:
        """Delete up to batch_limit assets; a failure on one id is reported, not raised."""
        if len(public_ids) > self.batch_limit:
            raise ValueError(
                f"bulk_delete accepts at most {self.batch_limit} ids, got {len(public_ids)}"
            )
        outcomes: dict[str, str] = {}
        for public_id in public_ids:
            try:
                deleted = await self.delete(public_id)
            except AssetDeleteError as e:
                outcomes[public_id] = e.reason
                continue
            outcomes[public_id] = ASSET_DELETED if deleted else ASSET_NOT_FOUND
        return outcomes
