"""Service interfaces (ports) for the application layer.

Protocols define contracts for external collaborators (DIP): the asset
store behind the CDN and the identity provider's token verifier.
"""

from __future__ import annotations

from typing import Any, Protocol

# Outcome strings returned per public id by IAssetStore.bulk_delete.
ASSET_DELETED = "deleted"
ASSET_NOT_FOUND = "not_found"


# Asset store interface
class IAssetStore(Protocol):
    """Protocol for externally hosted media assets (Cloudinary, S3, local)."""

    batch_limit: int
    """Maximum number of public ids accepted by one bulk_delete call."""

    async def bulk_delete(self, public_ids: list[str]) -> dict[str, str]:
        """Delete up to batch_limit assets; return public_id -> outcome.

        Outcome is ASSET_DELETED, ASSET_NOT_FOUND, or a backend error string.
        Empty input returns {} without a network call. Raises ValueError when
        given more than batch_limit ids and AssetDeleteError when the whole
        call fails.
        """

    async def delete(self, public_id: str) -> bool:
        """Delete one asset. Returns True if deleted, False if not found."""


# Token verifier interface
class ITokenVerifier(Protocol):
    """Protocol for verifying bearer tokens issued by the identity provider."""

    async def verify(self, token: str) -> dict[str, Any]:
        """Return decoded claims. Raises AuthenticationException if invalid."""
