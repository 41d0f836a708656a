"""DTOs for cascading collection deletion (result accumulator)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AssetDeletionWarning:
    """Non-fatal failure recorded while deleting media assets or cleaning up.

    A warning never changes the overall outcome of a deletion; it lists the
    asset ids (if any) that may have survived in object storage.
    """

    stage: str
    """Stage that produced the warning (e.g. 'delete_assets')."""

    reason: str
    """Human-readable failure text."""

    public_ids: tuple[str, ...] = ()
    """Asset ids affected by the failure."""

    chunk_index: int | None = None
    """Index of the failed asset chunk, when applicable."""


@dataclass(frozen=True)
class CollectionDeletionResult:
    """Outcome of a successful cascading deletion, including degraded parts."""

    slug: str
    documents_deleted: int
    document_batches: int
    asset_ids_requested: int
    assets_deleted: int = 0
    assets_not_found: int = 0
    warnings: tuple[AssetDeletionWarning, ...] = field(default_factory=tuple)

    @property
    def degraded(self) -> bool:
        """True when some non-fatal step failed (assets may have leaked)."""
        return bool(self.warnings)
