"""Public permission service: read, update and check per-collection public API flags."""

from __future__ import annotations

import logging

from headless_cms.application.dtos.content import PublicPermissions
from headless_cms.application.interfaces.repositories import IPublicPermissionRepository
from headless_cms.domain.entities.collection import validate_slug
from headless_cms.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)


class PublicPermissionService:
    """Gate generated API actions for unauthenticated callers.

    Reads fail closed: if the registry cannot be read, every action is
    treated as private.
    """

    def __init__(self, permission_repo: IPublicPermissionRepository) -> None:
        self._repo = permission_repo

    async def get_permissions(self, slug: str) -> PublicPermissions:
        """Return stored flags merged over the closed defaults."""
        validate_slug(slug)
        try:
            return await self._repo.get(slug)
        except Exception as e:
            logger.error("Error fetching permissions for %s: %s", slug, e)
            return PublicPermissions()

    async def update_permissions(
        self, slug: str, permissions: PublicPermissions
    ) -> PublicPermissions:
        """Persist flags for slug and return them. Store errors propagate."""
        validate_slug(slug)
        await self._repo.update(slug, permissions)
        return permissions

    async def check(self, slug: str, action: str) -> bool:
        """Return whether action is public for slug.

        Raises:
            ValidationException: action is not one of the generated API actions.
        """
        if action not in PublicPermissions.actions():
            raise ValidationException(f"Unknown API action: {action!r}", field="action")
        permissions = await self.get_permissions(slug)
        return permissions.allows(action)
