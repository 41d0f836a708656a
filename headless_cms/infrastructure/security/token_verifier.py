"""Bearer token verifiers (implement ITokenVerifier).

FirebaseTokenVerifier checks Firebase ID tokens with google-auth;
JWTTokenVerifier checks locally issued HS256 tokens.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from google.auth import exceptions as google_auth_exceptions
from google.auth.transport.requests import Request
from google.oauth2 import id_token

from headless_cms.domain.exceptions import AuthenticationException
from headless_cms.infrastructure.security.jwt import verify_token

if TYPE_CHECKING:
    from headless_cms.application.interfaces.services import ITokenVerifier
    from headless_cms.core.config import Settings

logger = logging.getLogger(__name__)


class FirebaseTokenVerifier:
    """Verify Firebase ID tokens (signature, expiry, audience = project id)."""

    def __init__(self, project_id: str | None) -> None:
        self.project_id = project_id
        self._request = Request()

    async def verify(self, token: str) -> dict[str, Any]:
        if not self.project_id:
            raise AuthenticationException("Firebase project is not configured")
        try:
            claims = await asyncio.to_thread(
                id_token.verify_firebase_token, token, self._request, self.project_id
            )
        except (ValueError, google_auth_exceptions.GoogleAuthError) as e:
            logger.info("Rejected Firebase ID token: %s", e)
            raise AuthenticationException("Unauthorized") from e
        if not claims:
            raise AuthenticationException("Unauthorized")
        return claims


class JWTTokenVerifier:
    """Verify HS256 tokens signed with SECRET_KEY."""

    async def verify(self, token: str) -> dict[str, Any]:
        try:
            return verify_token(token)
        except ValueError as e:
            logger.info("Rejected JWT: %s", e)
            raise AuthenticationException("Unauthorized") from e


def create_token_verifier(settings: Settings, project_id: str | None = None) -> ITokenVerifier:
    """Return the verifier for settings.auth_provider.

    Args:
        settings: Application settings.
        project_id: Fallback Firebase project (from the service account) when
            FIREBASE_PROJECT_ID is not set.
    """
    if settings.auth_provider == "jwt":
        return JWTTokenVerifier()
    return FirebaseTokenVerifier(settings.firebase_project_id or project_id)
