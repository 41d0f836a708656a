"""Security: bearer token verification and JWT helpers."""

from headless_cms.infrastructure.security.jwt import create_access_token, verify_token
from headless_cms.infrastructure.security.token_verifier import (
    FirebaseTokenVerifier,
    JWTTokenVerifier,
    create_token_verifier,
)

__all__ = [
    "FirebaseTokenVerifier",
    "JWTTokenVerifier",
    "create_access_token",
    "create_token_verifier",
    "verify_token",
]
