"""Tests for JWT helpers, token verifiers and Firebase credential loading."""

from datetime import timedelta

import pytest

from headless_cms.core.config import get_settings
from headless_cms.domain.exceptions import AuthenticationException
from headless_cms.infrastructure.firebase.client import init_firebase, load_service_account
from headless_cms.infrastructure.security.jwt import create_access_token, verify_token
from headless_cms.infrastructure.security.token_verifier import (
    FirebaseTokenVerifier,
    JWTTokenVerifier,
    create_token_verifier,
)


def test_jwt_round_trip() -> None:
    token = create_access_token({"sub": "editor@example.com"})
    assert verify_token(token)["sub"] == "editor@example.com"


def test_expired_jwt_is_rejected() -> None:
    token = create_access_token({"sub": "x"}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError):
        verify_token(token)


def test_jwt_without_sub_is_rejected() -> None:
    token = create_access_token({"role": "admin"})
    with pytest.raises(ValueError):
        verify_token(token)


async def test_jwt_verifier_maps_errors_to_unauthorized() -> None:
    with pytest.raises(AuthenticationException):
        await JWTTokenVerifier().verify("garbage")


async def test_firebase_verifier_without_project_rejects() -> None:
    with pytest.raises(AuthenticationException):
        await FirebaseTokenVerifier(None).verify("token")


def test_create_token_verifier_follows_auth_provider() -> None:
    settings = get_settings()
    assert isinstance(create_token_verifier(settings), JWTTokenVerifier)
    firebase = create_token_verifier(
        settings.model_copy(update={"auth_provider": "firebase"}), project_id="demo"
    )
    assert isinstance(firebase, FirebaseTokenVerifier)
    assert firebase.project_id == "demo"


def test_firebase_is_optional() -> None:
    get_settings.cache_clear()
    assert load_service_account() is None
    assert init_firebase() is False


def test_invalid_service_account_json(monkeypatch) -> None:
    monkeypatch.setenv("FIREBASE_SERVICE_ACCOUNT_KEY", "{not json")
    get_settings.cache_clear()
    try:
        with pytest.raises(ValueError):
            load_service_account()
        assert init_firebase() is False
    finally:
        monkeypatch.delenv("FIREBASE_SERVICE_ACCOUNT_KEY")
        get_settings.cache_clear()
