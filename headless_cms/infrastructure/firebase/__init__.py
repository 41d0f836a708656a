"""Firestore integration over the REST API."""

from headless_cms.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)

__all__ = [
    "close_firebase",
    "get_firestore_client",
    "init_firebase",
]
