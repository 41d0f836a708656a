"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
Keeps the deployment small (avoids grpcio / firebase-admin).
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

from headless_cms.infrastructure.exceptions import DocumentStoreError
from headless_cms.infrastructure.firebase._rest_encoding import (
    decode_document,
    encode_document,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"

# Firestore rejects commits with more than 500 writes.
MAX_BATCH_WRITES = 500
_LIST_PAGE_SIZE = 300


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


def _url(path: str) -> str:
    return f"{_BASE}/{quote(path, safe='/():')}"


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: dict | list | None = None,
) -> dict | list | None:
    """Perform async HTTP request to Firestore REST API. 404 returns None.

    Raises:
        DocumentStoreError: Transport failure or any other non-2xx response.
    """
    if method not in ("GET", "PATCH", "POST", "DELETE"):
        raise ValueError(f"Unsupported method: {method!r}")
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    try:
        resp = await client.request(method, url, headers=headers, json=body, params=params)
    except httpx.HTTPError as e:
        raise DocumentStoreError(method, str(e)) from e
    if resp.status_code == 404:
        return None
    if resp.status_code not in (200, 204):
        raise DocumentStoreError(method, resp.text[:500], resp.status_code)
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


def _doc_id(name: str) -> str:
    return name.split("/")[-1] if name else ""


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    @property
    def path(self) -> str:
        """Full resource name (projects/.../documents/{collection}/{id})."""
        return self._path

    async def set(self, data: dict[str, Any], *, merge: bool = False) -> None:
        """Create or overwrite the document.

        With merge=True only the given top-level fields are written
        (updateMask); other stored fields are kept.
        """
        params = [("updateMask.fieldPaths", key) for key in data] if merge else None
        await _request_async(
            self._client._http,
            _url(self._path),
            method="PATCH",
            body=encode_document(data),
            access_token=await self._client.get_token(),
            params=params,
        )

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            _url(self._path),
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out.get("fields")))

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        await _request_async(
            self._client._http,
            _url(self._path),
            method="DELETE",
            access_token=await self._client.get_token(),
        )


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    def document(self, document_id: str) -> DocumentReference:
        if not document_id or "/" in document_id:
            raise ValueError(f"Invalid document id: {document_id!r}")
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection, following nextPageToken."""
        page_token: str | None = None
        while True:
            params: dict[str, Any] = {"pageSize": _LIST_PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token
            out = await _request_async(
                self._client._http,
                _url(self._path),
                access_token=await self._client.get_token(),
                params=params,
            )
            if not out:
                return
            for doc in out.get("documents", []):
                yield DocumentSnapshot(
                    _doc_id(doc.get("name", "")), decode_document(doc.get("fields"))
                )
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class WriteBatch:
    """Atomic set of deletes applied with one documents:commit call."""

    def __init__(self, client: FirestoreRESTClient):
        self._client = client
        self._writes: list[dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._writes)

    def delete(self, ref: DocumentReference) -> WriteBatch:
        """Queue a delete. Raises ValueError past MAX_BATCH_WRITES."""
        if len(self._writes) >= MAX_BATCH_WRITES:
            raise ValueError(f"A batch holds at most {MAX_BATCH_WRITES} writes")
        self._writes.append({"delete": ref.path})
        return self

    async def commit(self) -> None:
        """Apply all queued writes atomically. An empty batch is a no-op."""
        if not self._writes:
            return
        out = await _request_async(
            self._client._http,
            f"{_url(self._client.documents_root)}:commit",
            method="POST",
            body={"writes": self._writes},
            access_token=await self._client.get_token(),
        )
        if out is None:
            raise DocumentStoreError("commit", "database not found", 404)
        self._writes = []


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def documents_root(self) -> str:
        return self._prefix

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        if not collection_id or "/" in collection_id:
            raise ValueError(f"Invalid collection id: {collection_id!r}")
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    def batch(self) -> WriteBatch:
        return WriteBatch(self)
