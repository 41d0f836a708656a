"""Integration fixtures: an in-memory Firestore REST v1 server behind httpx.MockTransport.

Supports the calls FirestoreRESTClient makes: document GET/PATCH/DELETE,
paginated collection listing and documents:commit with delete writes.
"""

import json

import httpx
import pytest

from headless_cms.infrastructure.firebase._rest_client import FirestoreRESTClient
from headless_cms.infrastructure.firebase._rest_encoding import encode_document

PROJECT = "demo-project"
ROOT = f"projects/{PROJECT}/databases/(default)/documents"


class FakeCredentials:
    valid = True
    token = "test-access-token"


class FakeFirestore:
    root = ROOT

    def __init__(self) -> None:
        self.docs: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.commits: list[dict] = []
        self.fail_commit_status: int | None = None

    def put(self, collection: str, doc_id: str, data: dict) -> None:
        self.docs[f"{ROOT}/{collection}/{doc_id}"] = encode_document(data)["fields"]

    def ids(self, collection: str) -> list[str]:
        prefix = f"{ROOT}/{collection}/"
        return sorted(name[len(prefix):] for name in self.docs if name.startswith(prefix))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        assert request.headers["Authorization"] == f"Bearer {FakeCredentials.token}"
        path = request.url.path.removeprefix("/v1/")
        if request.method == "POST" and path == f"{ROOT}:commit":
            return self._commit(json.loads(request.content))
        depth = len(path[len(ROOT) + 1:].split("/"))
        if request.method == "GET" and depth == 1:
            return self._list(path, request.url.params)
        if request.method == "GET":
            if path not in self.docs:
                return httpx.Response(404, json={"error": {"code": 404}})
            return httpx.Response(200, json={"name": path, "fields": self.docs[path]})
        if request.method == "PATCH":
            fields = json.loads(request.content)["fields"]
            mask = request.url.params.get_list("updateMask.fieldPaths")
            if mask:
                merged = dict(self.docs.get(path, {}))
                merged.update({k: fields[k] for k in mask if k in fields})
                fields = merged
            self.docs[path] = fields
            return httpx.Response(200, json={"name": path, "fields": fields})
        if request.method == "DELETE":
            self.docs.pop(path, None)
            return httpx.Response(200, json={})
        return httpx.Response(405)

    def _list(self, path: str, params: httpx.QueryParams) -> httpx.Response:
        prefix = f"{path}/"
        names = sorted(n for n in self.docs if n.startswith(prefix) and "/" not in n[len(prefix):])
        size = int(params.get("pageSize", 100))
        start = int(params.get("pageToken", 0))
        page = names[start : start + size]
        body: dict = {}
        if page:
            body["documents"] = [{"name": n, "fields": self.docs[n]} for n in page]
        if start + size < len(names):
            body["nextPageToken"] = str(start + size)
        return httpx.Response(200, json=body)

    def _commit(self, body: dict) -> httpx.Response:
        if self.fail_commit_status is not None:
            return httpx.Response(self.fail_commit_status, text="commit rejected")
        self.commits.append(body)
        for write in body.get("writes", []):
            self.docs.pop(write["delete"], None)
        return httpx.Response(200, json={"writeResults": [{} for _ in body.get("writes", [])]})


@pytest.fixture
def firestore() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
async def make_rest_client():
    """Build FirestoreRESTClient instances over a given transport; closed at teardown."""
    opened: list[httpx.AsyncClient] = []

    def _make(transport: httpx.BaseTransport) -> FirestoreRESTClient:
        http = httpx.AsyncClient(transport=transport)
        opened.append(http)
        return FirestoreRESTClient(PROJECT, FakeCredentials(), http_client=http)

    yield _make
    for http in opened:
        await http.aclose()


@pytest.fixture
async def rest_client(firestore):
    http = httpx.AsyncClient(transport=firestore.transport())
    client = FirestoreRESTClient(PROJECT, FakeCredentials(), http_client=http)
    yield client
    await http.aclose()
