import json
import math

import httpx
import pytest

from review_admin.controllers.reviews import ReviewController
from review_admin.services.reviews import ReviewService


def make_comment(comment_id, first_name="Jean", last_name="Dupont", product_name="Heat pump", **overrides):
    data = {
        "id": comment_id,
        "comment": f"Comment {comment_id}",
        "status": "PENDING",
        "star": 4,
        "userId": 100 + comment_id,
        "productId": 200 + comment_id,
        "createdAt": "2024-03-02T10:00:00Z",
        "updatedAt": "2024-03-03T10:00:00Z",
        "user": {"id": 100 + comment_id, "firstName": first_name, "lastName": last_name, "email": "x@example.com"},
        "product": {"id": 200 + comment_id, "name": product_name},
    }
    data.update(overrides)
    return data


class FakeCommentsAPI:
    """In-memory stand-in for the upstream /comments endpoints."""

    def __init__(self, comments=None, with_meta=True):
        self.comments = list(comments or [])
        self.with_meta = with_meta
        self.requests: list[httpx.Request] = []
        self.failures: dict[str, tuple[int, dict]] = {}

    def fail(self, method, status_code=500, body=None):
        self.failures[method] = (status_code, body if body is not None else {"message": "Server exploded"})

    def list_requests(self):
        return [r for r in self.requests if r.method == "GET"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method in self.failures:
            status_code, body = self.failures[request.method]
            return httpx.Response(status_code, json=body)

        path = request.url.path
        if request.method == "GET" and path == "/comments":
            return self._list(request)

        comment_id = int(path.rsplit("/", 1)[-1])
        target = next((c for c in self.comments if c["id"] == comment_id), None)
        if target is None:
            return httpx.Response(404, json={"message": "Comment not found"})
        if request.method == "PATCH":
            target.update(json.loads(request.content))
            return httpx.Response(200, json={"message": "updated"})
        if request.method == "DELETE":
            self.comments.remove(target)
            return httpx.Response(200, json={"message": "deleted"})
        return httpx.Response(405)

    def _list(self, request):
        params = request.url.params
        page = int(params.get("page", 1))
        limit = int(params.get("limit", 10))
        items = self.comments
        if "status" in params:
            items = [c for c in items if c["status"] == params["status"]]
        body = {"message": "ok", "comments": items[(page - 1) * limit:page * limit]}
        if self.with_meta:
            body["meta"] = {
                "total": len(items),
                "page": page,
                "limit": limit,
                "lastPage": max(1, math.ceil(len(items) / limit)),
            }
        return httpx.Response(200, json=body)


@pytest.fixture
def fake_api():
    return FakeCommentsAPI([make_comment(i) for i in range(1, 26)])


@pytest.fixture
def http_client(fake_api):
    client = httpx.Client(base_url="http://reviews.test", transport=httpx.MockTransport(fake_api))
    yield client
    client.close()


@pytest.fixture
def service(http_client):
    return ReviewService(http_client)


@pytest.fixture
def controller(service):
    return ReviewController(service, page=1, limit=10)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def comment_factory():
    return make_comment
