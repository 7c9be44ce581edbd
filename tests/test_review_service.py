import json

import httpx
import pytest

from review_admin.api_client import create_api_client
from review_admin.errors import ReviewServiceError
from review_admin.schemas.reviews import CommentPatch, ReviewStatus
from review_admin.services.reviews import ReviewService


class TestListReviews:
    def test_omits_query_params_that_are_not_given(self, service, fake_api):
        service.list_reviews()
        assert fake_api.requests[-1].url.query == b""
        assert fake_api.requests[-1].url.path == "/comments"

    def test_sends_page_limit_and_status(self, service, fake_api):
        service.list_reviews(page=2, limit=5, status=ReviewStatus.DENIED)
        params = fake_api.requests[-1].url.params
        assert params["page"] == "2"
        assert params["limit"] == "5"
        assert params["status"] == "DENIED"

    def test_maps_comments_to_reviews(self, service):
        result = service.list_reviews(page=1, limit=10)
        assert len(result.reviews) == 10
        first = result.reviews[0]
        assert first.rating == 4
        assert first.customer_name == "Jean Dupont"
        assert first.order_number == "Heat pump"

    def test_returns_server_meta(self, service):
        result = service.list_reviews(page=3, limit=10)
        assert result.meta.page == 3
        assert result.meta.last_page == 3
        assert result.meta.total == 25

    def test_meta_is_optional(self, service, fake_api):
        fake_api.with_meta = False
        result = service.list_reviews()
        assert result.meta is None

    def test_http_error_becomes_review_service_error(self, service, fake_api):
        fake_api.fail("GET", 403, {"message": "Admins only"})
        with pytest.raises(ReviewServiceError) as excinfo:
            service.list_reviews()
        assert excinfo.value.message == "Admins only"

    def test_malformed_payload_becomes_review_service_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"comments": [{"id": "x"}]}))
        with httpx.Client(base_url="http://reviews.test", transport=transport) as client:
            with pytest.raises(ReviewServiceError) as excinfo:
                ReviewService(client).list_reviews()
        assert excinfo.value.message == "Unexpected response from the reviews API"

    def test_transport_error_becomes_review_service_error(self):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with httpx.Client(base_url="http://reviews.test", transport=httpx.MockTransport(refuse)) as client:
            with pytest.raises(ReviewServiceError, match="Connection refused"):
                ReviewService(client).list_reviews()


class TestUpdateReview:
    def test_patches_only_set_fields(self, service, fake_api):
        service.update_review(4, CommentPatch(star=2))
        request = fake_api.requests[-1]
        assert request.method == "PATCH"
        assert request.url.path == "/comments/4"
        assert json.loads(request.content) == {"star": 2}

    def test_failure_raises(self, service, fake_api):
        fake_api.fail("PATCH", 422, {})
        with pytest.raises(ReviewServiceError, match="Validation failed"):
            service.update_review(4, CommentPatch(comment="x"))

    def test_unknown_review(self, service):
        with pytest.raises(ReviewServiceError, match="Comment not found"):
            service.update_review(999, CommentPatch(comment="x"))


class TestDeleteReview:
    def test_deletes_by_id(self, service, fake_api):
        service.delete_review(7)
        assert fake_api.requests[-1].method == "DELETE"
        assert fake_api.requests[-1].url.path == "/comments/7"
        assert all(c["id"] != 7 for c in fake_api.comments)

    def test_failure_raises(self, service, fake_api):
        fake_api.fail("DELETE", 401, {})
        with pytest.raises(ReviewServiceError, match="Unauthorized"):
            service.delete_review(7)


def test_api_client_sends_bearer_token_and_platform(fake_api):
    client = create_api_client("secret-token", transport=httpx.MockTransport(fake_api))
    try:
        ReviewService(client).delete_review(1)
    finally:
        client.close()
    headers = fake_api.requests[-1].headers
    assert headers["Authorization"] == "Bearer secret-token"
    assert headers["x-platform"] == "web"
