"""
Review service: the only place that talks to the upstream /comments API.

Translates between the wire model (comments with a `star` field) and the
admin model (reviews with a `rating` field). Every failure leaves as a
ReviewServiceError carrying a display-ready message.
"""
from typing import Optional

import httpx

from ..errors import ReviewServiceError, describe_http_error
from ..schemas.reviews import (
    CommentPatch,
    CommentsEnvelope,
    ReviewPage,
    ReviewStatus,
    review_from_wire,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)

INVALID_PAYLOAD_MESSAGE = "Unexpected response from the reviews API"


class ReviewService:
    def __init__(self, client: httpx.Client):
        self.client = client

    def list_reviews(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[ReviewStatus] = None,
    ) -> ReviewPage:
        """GET /comments"""
        params = {}
        if page:
            params["page"] = page
        if limit:
            params["limit"] = limit
        if status:
            params["status"] = ReviewStatus(status).value

        try:
            response = self.client.get("/comments", params=params)
            response.raise_for_status()
            envelope = CommentsEnvelope.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            message = describe_http_error(exc) if isinstance(exc, httpx.HTTPError) else INVALID_PAYLOAD_MESSAGE
            logger.warning("reviews.list_failed", params=params, error=message)
            raise ReviewServiceError(message) from exc

        reviews = [review_from_wire(item) for item in envelope.comments]
        logger.info("reviews.listed", params=params, count=len(reviews), has_meta=envelope.meta is not None)
        return ReviewPage(reviews=reviews, meta=envelope.meta)

    def update_review(self, review_id: int, patch: CommentPatch) -> None:
        """PATCH /comments/{id}"""
        payload = patch.to_payload()
        try:
            response = self.client.patch(f"/comments/{review_id}", json=payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            message = describe_http_error(exc)
            logger.warning("reviews.update_failed", review_id=review_id, fields=sorted(payload), error=message)
            raise ReviewServiceError(message) from exc
        logger.info("reviews.updated", review_id=review_id, fields=sorted(payload))

    def delete_review(self, review_id: int) -> None:
        """DELETE /comments/{id}"""
        try:
            response = self.client.delete(f"/comments/{review_id}")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            message = describe_http_error(exc)
            logger.warning("reviews.delete_failed", review_id=review_id, error=message)
            raise ReviewServiceError(message) from exc
        logger.info("reviews.deleted", review_id=review_id)
