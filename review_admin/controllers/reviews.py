from typing import Optional

from ..errors import ReviewServiceError
from ..schemas.reviews import (
    Review,
    ReviewMeta,
    ReviewStatus,
    ReviewUpdate,
    meta_from_wire,
    to_comment_patch,
)
from ..services.reviews import ReviewService
from ..utils.logging import get_logger

logger = get_logger(__name__)


class ReviewController:
    """
    Holds the loaded page of reviews and mediates every call to the service.
    Service failures end up in `error`; nothing is raised to the caller.
    """

    def __init__(
        self,
        service: ReviewService,
        page: int = 1,
        limit: int = 10,
        status: Optional[ReviewStatus] = None,
    ):
        self.service = service
        self.page = page
        self.limit = limit
        self.status = status

        self.reviews: list[Review] = []
        self.loading = False
        self.error: Optional[str] = None
        self.meta: Optional[ReviewMeta] = None
        self.mounted = False

    def mount(self) -> None:
        if self.mounted:
            return
        self.mounted = True
        self.load()

    def load(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        status: Optional[ReviewStatus] = None,
    ) -> None:
        self.loading = True
        self.error = None
        try:
            result = self.service.list_reviews(
                page=page or self.page,
                limit=limit or self.limit,
                status=status or self.status,
            )
            self.reviews = result.reviews
            self.meta = meta_from_wire(result.meta, len(result.reviews))
        except ReviewServiceError as exc:
            logger.error("controller.load_failed", error=exc.message)
            self.error = exc.message
            self.reviews = []
            self.meta = None
        finally:
            self.loading = False

    def refresh(self) -> None:
        self.load()

    def update(self, review_id: int, fields: ReviewUpdate) -> bool:
        self.loading = True
        self.error = None
        try:
            self.service.update_review(review_id, to_comment_patch(fields))
            self.load()
            return True
        except ReviewServiceError as exc:
            logger.error("controller.update_failed", review_id=review_id, error=exc.message)
            self.error = exc.message
            return False
        finally:
            self.loading = False

    def delete(self, review_id: int) -> bool:
        self.loading = True
        self.error = None
        try:
            self.service.delete_review(review_id)
            self.load()
            return True
        except ReviewServiceError as exc:
            logger.error("controller.delete_failed", review_id=review_id, error=exc.message)
            self.error = exc.message
            return False
        finally:
            self.loading = False

    def clear_error(self) -> None:
        self.error = None
