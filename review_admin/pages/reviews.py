"""
View model for the admin review list page.

Owns the search box, the page/page-size selection, the edit and delete
modals and the toasts; everything else is delegated to ReviewController.
The search filter only sees the page that was fetched, it never queries
the API.
"""
import time
from datetime import datetime
from typing import Optional

from ..components.modals import ConfirmModal, EditReviewModal, ModalType
from ..components.toast import ToastQueue
from ..controllers.reviews import ReviewController
from ..errors import ReviewServiceError
from ..schemas.reviews import Review, ReviewUpdate
from ..services.reviews import ReviewService
from ..utils.logging import get_logger

logger = get_logger(__name__)

ELLIPSIS = "..."
STAR_FILLED = "★"
STAR_EMPTY = "☆"

EDIT_SUCCESS_MESSAGE = "Review updated successfully"
EDIT_ERROR_MESSAGE = "Error while updating the review"
DELETE_SUCCESS_MESSAGE = "Review deleted successfully"
DELETE_ERROR_MESSAGE = "Error while deleting the review"
DELETE_TITLE = "Delete review"
DELETE_CONFIRM_TEXT = "Delete"


def page_numbers(current: int, last: int) -> list[int | str]:
    """
    Pager entries: first and last page, two pages either side of the current
    one, and an ellipsis for each gap in between.
    """
    if last <= 1:
        return []
    pages: list[int | str] = [1]
    start = max(2, current - 2)
    end = min(last - 1, current + 2)
    if start > 2:
        pages.append(ELLIPSIS)
    pages.extend(range(start, end + 1))
    if end < last - 1:
        pages.append(ELLIPSIS)
    pages.append(last)
    return pages


def filter_reviews(reviews: list[Review], search_term: str) -> list[Review]:
    term = search_term.lower()
    return [
        review
        for review in reviews
        if term in review.customer_name.lower()
        or term in review.order_number.lower()
        or term in review.comment.lower()
    ]


def render_stars(rating: int, max_rating: int = 5) -> str:
    return "".join(STAR_FILLED if idx < rating else STAR_EMPTY for idx in range(max_rating))


def format_date(value: datetime) -> str:
    return value.strftime("%d/%m/%Y")


def delete_message(review: Review) -> str:
    return (
        f"Are you sure you want to delete the review from customer {review.customer_name}? "
        "This action cannot be undone."
    )


class ReviewListPage:
    def __init__(
        self,
        controller: ReviewController,
        service: ReviewService,
        current_page: int = 1,
        items_per_page: int = 10,
        page_size_options: Optional[list[int]] = None,
        close_delay: float = 0.3,
        clock=time.monotonic,
    ):
        self.controller = controller
        self.service = service
        self.search_term = ""
        self.current_page = current_page
        self.items_per_page = items_per_page
        self.page_size_options = list(page_size_options or [10, 25, 50])
        self.toasts = ToastQueue()

        self.selected_review: Optional[Review] = None
        self.review_to_delete: Optional[Review] = None
        self.last_error: Optional[str] = None
        self.edit_modal = EditReviewModal(
            on_submit=self.submit_edit,
            on_close=self._edit_closed,
            close_delay=close_delay,
            clock=clock,
        )
        self.confirm_modal = ConfirmModal(
            on_confirm=self.confirm_delete,
            on_close=self._delete_closed,
            close_delay=close_delay,
            clock=clock,
        )

        self.controller.page = self.current_page
        self.controller.limit = self.items_per_page

    @property
    def meta(self):
        return self.controller.meta

    @property
    def filtered_reviews(self) -> list[Review]:
        return filter_reviews(self.controller.reviews, self.search_term)

    def set_search(self, term: str) -> None:
        self.search_term = term

    def _select_page(self, page: int, limit: int) -> None:
        self.current_page = page
        self.items_per_page = limit
        self.controller.page = page
        self.controller.limit = limit
        self.controller.load(page=page, limit=limit)

    def change_page_size(self, limit: int) -> None:
        self._select_page(1, limit)

    def change_page(self, page: int) -> None:
        meta = self.controller.meta
        if meta is None:
            return
        if page < 1 or page > meta.last_page:
            logger.debug("page.out_of_range_ignored", page=page, last_page=meta.last_page)
            return
        self._select_page(page, self.items_per_page)

    def next_page(self) -> None:
        self.change_page(self.current_page + 1)

    def previous_page(self) -> None:
        self.change_page(self.current_page - 1)

    def page_numbers(self) -> list[int | str]:
        meta = self.controller.meta
        if meta is None:
            return []
        return page_numbers(self.current_page, meta.last_page)

    def summary(self) -> Optional[dict]:
        meta = self.controller.meta
        if meta is None:
            return None
        range_label = None
        if meta.last_page > 1:
            first = (self.current_page - 1) * self.items_per_page + 1
            last = min(self.current_page * self.items_per_page, meta.total)
            range_label = f"Showing {first} to {last} of {meta.total} results"
        return {"total_label": f"{meta.total} reviews in total", "range_label": range_label}

    # Edit

    def open_edit(self, review: Review) -> None:
        self.selected_review = review
        self.edit_modal.open(review)

    def cancel_edit(self) -> None:
        self.edit_modal.close()

    def submit_edit(self, data: dict) -> bool:
        if self.selected_review is None:
            return False
        update = ReviewUpdate(rating=data["rating"], comment=data["comment"])
        if self.controller.update(self.selected_review.id, update):
            self.edit_modal.close()
            self.selected_review = None
            self.toasts.show_success(EDIT_SUCCESS_MESSAGE)
            return True
        self.toasts.show_error(EDIT_ERROR_MESSAGE)
        return False

    # Delete

    def open_delete(self, review: Review) -> None:
        self.review_to_delete = review
        self.confirm_modal.open(
            title=DELETE_TITLE,
            message=delete_message(review),
            confirm_text=DELETE_CONFIRM_TEXT,
            type=ModalType.DANGER,
        )

    def cancel_delete(self) -> None:
        self.confirm_modal.close()

    def confirm_delete(self) -> bool:
        if self.review_to_delete is None:
            return False
        review_id = self.review_to_delete.id
        self.last_error = None
        try:
            self.service.delete_review(review_id)
            self.controller.load(page=self.current_page, limit=self.items_per_page)
            self.toasts.show_success(DELETE_SUCCESS_MESSAGE)
            return True
        except ReviewServiceError as exc:
            logger.error("page.delete_failed", review_id=review_id, error=exc.message)
            self.last_error = exc.message
            self.toasts.show_error(DELETE_ERROR_MESSAGE)
            return False
        finally:
            self.confirm_modal.close()
            self.review_to_delete = None

    def tick(self) -> None:
        """Advance both modals; unmounting one clears its selection."""
        self.edit_modal.tick()
        self.confirm_modal.tick()

    def _edit_closed(self) -> None:
        self.selected_review = None

    def _delete_closed(self) -> None:
        self.review_to_delete = None

    def find_review(self, review_id: int) -> Optional[Review]:
        for review in self.controller.reviews:
            if review.id == review_id:
                return review
        return None
