from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import get_settings
from ..controllers.reviews import ReviewController
from ..dependencies import get_review_service
from ..pages.reviews import ReviewListPage, format_date, render_stars
from ..schemas.reviews import (
    NotificationOut,
    ReviewActionOut,
    ReviewEditIn,
    ReviewPageOut,
    ReviewRowOut,
    ReviewStatus,
)
from ..services.reviews import ReviewService
from ..utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/admin/reviews", tags=["reviews"])


def _build_page(
    service: ReviewService,
    page: int,
    limit: int | None,
    status: ReviewStatus | None = None,
) -> ReviewListPage:
    settings = get_settings()
    limit = limit or settings.DEFAULT_PAGE_SIZE
    controller = ReviewController(service, page=page, limit=limit, status=status)
    list_page = ReviewListPage(
        controller,
        service,
        current_page=page,
        items_per_page=limit,
        page_size_options=settings.PAGE_SIZE_OPTIONS,
        close_delay=settings.MODAL_CLOSE_DELAY,
    )
    controller.mount()
    return list_page


def _page_out(list_page: ReviewListPage) -> ReviewPageOut:
    rows = [
        ReviewRowOut(
            **review.model_dump(),
            stars=render_stars(review.rating),
            created_on=format_date(review.created_at),
        )
        for review in list_page.filtered_reviews
    ]
    return ReviewPageOut(
        reviews=rows,
        meta=list_page.meta,
        page_numbers=list_page.page_numbers(),
        current_page=list_page.current_page,
        items_per_page=list_page.items_per_page,
        page_size_options=list_page.page_size_options,
        search=list_page.search_term,
        error=list_page.controller.error,
        summary=list_page.summary(),
    )


def _action_out(list_page: ReviewListPage, success: bool) -> ReviewActionOut:
    toast = list_page.toasts.last
    notification = NotificationOut(kind=toast.kind.value, message=toast.message) if toast else None
    return ReviewActionOut(success=success, notification=notification, page=_page_out(list_page))


def _find_or_fail(list_page: ReviewListPage, review_id: int):
    if list_page.controller.error:
        raise HTTPException(status_code=502, detail=list_page.controller.error)
    review = list_page.find_review(review_id)
    if review is None:
        raise HTTPException(status_code=404, detail="Review not found on this page")
    return review


@router.get("", response_model=ReviewPageOut)
def list_reviews(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    status: ReviewStatus | None = Query(None),
    search: str = Query("", description="Filter the fetched page by customer, order or comment"),
    service: ReviewService = Depends(get_review_service),
):
    """Fetch one page of reviews and filter it with the search term."""
    list_page = _build_page(service, page, limit, status)
    list_page.set_search(search)
    return _page_out(list_page)


@router.patch("/{review_id}", response_model=ReviewActionOut)
def edit_review(
    review_id: int,
    payload: ReviewEditIn,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    service: ReviewService = Depends(get_review_service),
):
    """Update the rating and comment of a review shown on the given page."""
    list_page = _build_page(service, page, limit)
    review = _find_or_fail(list_page, review_id)

    list_page.open_edit(review)
    list_page.edit_modal.set_rating(payload.rating)
    if payload.comment is not None:
        list_page.edit_modal.set_comment(payload.comment)
    success = bool(list_page.edit_modal.submit())
    if not success:
        detail = list_page.controller.error or list_page.toasts.last.message
        raise HTTPException(status_code=502, detail=detail)

    logger.info("admin.review_edited", review_id=review_id, rating=payload.rating)
    return _action_out(list_page, success)


@router.delete("/{review_id}", response_model=ReviewActionOut)
def delete_review(
    review_id: int,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    service: ReviewService = Depends(get_review_service),
):
    """Delete a review shown on the given page and return the reloaded page."""
    list_page = _build_page(service, page, limit)
    review = _find_or_fail(list_page, review_id)

    list_page.open_delete(review)
    success = bool(list_page.confirm_modal.confirm())
    if not success:
        raise HTTPException(status_code=502, detail=list_page.last_error or list_page.toasts.last.message)

    logger.info("admin.review_deleted", review_id=review_id)
    return _action_out(list_page, success)
