from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ReviewStatus(str, Enum):
    PENDING = "PENDING"
    VALIDED = "VALIDED"
    DENIED = "DENIED"


UNKNOWN_CUSTOMER = "Unknown user"


# Upstream /comments representation

class WireUser(BaseModel):
    id: int
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class WireProduct(BaseModel):
    id: int
    name: str


class WireComment(BaseModel):
    id: int
    comment: str = ""
    status: ReviewStatus
    star: int
    user_id: int = Field(alias="userId")
    product_id: int = Field(alias="productId")
    created_at: datetime = Field(alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    user: Optional[WireUser] = None
    product: Optional[WireProduct] = None

    model_config = ConfigDict(populate_by_name=True)


class WireMeta(BaseModel):
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=0)
    limit: int = Field(..., ge=0)
    last_page: int = Field(..., ge=0, alias="lastPage")

    model_config = ConfigDict(populate_by_name=True)


class CommentsEnvelope(BaseModel):
    comments: list[WireComment] = []
    meta: Optional[WireMeta] = None
    message: str = ""
    count: Optional[int] = None


class CommentPatch(BaseModel):
    """PATCH /comments/{id} body. Only the fields that were set are sent."""

    comment: Optional[str] = None
    status: Optional[ReviewStatus] = None
    star: Optional[int] = None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


# Admin UI representation

class Review(BaseModel):
    id: int
    order_number: str
    product_name: Optional[str] = None
    customer_name: str
    rating: int
    comment: str = ""
    status: ReviewStatus
    user_id: int
    product_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class ReviewMeta(BaseModel):
    current_page: int = Field(..., ge=0)
    last_page: int = Field(..., ge=0)
    per_page: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class ReviewUpdate(BaseModel):
    comment: Optional[str] = None
    status: Optional[ReviewStatus] = None
    rating: Optional[int] = None


class ReviewPage(BaseModel):
    reviews: list[Review] = []
    meta: Optional[WireMeta] = None


def review_from_wire(item: WireComment) -> Review:
    if item.user:
        customer_name = f"{item.user.first_name} {item.user.last_name}"
    else:
        customer_name = UNKNOWN_CUSTOMER
    product_name = item.product.name if item.product else None
    return Review(
        id=item.id,
        order_number=product_name if product_name is not None else f"PROD-{item.product_id}",
        product_name=product_name,
        customer_name=customer_name,
        rating=item.star,
        comment=item.comment,
        status=item.status,
        user_id=item.user_id,
        product_id=item.product_id,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def to_comment_patch(update: ReviewUpdate) -> CommentPatch:
    """Rename the UI `rating` to the wire `star`; nothing else crosses over."""
    return CommentPatch(comment=update.comment, status=update.status, star=update.rating)


def meta_from_wire(meta: Optional[WireMeta], count: int) -> ReviewMeta:
    if meta is None:
        return ReviewMeta(current_page=1, last_page=1, per_page=count, total=count)
    return ReviewMeta(
        current_page=meta.page,
        last_page=meta.last_page,
        per_page=meta.limit,
        total=meta.total,
    )


# Admin HTTP surface

class ReviewEditIn(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class NotificationOut(BaseModel):
    kind: str
    message: str


class ReviewSummaryOut(BaseModel):
    total_label: str
    range_label: Optional[str] = None


class ReviewRowOut(Review):
    stars: str
    created_on: str


class ReviewPageOut(BaseModel):
    reviews: list[ReviewRowOut]
    meta: Optional[ReviewMeta] = None
    page_numbers: list[int | str] = []
    current_page: int
    items_per_page: int
    page_size_options: list[int]
    search: str = ""
    error: Optional[str] = None
    summary: Optional[ReviewSummaryOut] = None


class ReviewActionOut(BaseModel):
    success: bool
    notification: Optional[NotificationOut] = None
    page: ReviewPageOut
