"""
Modal state for the review list page.

Closing is two-phase: close() hides the modal at once (CLOSING) and the
modal is only unmounted (CLOSED, on_close fired) once tick() sees the close
delay has elapsed. Callers must not assume teardown happens inside close().
"""
import time
from enum import Enum
from typing import Callable, Optional

from ..schemas.reviews import Review

Clock = Callable[[], float]


class ModalPhase(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    CLOSING = "closing"


class ModalType(str, Enum):
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"


class _AnimatedModal:
    def __init__(
        self,
        on_close: Optional[Callable[[], None]] = None,
        close_delay: float = 0.3,
        clock: Clock = time.monotonic,
    ):
        self.on_close = on_close
        self.close_delay = close_delay
        self.clock = clock
        self.phase = ModalPhase.CLOSED
        self._close_deadline: Optional[float] = None

    @property
    def visible(self) -> bool:
        return self.phase == ModalPhase.OPEN

    @property
    def mounted(self) -> bool:
        return self.phase != ModalPhase.CLOSED

    def _show(self) -> None:
        self.phase = ModalPhase.OPEN
        self._close_deadline = None

    def close(self) -> None:
        if self.phase != ModalPhase.OPEN:
            return
        self.phase = ModalPhase.CLOSING
        self._close_deadline = self.clock() + self.close_delay

    def tick(self) -> None:
        if self.phase != ModalPhase.CLOSING or self._close_deadline is None:
            return
        if self.clock() < self._close_deadline:
            return
        self.unmount()

    def unmount(self) -> None:
        """Tear down immediately, skipping any remaining close delay."""
        was_mounted = self.mounted
        self.phase = ModalPhase.CLOSED
        self._close_deadline = None
        if was_mounted and self.on_close:
            self.on_close()


class EditReviewModal(_AnimatedModal):
    """Controlled form over a review's rating and comment."""

    DEFAULT_RATING = 5
    MAX_RATING = 5

    def __init__(
        self,
        on_submit: Callable[[dict], Optional[bool]],
        on_close: Optional[Callable[[], None]] = None,
        close_delay: float = 0.3,
        clock: Clock = time.monotonic,
    ):
        super().__init__(on_close=on_close, close_delay=close_delay, clock=clock)
        self.on_submit = on_submit
        self.review: Optional[Review] = None
        self.rating = self.DEFAULT_RATING
        self.comment = ""

    def open(self, review: Optional[Review] = None) -> None:
        self.review = review
        self.rating = review.rating if review else self.DEFAULT_RATING
        self.comment = review.comment if review else ""
        self._show()

    def set_rating(self, value: int) -> None:
        # one toggle per star, no half stars and no zero
        if not 1 <= value <= self.MAX_RATING:
            raise ValueError(f"Invalid rating: {value}. Must be 1-{self.MAX_RATING}")
        self.rating = value

    def set_comment(self, value: str) -> None:
        self.comment = value

    def star_states(self) -> list[bool]:
        return [n <= self.rating for n in range(1, self.MAX_RATING + 1)]

    def submit(self) -> Optional[bool]:
        return self.on_submit({"rating": self.rating, "comment": self.comment})


class ConfirmModal(_AnimatedModal):
    def __init__(
        self,
        on_confirm: Callable[[], Optional[bool]],
        on_close: Optional[Callable[[], None]] = None,
        close_delay: float = 0.3,
        clock: Clock = time.monotonic,
    ):
        super().__init__(on_close=on_close, close_delay=close_delay, clock=clock)
        self.on_confirm = on_confirm
        self.title = ""
        self.message = ""
        self.confirm_text = "Confirm"
        self.cancel_text = "Cancel"
        self.type = ModalType.DANGER
        self.additional_info: list[str] = []
        self.is_loading = False

    def open(
        self,
        title: str,
        message: str,
        confirm_text: str = "Confirm",
        cancel_text: str = "Cancel",
        type: ModalType = ModalType.DANGER,
        additional_info: Optional[list[str]] = None,
    ) -> None:
        self.title = title
        self.message = message
        self.confirm_text = confirm_text
        self.cancel_text = cancel_text
        self.type = ModalType(type)
        self.additional_info = list(additional_info or [])
        self.is_loading = False
        self._show()

    def close(self) -> None:
        if self.is_loading:
            return
        super().close()

    def confirm(self) -> Optional[bool]:
        # the owner decides when to close
        return self.on_confirm()
