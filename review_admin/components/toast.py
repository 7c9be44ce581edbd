from dataclasses import dataclass, field
from enum import Enum


class ToastKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Toast:
    kind: ToastKind
    message: str


@dataclass
class ToastQueue:
    """Transient notifications collected during one page interaction."""

    items: list[Toast] = field(default_factory=list)

    def show_success(self, message: str) -> None:
        self.items.append(Toast(ToastKind.SUCCESS, message))

    def show_error(self, message: str) -> None:
        self.items.append(Toast(ToastKind.ERROR, message))

    @property
    def last(self) -> Toast | None:
        return self.items[-1] if self.items else None
