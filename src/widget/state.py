"""Widget lifecycle states and user-facing messages."""

from dataclasses import dataclass
from enum import Enum

from src.filters.errors import FilterError, FilterErrorKind


class WidgetState(Enum):
    """Per-instance lifecycle. The last three are the Bound substates."""
    UNINITIALIZED = "uninitialized"
    AWAITING_COLUMN = "awaiting_column"
    DEFAULT_APPLIED = "default_applied"
    USER_MODIFIED = "user_modified"
    APPLIED = "applied"

    @property
    def is_bound(self) -> bool:
        return self in BOUND_STATES


BOUND_STATES = frozenset({
    WidgetState.DEFAULT_APPLIED,
    WidgetState.USER_MODIFIED,
    WidgetState.APPLIED,
})


class MessageLevel(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class UserMessage:
    """Text shown to the user. Persistent messages stay until the state changes."""

    level: MessageLevel
    text: str
    persistent: bool = False

    @classmethod
    def info(cls, text: str, persistent: bool = False) -> "UserMessage":
        return cls(MessageLevel.INFO, text, persistent)

    @classmethod
    def success(cls, text: str) -> "UserMessage":
        return cls(MessageLevel.SUCCESS, text)

    @classmethod
    def from_error(cls, error: FilterError) -> "UserMessage":
        """Map a filter error to its message; a missing column is informational."""
        if error.kind is FilterErrorKind.NO_COLUMN_BOUND:
            return cls(MessageLevel.INFO, error.user_message, persistent=True)
        if error.kind is FilterErrorKind.INVALID_RANGE:
            return cls(MessageLevel.WARNING, error.user_message)
        return cls(MessageLevel.ERROR, error.user_message)
