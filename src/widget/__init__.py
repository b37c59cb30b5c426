"""Per-instance slicer controller driven by host updates and user actions."""

from .state import WidgetState, MessageLevel, UserMessage, BOUND_STATES
from .settings import FormatSettings
from .slicer import DateSlicer

__all__ = [
    "WidgetState",
    "MessageLevel",
    "UserMessage",
    "BOUND_STATES",
    "FormatSettings",
    "DateSlicer",
]
