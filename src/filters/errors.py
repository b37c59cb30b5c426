"""Filter errors and results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FilterErrorKind(Enum):
    """Failure categories surfaced to the user."""
    INVALID_RANGE = "invalid_range"
    NO_COLUMN_BOUND = "no_column_bound"
    CAPABILITY_UNAVAILABLE = "capability_unavailable"
    HOST_REJECTION = "host_rejection"


class FilterError(Exception):
    """Base class for filter failures."""

    kind: FilterErrorKind = FilterErrorKind.HOST_REJECTION
    user_message: str = "The filter could not be updated."

    def __init__(self, detail: str = "", cause: Optional[BaseException] = None):
        super().__init__(detail or self.user_message)
        self.detail = detail or self.user_message
        self.cause = cause


class InvalidRangeError(FilterError):
    """Reversed or malformed bounds."""

    kind = FilterErrorKind.INVALID_RANGE
    user_message = "Invalid date range: the start date must be on or before the end date."


class NoColumnBoundError(FilterError):
    """No date-typed column is connected to the widget."""

    kind = FilterErrorKind.NO_COLUMN_BOUND
    user_message = "Add a date column to the visual to enable filtering."


class CapabilityUnavailableError(FilterError):
    """The host exposes none of the filter application paths."""

    kind = FilterErrorKind.CAPABILITY_UNAVAILABLE
    user_message = "This host does not support applying filters from the slicer."


class HostRejectionError(FilterError):
    """A host capability call raised."""

    kind = FilterErrorKind.HOST_REJECTION
    user_message = "The report rejected the filter. Please try again."


@dataclass
class PathAttempt:
    """One capability call made while applying or clearing."""
    path: str
    succeeded: bool
    error: Optional[str] = None


@dataclass
class FilterResult:
    """Outcome of FilterGateway.apply or FilterGateway.clear."""

    success: bool
    path: Optional[str] = None
    error: Optional[FilterError] = None
    descriptor: Optional[Dict[str, Any]] = None
    attempts: List[PathAttempt] = field(default_factory=list)

    @property
    def failed_attempts(self) -> List[PathAttempt]:
        return [a for a in self.attempts if not a.succeeded]

    @property
    def succeeded_paths(self) -> List[str]:
        return [a.path for a in self.attempts if a.succeeded]

    @classmethod
    def failure(cls, error: FilterError, attempts: Optional[List[PathAttempt]] = None,
                descriptor: Optional[Dict[str, Any]] = None) -> "FilterResult":
        return cls(success=False, error=error, attempts=list(attempts or []), descriptor=descriptor)
