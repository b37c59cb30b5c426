"""Discovery of the host-bound date column and its value boundaries."""

from .models import (
    BoundaryStrategy,
    BoundarySource,
    QualifiedName,
    ColumnBinding,
    same_target,
)
from .references import parse_qualified_reference
from .discovery import (
    discover,
    is_date_type,
    resolve_target,
    scan_bounds,
    static_window,
    is_complete_sample,
    describe_payload,
)

__all__ = [
    "BoundaryStrategy",
    "BoundarySource",
    "QualifiedName",
    "ColumnBinding",
    "same_target",
    "parse_qualified_reference",
    "discover",
    "is_date_type",
    "resolve_target",
    "scan_bounds",
    "static_window",
    "is_complete_sample",
    "describe_payload",
]
