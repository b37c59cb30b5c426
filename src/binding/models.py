"""Column binding value types."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional


class BoundaryStrategy(Enum):
    """How min/max dates are derived for a bound column."""
    STATIC_WINDOW = "static_window"
    SAMPLED_SCAN = "sampled_scan"

    @classmethod
    def from_value(cls, value, default: "BoundaryStrategy" = None) -> "BoundaryStrategy":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for strategy in cls:
            if text == strategy.value:
                return strategy
        if default is not None:
            return default
        raise ValueError(f"Unknown boundary strategy: {value!r}")


class BoundarySource(Enum):
    """Where a binding's min/max dates came from."""
    SAMPLED = "sampled"
    STATIC_WINDOW = "static_window"


class QualifiedName(NamedTuple):
    """Table/column pair addressed by a filter."""
    table: str
    column: str


@dataclass(frozen=True)
class ColumnBinding:
    """
    The date column currently connected to the widget.

    min_date/max_date are approximate. With a STATIC_WINDOW source they are a
    wide synthetic window, with SAMPLED they cover only the values the host
    sent.
    """

    display_name: str
    table_name: str
    column_name: str
    min_date: datetime
    max_date: datetime
    bounds_source: BoundarySource = BoundarySource.STATIC_WINDOW
    query_name: Optional[str] = None

    @property
    def target(self) -> QualifiedName:
        return QualifiedName(self.table_name, self.column_name)

    @property
    def has_observed_bounds(self) -> bool:
        """True when min/max were read from data rather than synthesized."""
        return self.bounds_source is BoundarySource.SAMPLED


def same_target(first: Optional[ColumnBinding], second: Optional[ColumnBinding]) -> bool:
    """True when both bindings address the same table and column."""
    if first is None or second is None:
        return False
    return first.target == second.target
