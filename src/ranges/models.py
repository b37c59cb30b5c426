"""Date range value types."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from config.constants import PRESET_DAYS, get_range_display_text


class RangeKind(Enum):
    """Selectable range kinds. Only CUSTOM carries user-supplied bounds."""
    LAST_7_DAYS = "last7days"
    LAST_30_DAYS = "last30days"
    LAST_90_DAYS = "last90days"
    CUSTOM = "custom"

    @property
    def days(self) -> Optional[int]:
        """Number of days looked back by a preset, None for CUSTOM."""
        return PRESET_DAYS.get(self.value)

    @property
    def is_preset(self) -> bool:
        return self is not RangeKind.CUSTOM

    @property
    def display_text(self) -> str:
        return get_range_display_text(self.value)

    @classmethod
    def from_value(cls, value, default: "RangeKind" = None) -> "RangeKind":
        """
        Resolve a kind from its value or member name.

        Args:
            value: A RangeKind, its value ("last7days") or name ("LAST_7_DAYS").
            default: Returned when value is unknown. Raises ValueError if None.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip()
        for kind in cls:
            if text.lower() == kind.value or text.upper() == kind.name:
                return kind
        if default is not None:
            return default
        raise ValueError(f"Unknown range kind: {value!r}")


class AnchorStrategy(Enum):
    """What "Last N days" is measured back from."""
    NOW = "now"
    DATA_MAX = "data_max"

    @classmethod
    def from_value(cls, value, default: "AnchorStrategy" = None) -> "AnchorStrategy":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for strategy in cls:
            if text == strategy.value:
                return strategy
        if default is not None:
            return default
        raise ValueError(f"Unknown anchor strategy: {value!r}")


@dataclass(frozen=True)
class DateRange:
    """
    A selected interval in local civil time.

    Bounds are normalized to day boundaries by the calculator. A reversed
    pair can exist (custom input is never reordered) but never passes
    validation.
    """

    start_date: datetime
    end_date: datetime
    kind: RangeKind = RangeKind.CUSTOM

    @property
    def is_single_day(self) -> bool:
        return self.start_date.date() == self.end_date.date()

    @property
    def day_count(self) -> int:
        """Calendar days covered, inclusive."""
        return (self.end_date.date() - self.start_date.date()).days + 1

    def to_dict(self) -> dict:
        """Convert to dictionary for display or logging."""
        return {
            "start_date": self.start_date.isoformat(timespec="milliseconds"),
            "end_date": self.end_date.isoformat(timespec="milliseconds"),
            "kind": self.kind.value,
        }
