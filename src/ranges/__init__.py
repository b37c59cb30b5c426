"""Date range calculation: presets, custom ranges and day boundaries."""

from .models import RangeKind, AnchorStrategy, DateRange
from .day_bounds import day_start, day_end, to_local_civil, to_iso_local
from .calculator import (
    compute,
    build_custom,
    validate,
    resolve_anchor,
    default_range,
    parse_input_date,
    format_date,
    display_text,
    describe,
)

__all__ = [
    "RangeKind",
    "AnchorStrategy",
    "DateRange",
    "day_start",
    "day_end",
    "to_local_civil",
    "to_iso_local",
    "compute",
    "build_custom",
    "validate",
    "resolve_anchor",
    "default_range",
    "parse_input_date",
    "format_date",
    "display_text",
    "describe",
]
