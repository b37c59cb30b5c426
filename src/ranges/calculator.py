"""Date range calculation for presets and custom input."""

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Optional, Union

from config.constants import DISPLAY_DATE_FORMAT, INPUT_DATE_FORMATS, UNKNOWN_RANGE_TEXT
from src.ranges.day_bounds import DateLike, day_end, day_start, to_local_civil
from src.ranges.models import AnchorStrategy, DateRange, RangeKind

if TYPE_CHECKING:
    from src.binding.models import ColumnBinding


def compute(kind: Union[RangeKind, str], anchor_date: Optional[DateLike] = None) -> DateRange:
    """
    Calculate the range for a kind, measured back from an anchor.

    Args:
        kind: Range kind (or its value). CUSTOM yields the anchor day alone.
        anchor_date: Day the range ends on. Defaults to now.

    Returns:
        DateRange from dayStart(anchor - N days) to dayEnd(anchor).
    """
    kind = RangeKind.from_value(kind)
    anchor = to_local_civil(anchor_date) if anchor_date is not None else datetime.now()

    end_date = day_end(anchor)
    if kind.is_preset:
        start_date = day_start(anchor - timedelta(days=kind.days))
    else:
        start_date = day_start(anchor)

    return DateRange(start_date=start_date, end_date=end_date, kind=kind)


def build_custom(start: DateLike, end: DateLike) -> DateRange:
    """
    Create a custom range normalized to day boundaries.

    A reversed pair is kept as given so that validate() rejects it.
    """
    return DateRange(
        start_date=day_start(start),
        end_date=day_end(end),
        kind=RangeKind.CUSTOM,
    )


def validate(date_range: Optional[DateRange]) -> bool:
    """True iff both bounds are datetimes and start <= end."""
    if date_range is None:
        return False
    start = getattr(date_range, "start_date", None)
    end = getattr(date_range, "end_date", None)
    if not isinstance(start, datetime) or not isinstance(end, datetime):
        return False
    if (start.tzinfo is None) != (end.tzinfo is None):
        return False
    return start <= end


def resolve_anchor(
    strategy: Union[AnchorStrategy, str],
    binding: Optional["ColumnBinding"] = None,
    now: Optional[datetime] = None,
) -> datetime:
    """
    Pick the anchor date for preset ranges.

    DATA_MAX uses the bound column's maximum only when it was observed in the
    data; a synthetic static-window maximum lies in the future and would make
    "Last 7 Days" select days with no records.
    """
    strategy = AnchorStrategy.from_value(strategy)
    current = now or datetime.now()

    if strategy is AnchorStrategy.DATA_MAX and binding is not None:
        if binding.has_observed_bounds and binding.max_date is not None:
            return binding.max_date
    return current


def default_range(
    kind: Union[RangeKind, str],
    binding: Optional["ColumnBinding"] = None,
    strategy: Union[AnchorStrategy, str] = AnchorStrategy.DATA_MAX,
    now: Optional[datetime] = None,
) -> DateRange:
    """Compute the range shown before the user picks anything."""
    return compute(kind, resolve_anchor(strategy, binding, now))


def parse_input_date(value) -> Optional[datetime]:
    """
    Parse a custom date input.

    Args:
        value: date, datetime, or string in ISO or one of INPUT_DATE_FORMATS.

    Returns:
        Naive local datetime, or None if empty or unparsable.
    """
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return to_local_civil(value)

    text = str(value).strip()
    if not text:
        return None

    for fmt in INPUT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    try:
        return to_local_civil(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        return None


def format_date(value: DateLike) -> str:
    """Format a date for display, e.g. 'Dec 24, 2024'."""
    return to_local_civil(value).strftime(DISPLAY_DATE_FORMAT)


def display_text(kind: Union[RangeKind, str]) -> str:
    """Display text for a range kind; unknown values give 'Unknown Range'."""
    try:
        return RangeKind.from_value(kind).display_text
    except ValueError:
        return UNKNOWN_RANGE_TEXT


def describe(date_range: DateRange) -> str:
    """One-line summary such as 'Last 7 Days: Dec 24, 2024 - Dec 31, 2024'."""
    return (
        f"{date_range.kind.display_text}: "
        f"{format_date(date_range.start_date)} - {format_date(date_range.end_date)}"
    )
