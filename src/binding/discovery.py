"""
Discovery of the host-bound date column.

The host delivers a loosely typed update payload:

    {
        "categorical": {"categories": [{"source": {...}, "values": [...]}]},
        "table": {"columns": [{...}], "rows": [[...], ...]},
        "metadata": {"columns": [{...}], "segment": {...}, "objects": {...}},
    }

Column descriptors carry displayName, queryName ("Sales.OrderDate"), type
({"dateTime": true}) and optionally expr ({"source": {"entity": "Sales"},
"ref": "OrderDate"}). A "segment" entry means the host holds more rows than
it sent, so the sample cannot be trusted as the full range.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple
import sys

import pandas as pd

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from config.constants import STATIC_WINDOW_START
from config.logging_config import get_logger
from src.binding.models import BoundarySource, BoundaryStrategy, ColumnBinding, QualifiedName
from src.binding.references import parse_qualified_reference
from src.ranges.day_bounds import day_end, day_start, to_local_civil

logger = get_logger("binding")

DATE_TYPE_NAMES = {"date", "datetime", "datetimezone", "timestamp"}


def _field(mapping: Any, *names: str) -> Any:
    """Get the first present key from a mapping, None for non-mappings."""
    if not isinstance(mapping, Mapping):
        return None
    for name in names:
        if name in mapping and mapping[name] is not None:
            return mapping[name]
    return None


def is_date_type(declared_type: Any) -> bool:
    """
    Check a declared column type.

    Accepts {"dateTime": true}, {"date": true} or a type name string.
    """
    if isinstance(declared_type, Mapping):
        return bool(declared_type.get("dateTime") or declared_type.get("date"))
    if isinstance(declared_type, str):
        return declared_type.strip().lower().replace("_", "") in DATE_TYPE_NAMES
    return False


def resolve_target(column: Mapping) -> Tuple[str, QualifiedName]:
    """
    Get display name and table/column for a column descriptor.

    An expr with source entity and ref wins over parsing the queryName.
    """
    display_name = _field(column, "displayName", "display_name") or ""
    expr = _field(column, "expr")
    entity = _field(_field(expr, "source"), "entity")
    ref = _field(expr, "ref")
    if isinstance(entity, str) and entity.strip() and isinstance(ref, str) and ref.strip():
        return display_name or ref, QualifiedName(entity.strip(), ref.strip())

    query_name = _field(column, "queryName", "query_name")
    return display_name, parse_qualified_reference(query_name, fallback_column=display_name)


def _iter_candidates(payload: Mapping) -> Iterator[Tuple[Mapping, Optional[List[Any]]]]:
    """Yield (column descriptor, sampled values) in priority order."""
    categorical = _field(payload, "categorical")
    for category in _field(categorical, "categories") or []:
        source = _field(category, "source")
        if isinstance(source, Mapping):
            yield source, list(_field(category, "values") or [])

    table = _field(payload, "table")
    rows = _field(table, "rows") or []
    for position, column in enumerate(_field(table, "columns") or []):
        if not isinstance(column, Mapping):
            continue
        index = _field(column, "index")
        index = index if isinstance(index, int) else position
        values = [row[index] for row in rows if isinstance(row, Sequence) and len(row) > index]
        yield column, values

    metadata = _field(payload, "metadata")
    for column in _field(metadata, "columns") or []:
        if isinstance(column, Mapping):
            yield column, None


def _coerce_value(value: Any) -> Optional[datetime]:
    """Convert one sampled value to a naive local datetime."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (datetime, date)):
        return to_local_civil(value)
    if isinstance(value, (int, float)):
        # Epoch milliseconds, as script hosts serialize dates
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        stamp = pd.to_datetime(value.strip(), errors="coerce")
        if pd.isna(stamp):
            return None
        return to_local_civil(stamp.to_pydatetime())
    return None


def scan_bounds(values: Sequence[Any]) -> Optional[Tuple[datetime, datetime]]:
    """
    Observed min/max of sampled values.

    Returns None when nothing parses. The result only describes the sample,
    not necessarily the whole dataset.
    """
    stamps = pd.to_datetime(
        pd.Series([_coerce_value(v) for v in values], dtype="object"),
        errors="coerce",
    ).dropna()
    if stamps.empty:
        return None
    return stamps.min().to_pydatetime(), stamps.max().to_pydatetime()


def static_window(now: Optional[datetime] = None, future_years: Optional[int] = None) -> Tuple[datetime, datetime]:
    """Wide window from 1900 to the end of a year several years ahead."""
    current = now or datetime.now()
    years = config.widget.static_window_future_years if future_years is None else future_years
    return day_start(STATIC_WINDOW_START), day_end(date(current.year + years, 12, 31))


def is_complete_sample(payload: Mapping, values: Sequence[Any], sample_limit: int) -> bool:
    """
    Whether the sample can stand in for the whole column.

    The host has to flag the sample with isComplete. Even then a further
    segment or a sample that fills the cap means more rows exist.
    """
    if _field(payload, "isComplete", "is_complete") is not True:
        return False
    if _field(_field(payload, "metadata"), "segment") is not None:
        return False
    return len(values) < sample_limit


def discover(
    payload: Optional[Mapping],
    strategy: Optional[BoundaryStrategy] = None,
    sample_limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Optional[ColumnBinding]:
    """
    Find the date column bound to the widget.

    Args:
        payload: Host update payload.
        strategy: Boundary strategy, defaults to the configured one.
        sample_limit: Host sample cap, defaults to the configured one.
        now: Reference time for the static window.

    Returns:
        ColumnBinding, or None when no date-typed column is bound.
    """
    if not isinstance(payload, Mapping):
        logger.debug("Update payload missing, no column bound")
        return None

    strategy = BoundaryStrategy.from_value(
        strategy or config.widget.boundary_strategy, default=BoundaryStrategy.STATIC_WINDOW
    )
    limit = sample_limit if sample_limit is not None else config.widget.sample_limit

    for column, values in _iter_candidates(payload):
        if not is_date_type(_field(column, "type")):
            continue

        display_name, target = resolve_target(column)
        min_date, max_date = static_window(now)
        source = BoundarySource.STATIC_WINDOW

        if strategy is BoundaryStrategy.SAMPLED_SCAN:
            if values is None:
                logger.info(f"No sampled values for {target.column}, using static window")
            elif not is_complete_sample(payload, values, limit):
                logger.info(
                    f"Sample for {target.column} is not known complete ({len(values)} values), "
                    "using static window"
                )
            else:
                bounds = scan_bounds(values)
                if bounds is None:
                    logger.info(f"No parsable dates in sample for {target.column}, using static window")
                else:
                    min_date, max_date = day_start(bounds[0]), day_end(bounds[1])
                    source = BoundarySource.SAMPLED

        binding = ColumnBinding(
            display_name=display_name or target.column,
            table_name=target.table,
            column_name=target.column,
            min_date=min_date,
            max_date=max_date,
            bounds_source=source,
            query_name=_field(column, "queryName", "query_name"),
        )
        logger.info(
            f"Bound date column {binding.table_name}.{binding.column_name} "
            f"({source.value} bounds)"
        )
        return binding

    logger.warning("No date column found in update payload")
    return None


def describe_payload(payload: Optional[Mapping]) -> Dict[str, Any]:
    """Summarize a payload for debug logging."""
    if not isinstance(payload, Mapping):
        return {"present": False}
    candidates = list(_iter_candidates(payload))
    return {
        "present": True,
        "columns": len(candidates),
        "date_columns": sum(1 for c, _ in candidates if is_date_type(_field(c, "type"))),
        "segmented": _field(_field(payload, "metadata"), "segment") is not None,
    }
