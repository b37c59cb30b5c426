"""Construction of host filter descriptors."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from config.constants import (
    ADVANCED_FILTER_SCHEMA,
    LOGICAL_OPERATOR_AND,
    OPERATOR_GREATER_THAN_OR_EQUAL,
    OPERATOR_LESS_THAN_OR_EQUAL,
)
from src.binding.models import ColumnBinding
from src.ranges.day_bounds import day_end, day_start, to_iso_local
from src.ranges.models import DateRange


@dataclass(frozen=True)
class FilterCondition:
    """A single operator/value pair."""
    operator: str
    value: str

    def to_json(self) -> Dict[str, str]:
        return {"operator": self.operator, "value": self.value}


@dataclass(frozen=True)
class FilterDescriptor:
    """
    Advanced filter handed to the host.

    Built fresh for every apply; always a full instruction, never a patch.
    """

    target_table: str
    target_column: str
    conditions: Tuple[FilterCondition, ...]
    logical_operator: str = LOGICAL_OPERATOR_AND
    schema: str = ADVANCED_FILTER_SCHEMA

    def to_json(self) -> Dict[str, Any]:
        """Convert to the host wire shape."""
        return {
            "$schema": self.schema,
            "target": {
                "table": self.target_table,
                "column": self.target_column,
            },
            "logicalOperator": self.logical_operator,
            "conditions": [c.to_json() for c in self.conditions],
        }


def build_descriptor(binding: ColumnBinding, date_range: DateRange) -> FilterDescriptor:
    """
    Build the inclusive date filter for a binding.

    Bounds are re-normalized to 00:00:00.000 and 23:59:59.999 so a range
    built elsewhere still covers whole days.

    Args:
        binding: Bound column to target.
        date_range: Validated range.

    Returns:
        FilterDescriptor with GreaterThanOrEqual and LessThanOrEqual joined by And.
    """
    return FilterDescriptor(
        target_table=binding.table_name,
        target_column=binding.column_name,
        conditions=(
            FilterCondition(
                OPERATOR_GREATER_THAN_OR_EQUAL,
                to_iso_local(day_start(date_range.start_date)),
            ),
            FilterCondition(
                OPERATOR_LESS_THAN_OR_EQUAL,
                to_iso_local(day_end(date_range.end_date)),
            ),
        ),
    )
