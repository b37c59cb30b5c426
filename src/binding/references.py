"""Parsing of host qualified column references."""

import re
from typing import Optional

from config.constants import DEFAULT_COLUMN_LABEL, DEFAULT_TABLE_LABEL
from src.binding.models import QualifiedName

# Sales[OrderDate], 'Sales Data'[Order Date]
BRACKET_PATTERN = re.compile(r"^\s*(?P<table>[^\[\]]+?)\s*\[(?P<column>[^\[\]]+)\]\s*$")

QUOTE_CHARS = "'\""


def _clean(part: str) -> str:
    return part.strip().strip(QUOTE_CHARS).strip()


def parse_qualified_reference(
    reference: Optional[str],
    fallback_column: Optional[str] = None,
) -> QualifiedName:
    """
    Split a host reference into table and column.

    "Sales.OrderDate" and "Sales[OrderDate]" both give ("Sales", "OrderDate").
    Anything else keeps the raw reference as the column under the default
    table label. Never raises.

    Args:
        reference: Qualified reference from the host (queryName).
        fallback_column: Column used when the reference is empty, usually
            the display name.

    Returns:
        QualifiedName(table, column).
    """
    fallback = _clean(fallback_column or "") or DEFAULT_COLUMN_LABEL
    if not isinstance(reference, str):
        return QualifiedName(DEFAULT_TABLE_LABEL, fallback)

    text = reference.strip()
    if not text:
        return QualifiedName(DEFAULT_TABLE_LABEL, fallback)

    match = BRACKET_PATTERN.match(text)
    if match:
        table = _clean(match.group("table"))
        column = _clean(match.group("column"))
        if table and column:
            return QualifiedName(table, column)

    if "." in text:
        table, _, column = text.partition(".")
        table, column = _clean(table), _clean(column)
        if table and column:
            return QualifiedName(table, column)

    return QualifiedName(DEFAULT_TABLE_LABEL, _clean(text) or fallback)
