"""Constants for the Date Range Slicer.

Protocol values exchanged with the host live here so that the filter
descriptor shape, scope names and date window are defined in one place.
Tunable defaults (colors, default preset, sample limit) are loaded from
YAML through config_loader.
"""

from datetime import datetime
from typing import Dict, List, Tuple


# =============================================================================
# Host Filter Protocol
# =============================================================================

# Schema identifier for advanced (operator based) filters
ADVANCED_FILTER_SCHEMA = "https://powerbi.com/product/schema#advanced"

LOGICAL_OPERATOR_AND = "And"

OPERATOR_GREATER_THAN_OR_EQUAL = "GreaterThanOrEqual"
OPERATOR_LESS_THAN_OR_EQUAL = "LessThanOrEqual"

# Object/property pair the JSON filter is persisted under
FILTER_OBJECT_NAME = "general"
FILTER_PROPERTY_NAME = "filter"

# Scopes cleared on "Clear Filter"; some hosts keep the filter in both
CLEAR_SCOPES: List[str] = ["general", "advanced"]

# Table label used when the host reference cannot be split
DEFAULT_TABLE_LABEL = "Table"
DEFAULT_COLUMN_LABEL = "Date"

# Host attribute names probed for each capability, snake_case first
CAPABILITY_ATTRIBUTES: Dict[str, Tuple[str, ...]] = {
    "filter_manager": ("filter_manager", "filterManager"),
    "apply_json_filter": ("apply_json_filter", "applyJsonFilter"),
    "selection_manager": ("selection_manager", "selectionManager"),
}

FILTER_MANAGER_APPLY_ATTRIBUTES: Tuple[str, ...] = ("apply_filter", "applyFilter")
CLEAR_ATTRIBUTES: Tuple[str, ...] = ("clear",)


# =============================================================================
# Date Formats
# =============================================================================

# Display format, e.g. "Dec 24, 2024"
DISPLAY_DATE_FORMAT = "%b %d, %Y"

# Formats accepted from custom date inputs
INPUT_DATE_FORMATS = [
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%Y/%m/%d",
]


# =============================================================================
# Range Presets
# =============================================================================

PRESET_DAYS: Dict[str, int] = {
    "last7days": 7,
    "last30days": 30,
    "last90days": 90,
}

RANGE_DISPLAY_TEXT: Dict[str, str] = {
    "last7days": "Last 7 Days",
    "last30days": "Last 30 Days",
    "last90days": "Last 90 Days",
    "custom": "Custom Range",
}

UNKNOWN_RANGE_TEXT = "Unknown Range"


# =============================================================================
# Column Boundaries
# =============================================================================

# Wide static window used when sampled values cannot be trusted
STATIC_WINDOW_START = datetime(1900, 1, 1)
STATIC_WINDOW_FUTURE_YEARS = 5

# Hosts typically cap the sample they send to the widget
DEFAULT_SAMPLE_LIMIT = 1000


# =============================================================================
# Format Settings
# =============================================================================

FONT_SIZE_MIN = 8
FONT_SIZE_MAX = 24
DEFAULT_FONT_SIZE = 14
DEFAULT_PRIMARY_COLOR = "#0078d4"
DEFAULT_SECONDARY_COLOR = "#6c757d"

# Host object holding the formatting pane values
SETTINGS_OBJECT_NAME = "dateSlicerSettings"

DEBUG_LOG_CAPACITY = 50


def clamp_font_size(value) -> int:
    """Clamp a font size to the supported range."""
    try:
        size = int(value)
    except (TypeError, ValueError):
        return DEFAULT_FONT_SIZE
    return max(FONT_SIZE_MIN, min(FONT_SIZE_MAX, size))


def get_range_display_text(kind_value: str) -> str:
    """Get display text for a range kind value."""
    return RANGE_DISPLAY_TEXT.get(kind_value, UNKNOWN_RANGE_TEXT)
