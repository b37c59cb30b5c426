"""Configuration module for the Date Range Slicer.

Defaults come from widget_defaults.yaml; environment variables override them.
"""

from .settings import config, WidgetConfig, AppConfig, Config
from .constants import (
    # Host filter protocol
    ADVANCED_FILTER_SCHEMA,
    LOGICAL_OPERATOR_AND,
    OPERATOR_GREATER_THAN_OR_EQUAL,
    OPERATOR_LESS_THAN_OR_EQUAL,
    FILTER_OBJECT_NAME,
    FILTER_PROPERTY_NAME,
    CLEAR_SCOPES,
    DEFAULT_TABLE_LABEL,
    DEFAULT_COLUMN_LABEL,
    # Presets
    PRESET_DAYS,
    RANGE_DISPLAY_TEXT,
    # Boundaries
    STATIC_WINDOW_START,
    STATIC_WINDOW_FUTURE_YEARS,
    DEFAULT_SAMPLE_LIMIT,
    # Format settings
    FONT_SIZE_MIN,
    FONT_SIZE_MAX,
    # Helper functions
    clamp_font_size,
    get_range_display_text,
)
from .config_loader import (
    ConfigurationError,
    load_widget_defaults,
    clear_config_cache,
    get_format_defaults,
    get_binding_defaults,
)

__all__ = [
    # Settings
    "config",
    "WidgetConfig",
    "AppConfig",
    "Config",
    # Constants
    "ADVANCED_FILTER_SCHEMA",
    "LOGICAL_OPERATOR_AND",
    "OPERATOR_GREATER_THAN_OR_EQUAL",
    "OPERATOR_LESS_THAN_OR_EQUAL",
    "FILTER_OBJECT_NAME",
    "FILTER_PROPERTY_NAME",
    "CLEAR_SCOPES",
    "DEFAULT_TABLE_LABEL",
    "DEFAULT_COLUMN_LABEL",
    "PRESET_DAYS",
    "RANGE_DISPLAY_TEXT",
    "STATIC_WINDOW_START",
    "STATIC_WINDOW_FUTURE_YEARS",
    "DEFAULT_SAMPLE_LIMIT",
    "FONT_SIZE_MIN",
    "FONT_SIZE_MAX",
    # Helper functions
    "clamp_font_size",
    "get_range_display_text",
    # Loader
    "ConfigurationError",
    "load_widget_defaults",
    "clear_config_cache",
    "get_format_defaults",
    "get_binding_defaults",
]
