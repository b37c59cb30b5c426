"""YAML Configuration Loader for the Date Range Slicer.

Loads and caches widget defaults from YAML with fallback to built-in values.
Provides type-safe access to configuration values.
"""

from pathlib import Path
from typing import Any, Dict
from dataclasses import dataclass, field
from functools import lru_cache
import yaml

from config.constants import (
    DEFAULT_FONT_SIZE,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SAMPLE_LIMIT,
    DEFAULT_SECONDARY_COLOR,
    STATIC_WINDOW_FUTURE_YEARS,
    clamp_font_size,
)

# Get config directory
CONFIG_DIR = Path(__file__).parent

WIDGET_DEFAULTS_FILE = "widget_defaults.yaml"


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""

    pass


def _load_yaml_file(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of YAML file in config directory

    Returns:
        Parsed YAML content as dictionary

    Raises:
        ConfigurationError: If file cannot be loaded
    """
    filepath = CONFIG_DIR / filename
    if not filepath.exists():
        raise ConfigurationError(f"Configuration file not found: {filepath}")

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing {filename}: {e}")
    except IOError as e:
        raise ConfigurationError(f"Error reading {filename}: {e}")


@lru_cache(maxsize=1)
def load_widget_defaults() -> Dict[str, Any]:
    """Load widget_defaults.yaml configuration."""
    try:
        return _load_yaml_file(WIDGET_DEFAULTS_FILE)
    except ConfigurationError:
        # Return minimal fallback defaults
        return {
            "format": {
                "default_range": "last7days",
                "debug_mode": False,
                "primary_color": DEFAULT_PRIMARY_COLOR,
                "secondary_color": DEFAULT_SECONDARY_COLOR,
                "font_size": DEFAULT_FONT_SIZE,
            },
            "binding": {
                "boundary_strategy": "static_window",
                "sample_limit": DEFAULT_SAMPLE_LIMIT,
                "static_window_future_years": STATIC_WINDOW_FUTURE_YEARS,
            },
            "ranges": {"anchor_strategy": "data_max"},
            "filters": {"apply_action": "merge"},
        }


def clear_config_cache() -> None:
    """Clear all cached configuration data."""
    load_widget_defaults.cache_clear()


@dataclass
class FormatDefaults:
    """Formatting pane defaults accessor."""

    _data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self._data = load_widget_defaults().get("format", {})

    @property
    def default_range(self) -> str:
        return str(self._data.get("default_range", "last7days"))

    @property
    def debug_mode(self) -> bool:
        return bool(self._data.get("debug_mode", False))

    @property
    def primary_color(self) -> str:
        return self._data.get("primary_color", DEFAULT_PRIMARY_COLOR)

    @property
    def secondary_color(self) -> str:
        return self._data.get("secondary_color", DEFAULT_SECONDARY_COLOR)

    @property
    def font_size(self) -> int:
        """Font size, always within the supported bounds."""
        return clamp_font_size(self._data.get("font_size", DEFAULT_FONT_SIZE))


@dataclass
class BindingDefaults:
    """Column discovery defaults accessor."""

    _data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self._data = load_widget_defaults().get("binding", {})

    @property
    def boundary_strategy(self) -> str:
        return str(self._data.get("boundary_strategy", "static_window"))

    @property
    def sample_limit(self) -> int:
        return int(self._data.get("sample_limit", DEFAULT_SAMPLE_LIMIT))

    @property
    def static_window_future_years(self) -> int:
        return int(
            self._data.get("static_window_future_years", STATIC_WINDOW_FUTURE_YEARS)
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def get_format_defaults() -> FormatDefaults:
    """Get formatting pane defaults."""
    return FormatDefaults()


def get_binding_defaults() -> BindingDefaults:
    """Get column discovery defaults."""
    return BindingDefaults()


def get_anchor_strategy_name() -> str:
    """Get the configured anchor strategy name."""
    ranges = load_widget_defaults().get("ranges", {})
    return str(ranges.get("anchor_strategy", "data_max"))


def get_apply_action_name() -> str:
    """Get the configured JSON filter action name."""
    filters = load_widget_defaults().get("filters", {})
    return str(filters.get("apply_action", "merge"))
