"""Application settings and configuration."""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
import os
from dotenv import load_dotenv

from config.config_loader import (
    get_anchor_strategy_name,
    get_apply_action_name,
    get_binding_defaults,
    get_format_defaults,
)

# Load environment variables from .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class WidgetConfig:
    """Date slicer behaviour settings."""

    default_range: str = field(
        default_factory=lambda: os.getenv(
            "SLICER_DEFAULT_RANGE", get_format_defaults().default_range
        )
    )
    anchor_strategy: str = field(
        default_factory=lambda: os.getenv(
            "SLICER_ANCHOR_STRATEGY", get_anchor_strategy_name()
        )
    )
    boundary_strategy: str = field(
        default_factory=lambda: os.getenv(
            "SLICER_BOUNDARY_STRATEGY", get_binding_defaults().boundary_strategy
        )
    )
    sample_limit: int = field(
        default_factory=lambda: int(
            os.getenv("SLICER_SAMPLE_LIMIT", str(get_binding_defaults().sample_limit))
        )
    )
    static_window_future_years: int = field(
        default_factory=lambda: get_binding_defaults().static_window_future_years
    )
    apply_action: str = field(
        default_factory=lambda: os.getenv("SLICER_APPLY_ACTION", get_apply_action_name())
    )
    debug_mode: bool = field(
        default_factory=lambda: _env_flag(
            "SLICER_DEBUG_MODE", get_format_defaults().debug_mode
        )
    )


@dataclass
class AppConfig:
    """Application configuration settings."""

    name: str = field(default_factory=lambda: os.getenv("APP_NAME", "Date Range Slicer"))
    version: str = field(default_factory=lambda: os.getenv("APP_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[Path] = field(
        default_factory=lambda: Path(os.environ["LOG_FILE"]) if os.getenv("LOG_FILE") else None
    )


@dataclass
class Config:
    """Main configuration container."""

    widget: WidgetConfig = field(default_factory=WidgetConfig)
    app: AppConfig = field(default_factory=AppConfig)


# Global config instance
config = Config()
