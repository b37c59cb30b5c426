"""Formatting pane settings delivered by the host."""

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from config import config
from config.config_loader import get_format_defaults
from config.constants import SETTINGS_OBJECT_NAME, clamp_font_size
from src.ranges.models import RangeKind


def _color_value(value: Any) -> Optional[str]:
    """Colors arrive either as plain strings or as {"solid": {"color": ...}}."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, Mapping):
        solid = value.get("solid")
        if isinstance(solid, Mapping) and isinstance(solid.get("color"), str):
            return solid["color"]
    return None


@dataclass(frozen=True)
class FormatSettings:
    """Formatting values consumed by the widget."""

    default_range: RangeKind = RangeKind.LAST_7_DAYS
    debug_mode: bool = False
    primary_color: str = "#0078d4"
    secondary_color: str = "#6c757d"
    font_size: int = 14

    @classmethod
    def defaults(cls) -> "FormatSettings":
        """Defaults from YAML, with environment overrides from config."""
        fmt = get_format_defaults()
        return cls(
            default_range=RangeKind.from_value(
                config.widget.default_range, default=RangeKind.LAST_7_DAYS
            ),
            debug_mode=config.widget.debug_mode,
            primary_color=fmt.primary_color,
            secondary_color=fmt.secondary_color,
            font_size=fmt.font_size,
        )

    def with_objects(self, objects: Optional[Mapping]) -> "FormatSettings":
        """
        Override with the host's formatting pane objects.

        Args:
            objects: metadata.objects from the update payload.

        Returns:
            New FormatSettings; unknown or malformed values keep the current ones.
        """
        if not isinstance(objects, Mapping):
            return self
        card = objects.get(SETTINGS_OBJECT_NAME)
        if not isinstance(card, Mapping):
            return self

        changes = {}
        if "defaultRange" in card:
            changes["default_range"] = RangeKind.from_value(
                card["defaultRange"], default=self.default_range
            )
        if isinstance(card.get("debugMode"), bool):
            changes["debug_mode"] = card["debugMode"]
        primary = _color_value(card.get("primaryColor"))
        if primary:
            changes["primary_color"] = primary
        secondary = _color_value(card.get("secondaryColor"))
        if secondary:
            changes["secondary_color"] = secondary
        if "fontSize" in card:
            changes["font_size"] = clamp_font_size(card["fontSize"])
        return replace(self, **changes)

    @classmethod
    def from_payload(cls, payload: Optional[Mapping], base: Optional["FormatSettings"] = None) -> "FormatSettings":
        """Settings for an update payload, starting from base or the defaults."""
        base = base or cls.defaults()
        if not isinstance(payload, Mapping):
            return base
        metadata = payload.get("metadata")
        if not isinstance(metadata, Mapping):
            return base
        return base.with_objects(metadata.get("objects"))
