"""Host capability probing."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Optional, Tuple

from config.constants import (
    CAPABILITY_ATTRIBUTES,
    CLEAR_ATTRIBUTES,
    FILTER_MANAGER_APPLY_ATTRIBUTES,
)


class FilterAction(IntEnum):
    """Action codes understood by the JSON filter function."""
    MERGE = 0
    REMOVE = 1

    @classmethod
    def from_value(cls, value, default: "FilterAction" = None) -> "FilterAction":
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        text = str(value or "").strip().upper()
        if text in cls.__members__:
            return cls[text]
        if default is not None:
            return default
        raise ValueError(f"Unknown filter action: {value!r}")


def find_method(obj: Any, names: Tuple[str, ...]) -> Optional[Callable]:
    """First callable attribute of obj among names, or None."""
    if obj is None:
        return None
    for name in names:
        method = getattr(obj, name, None)
        if callable(method):
            return method
    return None


def _probe_attribute(host: Any, names: Tuple[str, ...]) -> Any:
    for name in names:
        if isinstance(host, dict):
            value = host.get(name)
        else:
            value = getattr(host, name, None)
        if value is not None:
            return value
    return None


@dataclass
class HostCapabilities:
    """
    Optional host functions the gateway may use.

    Attributes:
        filter_manager: Object with apply_filter(descriptor) and clear().
        apply_json_filter: Callable (descriptor, scope, property_name, action).
        selection_manager: Object with clear().
    """

    filter_manager: Any = None
    apply_json_filter: Optional[Callable] = None
    selection_manager: Any = None

    @classmethod
    def probe(cls, host: Any) -> "HostCapabilities":
        """
        Detect capabilities on a host object or mapping.

        Both snake_case and camelCase attribute names are recognized.
        Non-callable JSON filter entries are treated as absent.
        """
        if isinstance(host, HostCapabilities):
            return host
        if host is None:
            return cls()

        apply_json = _probe_attribute(host, CAPABILITY_ATTRIBUTES["apply_json_filter"])
        return cls(
            filter_manager=_probe_attribute(host, CAPABILITY_ATTRIBUTES["filter_manager"]),
            apply_json_filter=apply_json if callable(apply_json) else None,
            selection_manager=_probe_attribute(host, CAPABILITY_ATTRIBUTES["selection_manager"]),
        )

    @property
    def filter_manager_apply(self) -> Optional[Callable]:
        return find_method(self.filter_manager, FILTER_MANAGER_APPLY_ATTRIBUTES)

    @property
    def filter_manager_clear(self) -> Optional[Callable]:
        return find_method(self.filter_manager, CLEAR_ATTRIBUTES)

    @property
    def selection_clear(self) -> Optional[Callable]:
        return find_method(self.selection_manager, CLEAR_ATTRIBUTES)

    @property
    def is_empty(self) -> bool:
        return (
            self.filter_manager_apply is None
            and self.filter_manager_clear is None
            and self.apply_json_filter is None
            and self.selection_clear is None
        )

    def summary(self) -> str:
        """Short description for debug logging."""
        parts = []
        if self.filter_manager_apply or self.filter_manager_clear:
            parts.append("filter_manager")
        if self.apply_json_filter:
            parts.append("apply_json_filter")
        if self.selection_clear:
            parts.append("selection_manager")
        return ", ".join(parts) if parts else "none"
