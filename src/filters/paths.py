"""
Ranked filter application paths.

Each path knows how to detect itself on a HostCapabilities, apply a
descriptor, and which removal steps it contributes to a clear. The gateway
walks them in rank order; this module holds no state.
"""

from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from config.constants import CLEAR_SCOPES, FILTER_OBJECT_NAME, FILTER_PROPERTY_NAME
from src.filters.capabilities import FilterAction, HostCapabilities


@dataclass
class ClearStep:
    """One independent best-effort removal call."""
    name: str
    call: Callable[[], Any]
    removes_filter: bool = True


class FilterPath:
    """Base class for a way of pushing filters to the host."""

    name: str = "path"

    def is_available(self, caps: HostCapabilities) -> bool:
        raise NotImplementedError

    def apply(self, caps: HostCapabilities, descriptor: Dict[str, Any]) -> None:
        raise NotImplementedError

    def clear_steps(self, caps: HostCapabilities) -> List[ClearStep]:
        return []


class FilterManagerPath(FilterPath):
    """Dedicated filter manager; best suited to virtualized backing stores."""

    name = "filter_manager"

    def is_available(self, caps: HostCapabilities) -> bool:
        return caps.filter_manager_apply is not None

    def apply(self, caps: HostCapabilities, descriptor: Dict[str, Any]) -> None:
        caps.filter_manager_apply(descriptor)

    def clear_steps(self, caps: HostCapabilities) -> List[ClearStep]:
        clear = caps.filter_manager_clear
        if clear is None:
            return []
        return [ClearStep(f"{self.name}.clear", clear)]


class JsonFilterPath(FilterPath):
    """Generic JSON filter function with an explicit action code."""

    name = "apply_json_filter"

    def __init__(self, apply_action: FilterAction = FilterAction.MERGE):
        self.apply_action = apply_action

    def is_available(self, caps: HostCapabilities) -> bool:
        return caps.apply_json_filter is not None

    def apply(self, caps: HostCapabilities, descriptor: Dict[str, Any]) -> None:
        caps.apply_json_filter(
            descriptor, FILTER_OBJECT_NAME, FILTER_PROPERTY_NAME, self.apply_action
        )

    def clear_steps(self, caps: HostCapabilities) -> List[ClearStep]:
        if caps.apply_json_filter is None:
            return []
        return [
            ClearStep(
                f"{self.name}.remove[{scope}]",
                partial(caps.apply_json_filter, None, scope, FILTER_PROPERTY_NAME, FilterAction.REMOVE),
            )
            for scope in CLEAR_SCOPES
        ]


def selection_reset_steps(caps: HostCapabilities) -> List[ClearStep]:
    """Selection reset; run on clear but not counted as a filter removal."""
    clear = caps.selection_clear
    if clear is None:
        return []
    return [ClearStep("selection_manager.clear", clear, removes_filter=False)]


def default_paths(apply_action: Optional[FilterAction] = None) -> List[FilterPath]:
    """Paths in priority order."""
    return [
        FilterManagerPath(),
        JsonFilterPath(apply_action if apply_action is not None else FilterAction.MERGE),
    ]
