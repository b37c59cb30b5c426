"""
In-process reference host backed by a pandas DataFrame.

Emits update payloads in the host shape and exposes the three filter
capabilities the slicer probes for. Applied descriptors are evaluated
against the frame so filtering can be checked end to end.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple
import sys

import pandas as pd

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.constants import (
    DEFAULT_SAMPLE_LIMIT,
    FILTER_OBJECT_NAME,
    LOGICAL_OPERATOR_AND,
    OPERATOR_GREATER_THAN_OR_EQUAL,
    OPERATOR_LESS_THAN_OR_EQUAL,
)
from config.logging_config import get_logger
from src.filters.capabilities import FilterAction

logger = get_logger("host")

OPERATORS = {
    OPERATOR_GREATER_THAN_OR_EQUAL: lambda series, value: series >= value,
    OPERATOR_LESS_THAN_OR_EQUAL: lambda series, value: series <= value,
    "GreaterThan": lambda series, value: series > value,
    "LessThan": lambda series, value: series < value,
    "Is": lambda series, value: series == value,
}


class HostFilterError(Exception):
    """Raised by the reference host when it rejects a call."""

    pass


@dataclass
class HostCall:
    """Record of one capability invocation."""
    capability: str
    args: Tuple[Any, ...] = ()


class _FilterManager:
    def __init__(self, host: "DataFrameHost"):
        self._host = host

    def apply_filter(self, descriptor: Dict[str, Any]) -> None:
        self._host._record("filter_manager.apply_filter", descriptor)
        if self._host.fail_filter_manager:
            raise HostFilterError("Filter manager rejected the filter")
        self._host._store(FILTER_OBJECT_NAME, descriptor)

    def clear(self) -> None:
        self._host._record("filter_manager.clear")
        if self._host.fail_filter_manager:
            raise HostFilterError("Filter manager rejected the clear")
        self._host.active_filters.clear()


class _SelectionManager:
    def __init__(self, host: "DataFrameHost"):
        self._host = host

    def clear(self) -> None:
        self._host._record("selection_manager.clear")
        self._host.selection.clear()


@dataclass
class DataFrameHost:
    """
    Reference host over a DataFrame.

    Attributes:
        frame: Backing data.
        date_column: Column exposed to the slicer, or None to bind nothing.
        table_name: Table the column belongs to.
        sample_limit: Number of values sent per update; more rows add a segment.
        objects: Formatting pane objects sent in metadata.
        enable_filter_manager / enable_json_filter / enable_selection_manager:
            Whether each capability is exposed.
        fail_filter_manager: Make every filter manager call raise.
        failing_scopes: Scopes for which the JSON filter function raises.
    """

    frame: pd.DataFrame
    date_column: Optional[str] = None
    table_name: str = "Table"
    sample_limit: int = DEFAULT_SAMPLE_LIMIT
    objects: Dict[str, Any] = field(default_factory=dict)
    enable_filter_manager: bool = True
    enable_json_filter: bool = True
    enable_selection_manager: bool = True
    fail_filter_manager: bool = False
    failing_scopes: Set[str] = field(default_factory=set)

    def __post_init__(self):
        self.active_filters: Dict[str, Dict[str, Any]] = {}
        self.selection: List[Any] = []
        self.calls: List[HostCall] = []

        self.filter_manager = _FilterManager(self) if self.enable_filter_manager else None
        self.apply_json_filter = self._apply_json_filter if self.enable_json_filter else None
        self.selection_manager = _SelectionManager(self) if self.enable_selection_manager else None

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    def _record(self, capability: str, *args: Any) -> None:
        self.calls.append(HostCall(capability, args))

    def _apply_json_filter(
        self,
        descriptor: Optional[Dict[str, Any]],
        scope: str,
        property_name: str,
        action: FilterAction,
    ) -> None:
        self._record("apply_json_filter", descriptor, scope, property_name, action)
        if scope in self.failing_scopes:
            raise HostFilterError(f"Scope {scope!r} is not supported")

        if FilterAction(action) is FilterAction.REMOVE:
            self.active_filters.pop(scope, None)
            return
        if descriptor is None:
            raise HostFilterError("Merge requires a filter descriptor")
        self._store(scope, descriptor)

    def _store(self, scope: str, descriptor: Dict[str, Any]) -> None:
        self._validate_target(descriptor)
        self.active_filters[scope] = descriptor
        logger.debug(f"Host stored filter for scope {scope}")

    def _validate_target(self, descriptor: Dict[str, Any]) -> None:
        target = descriptor.get("target") or {}
        if target.get("table") != self.table_name or target.get("column") != self.date_column:
            raise HostFilterError(
                f"Unknown filter target {target.get('table')}.{target.get('column')}"
            )

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    @property
    def capability_calls(self) -> List[str]:
        return [c.capability for c in self.calls]

    def build_payload(self) -> Dict[str, Any]:
        """Update payload for the slicer, capped at sample_limit values."""
        metadata: Dict[str, Any] = {"columns": [], "objects": dict(self.objects)}
        payload: Dict[str, Any] = {"metadata": metadata}

        if self.date_column is None or self.date_column not in self.frame.columns:
            return payload

        source = {
            "displayName": self.date_column,
            "queryName": f"{self.table_name}.{self.date_column}",
            "type": {"dateTime": True},
        }
        stamps = pd.to_datetime(self.frame[self.date_column], errors="coerce").dropna()
        distinct = stamps.drop_duplicates().sort_values()
        values = [ts.to_pydatetime() for ts in distinct.iloc[: self.sample_limit]]
        if len(distinct) > self.sample_limit:
            metadata["segment"] = {}
        else:
            payload["isComplete"] = True

        metadata["columns"].append(source)
        payload["categorical"] = {"categories": [{"source": source, "values": values}]}
        return payload

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(self, descriptor: Dict[str, Any]) -> pd.Series:
        """Boolean mask of rows matching one descriptor."""
        self._validate_target(descriptor)
        series = pd.to_datetime(self.frame[self.date_column], errors="coerce")
        masks = []
        for condition in descriptor.get("conditions", []):
            operator = OPERATORS.get(condition.get("operator"))
            if operator is None:
                raise HostFilterError(f"Unsupported operator {condition.get('operator')!r}")
            masks.append(operator(series, pd.Timestamp(condition["value"])))

        if not masks:
            return pd.Series(True, index=self.frame.index)
        combined = masks[0]
        for mask in masks[1:]:
            if descriptor.get("logicalOperator", LOGICAL_OPERATOR_AND) == LOGICAL_OPERATOR_AND:
                combined = combined & mask
            else:
                combined = combined | mask
        return combined.fillna(False)

    def filtered_frame(self) -> pd.DataFrame:
        """Rows visible under every active filter."""
        if self.date_column is None:
            return self.frame
        mask = pd.Series(True, index=self.frame.index)
        for descriptor in self.active_filters.values():
            mask &= self.evaluate(descriptor)
        return self.frame[mask]
