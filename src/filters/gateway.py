"""
Filter gateway: applies and clears date filters through host capabilities.

Nothing raised by a host call escapes this module. Every outcome comes back
as a FilterResult so callers can branch on result.error.kind.
"""

from pathlib import Path
from typing import Any, List, Optional
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from config.logging_config import get_logger
from src.binding.models import ColumnBinding
from src.filters.capabilities import FilterAction, HostCapabilities
from src.filters.descriptor import build_descriptor
from src.filters.errors import (
    CapabilityUnavailableError,
    FilterResult,
    HostRejectionError,
    InvalidRangeError,
    NoColumnBoundError,
    PathAttempt,
)
from src.filters.paths import FilterPath, default_paths, selection_reset_steps
from src.ranges.calculator import describe, validate
from src.ranges.models import DateRange

logger = get_logger("filters")


class FilterGateway:
    """Builds descriptors and pushes them through the first usable path."""

    def __init__(
        self,
        paths: Optional[List[FilterPath]] = None,
        apply_action: Optional[FilterAction] = None,
    ):
        """
        Initialize the gateway.

        Args:
            paths: Application paths in priority order. Defaults to the
                filter manager followed by the JSON filter function.
            apply_action: Action code for the JSON path, defaults to config.
                REMOVE is reserved for clearing and is replaced by MERGE.
        """
        if apply_action is None:
            apply_action = FilterAction.from_value(
                config.widget.apply_action, default=FilterAction.MERGE
            )
        apply_action = FilterAction.from_value(apply_action, default=FilterAction.MERGE)
        if apply_action is FilterAction.REMOVE:
            logger.warning("Apply action REMOVE would drop the filter, using MERGE instead")
            apply_action = FilterAction.MERGE
        self.apply_action = apply_action
        self.paths = paths if paths is not None else default_paths(apply_action)

    def apply(
        self,
        binding: Optional[ColumnBinding],
        date_range: Optional[DateRange],
        capabilities: Any,
    ) -> FilterResult:
        """
        Apply a date filter for the bound column.

        Args:
            binding: Bound column; None means filtering is unavailable.
            date_range: Range to filter on; must pass validate().
            capabilities: HostCapabilities or a host object to probe.

        Returns:
            FilterResult naming the path that accepted the filter.
        """
        if binding is None:
            logger.warning("Apply requested with no date column bound")
            return FilterResult.failure(NoColumnBoundError("No date column bound"))

        if not validate(date_range):
            logger.error("Invalid date range provided for filtering")
            return FilterResult.failure(InvalidRangeError("Start date is after end date"))

        caps = HostCapabilities.probe(capabilities)
        descriptor = build_descriptor(binding, date_range).to_json()
        attempts: List[PathAttempt] = []

        for path in self.paths:
            if not path.is_available(caps):
                logger.debug(f"Filter path {path.name} not available")
                continue
            try:
                path.apply(caps, descriptor)
            except Exception as e:
                logger.warning(f"Filter path {path.name} failed: {e}")
                attempts.append(PathAttempt(path.name, False, str(e)))
                continue

            attempts.append(PathAttempt(path.name, True))
            logger.info(
                f"Applied date filter on {binding.table_name}.{binding.column_name} "
                f"via {path.name}: {describe(date_range)}"
            )
            return FilterResult(success=True, path=path.name, descriptor=descriptor, attempts=attempts)

        if not attempts:
            logger.error("No filter capability available on host")
            return FilterResult.failure(
                CapabilityUnavailableError("Host exposes no filter application path"),
                descriptor=descriptor,
            )

        logger.error("Every available filter path failed")
        return FilterResult.failure(
            HostRejectionError(attempts[-1].error or "Host rejected the filter"),
            attempts=attempts,
            descriptor=descriptor,
        )

    def clear(self, capabilities: Any) -> FilterResult:
        """
        Remove the slicer's filters, best effort across scopes.

        Every available removal step runs independently. The clear succeeds
        when at least one filter removal step succeeded; a selection reset
        alone does not count.

        Args:
            capabilities: HostCapabilities or a host object to probe.

        Returns:
            FilterResult listing every step attempted.
        """
        caps = HostCapabilities.probe(capabilities)
        steps = []
        for path in self.paths:
            steps.extend(path.clear_steps(caps))
        steps.extend(selection_reset_steps(caps))

        if not any(step.removes_filter for step in steps):
            logger.error("No filter removal capability available on host")
            return FilterResult.failure(
                CapabilityUnavailableError("Host exposes no filter removal path")
            )

        attempts: List[PathAttempt] = []
        removed_by = []
        for step in steps:
            try:
                step.call()
            except Exception as e:
                logger.warning(f"Clear step {step.name} failed: {e}")
                attempts.append(PathAttempt(step.name, False, str(e)))
                continue
            attempts.append(PathAttempt(step.name, True))
            if step.removes_filter:
                removed_by.append(step.name)

        if not removed_by:
            logger.error("Every filter removal step failed")
            failures = [a.error for a in attempts if not a.succeeded and a.error]
            return FilterResult.failure(
                HostRejectionError(failures[-1] if failures else "Host rejected filter removal"),
                attempts=attempts,
            )

        logger.info(f"Cleared date filters via {', '.join(removed_by)}")
        return FilterResult(success=True, path=removed_by[0], attempts=attempts)
