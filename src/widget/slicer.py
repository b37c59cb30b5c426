"""
Date slicer controller.

One DateSlicer per widget instance. The host calls update() with every data
change; UI handlers call select_preset(), set_custom_range(), apply() and
clear(). All calls are synchronous and none of them raises: failures become a
UserMessage plus a log entry.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from config.logging_config import ROOT_LOGGER_NAME, DebugLogBuffer, get_logger
from src.binding.discovery import describe_payload, discover
from src.binding.models import BoundaryStrategy, ColumnBinding, QualifiedName, same_target
from src.filters.capabilities import HostCapabilities
from src.filters.errors import (
    FilterError,
    FilterErrorKind,
    FilterResult,
    InvalidRangeError,
    NoColumnBoundError,
)
from src.filters.gateway import FilterGateway
from src.ranges.calculator import (
    build_custom,
    compute,
    default_range,
    describe,
    format_date,
    parse_input_date,
    resolve_anchor,
    validate,
)
from src.ranges.models import AnchorStrategy, DateRange, RangeKind
from src.widget.settings import FormatSettings
from src.widget.state import MessageLevel, UserMessage, WidgetState

logger = get_logger("widget")


class DateSlicer:
    """Owns the binding, current range and lifecycle state of one widget."""

    def __init__(
        self,
        host: Any = None,
        gateway: Optional[FilterGateway] = None,
        anchor_strategy: Union[AnchorStrategy, str, None] = None,
        boundary_strategy: Union[BoundaryStrategy, str, None] = None,
        sample_limit: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the slicer.

        Args:
            host: Host object (or HostCapabilities) exposing filter functions.
            gateway: Filter gateway; a default one is created if omitted.
            anchor_strategy: NOW or DATA_MAX, defaults to config.
            boundary_strategy: STATIC_WINDOW or SAMPLED_SCAN, defaults to config.
            sample_limit: Host sample cap, defaults to config.
            clock: Returns the current time; injectable for tests.
        """
        self.capabilities = HostCapabilities.probe(host)
        self.gateway = gateway or FilterGateway()
        self.anchor_strategy = AnchorStrategy.from_value(
            anchor_strategy or config.widget.anchor_strategy, default=AnchorStrategy.DATA_MAX
        )
        self.boundary_strategy = BoundaryStrategy.from_value(
            boundary_strategy or config.widget.boundary_strategy,
            default=BoundaryStrategy.STATIC_WINDOW,
        )
        self.sample_limit = sample_limit if sample_limit is not None else config.widget.sample_limit
        self._clock = clock or datetime.now

        self.settings = FormatSettings.defaults()
        self.state = WidgetState.UNINITIALIZED
        self.binding: Optional[ColumnBinding] = None
        self.current_range: Optional[DateRange] = None
        self.selected_kind: RangeKind = self.settings.default_range
        self.custom_mode = False
        self.applied_target: Optional[QualifiedName] = None
        self.message: Optional[UserMessage] = None
        self.status_message: Optional[UserMessage] = None

        self._range_is_default = False
        self._debug_buffer = DebugLogBuffer()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def can_filter(self) -> bool:
        """Filtering actions are enabled only while a column is bound."""
        return self.binding is not None and self.state.is_bound

    @property
    def is_applied(self) -> bool:
        return self.state is WidgetState.APPLIED

    def debug_lines(self) -> List[str]:
        """Recent log lines recorded by this instance."""
        return self._debug_buffer.get_lines()

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------

    def update(self, payload: Optional[Mapping], host: Any = None) -> None:
        """
        Handle a host update: refresh settings and re-derive the binding.

        Args:
            payload: Host update payload (see src.binding.discovery).
            host: Optional host object; re-probed for capabilities if given.
        """
        with self._capture_debug():
            try:
                logger.info("Visual update started")
                self.settings = FormatSettings.from_payload(payload)
                self._sync_debug_level()
                if host is not None:
                    self.capabilities = HostCapabilities.probe(host)
                    logger.debug(f"Host capabilities: {self.capabilities.summary()}")

                logger.debug(f"Payload summary: {describe_payload(payload)}")

                binding = discover(
                    payload,
                    strategy=self.boundary_strategy,
                    sample_limit=self.sample_limit,
                    now=self._clock(),
                )
                if self.current_range is None:
                    self.selected_kind = self.settings.default_range
                self._rebind(binding)

                if self.current_range is None:
                    self._reset_to_default()

                logger.info("Visual update completed successfully")
            except Exception as e:
                logger.error(f"Error during visual update: {e}")
                self.message = UserMessage(
                    MessageLevel.ERROR, "The slicer could not process the latest update."
                )

    def _rebind(self, binding: Optional[ColumnBinding]) -> None:
        """Move between AwaitingColumn and Bound, dropping stale targets."""
        previous = self.binding
        self.binding = binding

        if binding is None:
            if previous is not None:
                logger.warning(
                    f"Date column {previous.table_name}.{previous.column_name} is no longer bound"
                )
            self.applied_target = None
            self.state = WidgetState.AWAITING_COLUMN
            self.status_message = UserMessage.from_error(NoColumnBoundError())
            return

        self.status_message = None

        if previous is not None and not same_target(previous, binding):
            logger.info(
                f"Bound column changed from {previous.table_name}.{previous.column_name} "
                f"to {binding.table_name}.{binding.column_name}"
            )

        if self.applied_target is not None and self.applied_target != binding.target:
            logger.info("Previous filter target discarded")
            self.applied_target = None
            if self.state is WidgetState.APPLIED:
                self.state = WidgetState.USER_MODIFIED

        if not self.state.is_bound:
            if self.current_range is None or self._range_is_default:
                self._reset_to_default()
                self.state = WidgetState.DEFAULT_APPLIED
            else:
                self.state = WidgetState.USER_MODIFIED

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def select_preset(self, kind: Union[RangeKind, str]) -> Optional[DateRange]:
        """
        Select a preset range; CUSTOM only switches to custom input mode.

        Returns:
            The current range after the selection.
        """
        with self._capture_debug():
            try:
                kind = RangeKind.from_value(kind)
            except ValueError as e:
                logger.warning(f"Ignoring unknown range selection: {e}")
                return self.current_range

            self.selected_kind = kind
            if kind is RangeKind.CUSTOM:
                self.custom_mode = True
                logger.info("Switched to custom date range mode")
                return self.current_range

            self.custom_mode = False
            anchor = resolve_anchor(self.anchor_strategy, self.binding, now=self._clock())
            self._set_user_range(compute(kind, anchor))
            logger.info(f"Switched to predefined range: {kind.value}")
            return self.current_range

    def set_custom_range(self, start: Any, end: Any) -> bool:
        """
        Replace the range with validated custom bounds.

        Args:
            start: Start date (date, datetime or input string).
            end: End date (date, datetime or input string).

        Returns:
            True if the range was accepted. A reversed or unparsable pair
            leaves the current range untouched.
        """
        with self._capture_debug():
            start_date = parse_input_date(start)
            end_date = parse_input_date(end)
            if start_date is None or end_date is None:
                self._report(InvalidRangeError("Custom dates not provided"))
                return False

            candidate = build_custom(start_date, end_date)
            if not validate(candidate):
                self._report(
                    InvalidRangeError("Invalid custom date range: start date is after end date")
                )
                return False

            self.selected_kind = RangeKind.CUSTOM
            self.custom_mode = True
            self._set_user_range(candidate)
            self.message = None
            logger.info("Custom date range validated successfully")
            return True

    def apply(self) -> FilterResult:
        """Push the current range to the host as a filter."""
        with self._capture_debug():
            binding = self.binding
            date_range = self.current_range
            try:
                if binding is None:
                    error = NoColumnBoundError("Apply requested without a date column")
                    self._report(error)
                    return FilterResult.failure(error)

                if not validate(date_range):
                    error = InvalidRangeError("Invalid date range selected")
                    self._report(error)
                    return FilterResult.failure(error)

                result = self.gateway.apply(binding, date_range, self.capabilities)
            except Exception as e:
                logger.error(f"Error applying filter: {e}")
                error = FilterError(str(e), cause=e)
                self._report(error)
                return FilterResult.failure(error)

            if not result.success:
                self._report(result.error)
                return result

            self.state = WidgetState.APPLIED
            self.applied_target = binding.target
            self._range_is_default = False
            self.message = UserMessage.success(
                f"Filter applied: {format_date(date_range.start_date)} to "
                f"{format_date(date_range.end_date)}"
            )
            return result

    def apply_range(self, date_range: DateRange) -> FilterResult:
        """Set a range programmatically and apply it."""
        with self._capture_debug():
            if not validate(date_range):
                error = InvalidRangeError("Invalid date range provided for programmatic setting")
                self._report(error)
                return FilterResult.failure(error)
            self.selected_kind = date_range.kind
            self.custom_mode = date_range.kind is RangeKind.CUSTOM
            self._set_user_range(date_range)
        return self.apply()

    def clear(self) -> FilterResult:
        """Remove the filter from the host and return to the default range."""
        with self._capture_debug():
            try:
                result = self.gateway.clear(self.capabilities)
            except Exception as e:
                logger.error(f"Error clearing filters: {e}")
                error = FilterError(str(e), cause=e)
                result = FilterResult.failure(error)

            self.applied_target = None
            self.custom_mode = False
            self.selected_kind = self.settings.default_range
            self._reset_to_default()
            self.state = (
                WidgetState.DEFAULT_APPLIED if self.binding is not None
                else WidgetState.AWAITING_COLUMN
            )

            if result.success:
                self.message = UserMessage.info("Filters cleared and reset to default")
                logger.info("Filters cleared and reset to default")
            else:
                self._report(result.error)
            return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _reset_to_default(self) -> None:
        self.current_range = default_range(
            self.selected_kind if self.selected_kind.is_preset else self.settings.default_range,
            binding=self.binding,
            strategy=self.anchor_strategy,
            now=self._clock(),
        )
        self._range_is_default = True
        logger.info(f"Default date range set: {describe(self.current_range)}")

    def _set_user_range(self, date_range: DateRange) -> None:
        self.current_range = date_range
        self._range_is_default = False
        if self.state in (WidgetState.DEFAULT_APPLIED, WidgetState.APPLIED):
            self.state = WidgetState.USER_MODIFIED

    def _report(self, error: Optional[FilterError]) -> None:
        error = error or FilterError()
        log = logger.info if error.kind is FilterErrorKind.NO_COLUMN_BOUND else logger.error
        log(f"{error.kind.value}: {error.detail}")
        self.message = UserMessage.from_error(error)

    def _sync_debug_level(self) -> int:
        """Record debug-level lines only while the debug mode setting is on."""
        level = logging.DEBUG if self.settings.debug_mode else logging.INFO
        self._debug_buffer.setLevel(level)
        root = logging.getLogger(ROOT_LOGGER_NAME)
        if self._debug_buffer in root.handlers and root.getEffectiveLevel() > level:
            root.setLevel(level)
        return level

    @contextmanager
    def _capture_debug(self):
        """Route slicer log records into this instance's debug buffer."""
        root = logging.getLogger(ROOT_LOGGER_NAME)
        if self._debug_buffer in root.handlers:
            yield
            return
        previous_level = root.level
        capture_level = self._sync_debug_level()
        if root.getEffectiveLevel() > capture_level:
            root.setLevel(capture_level)
        root.addHandler(self._debug_buffer)
        try:
            yield
        finally:
            root.removeHandler(self._debug_buffer)
            root.setLevel(previous_level)

    def snapshot(self) -> Dict[str, Any]:
        """Current state for rendering."""
        date_range = self.current_range
        return {
            "state": self.state.value,
            "selected_kind": self.selected_kind.value,
            "custom_mode": self.custom_mode,
            "can_filter": self.can_filter,
            "range": date_range.to_dict() if date_range else None,
            "range_text": describe(date_range) if date_range else "",
            "day_count": date_range.day_count if date_range else 0,
            "column": (
                f"{self.binding.table_name}.{self.binding.column_name}" if self.binding else None
            ),
            "message": self.message.text if self.message else None,
            "status": self.status_message.text if self.status_message else None,
            "settings": {
                "primary_color": self.settings.primary_color,
                "secondary_color": self.settings.secondary_color,
                "font_size": self.settings.font_size,
                "debug_mode": self.settings.debug_mode,
            },
        }
