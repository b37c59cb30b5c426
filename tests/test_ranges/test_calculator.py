"""Tests for range calculation."""

import pytest
from datetime import date, datetime, timedelta, timezone


class TestRangeKind:
    """Tests for RangeKind enum."""

    def test_kind_values(self):
        """Test enum values match the host settings values."""
        from src.ranges.models import RangeKind

        assert RangeKind.LAST_7_DAYS.value == "last7days"
        assert RangeKind.LAST_30_DAYS.value == "last30days"
        assert RangeKind.LAST_90_DAYS.value == "last90days"
        assert RangeKind.CUSTOM.value == "custom"

    def test_preset_days(self):
        """Test presets carry their day counts."""
        from src.ranges.models import RangeKind

        assert RangeKind.LAST_7_DAYS.days == 7
        assert RangeKind.LAST_30_DAYS.days == 30
        assert RangeKind.LAST_90_DAYS.days == 90
        assert RangeKind.CUSTOM.days is None
        assert not RangeKind.CUSTOM.is_preset

    def test_from_value_accepts_value_and_name(self):
        """Test lookup by value or member name."""
        from src.ranges.models import RangeKind

        assert RangeKind.from_value("last30days") is RangeKind.LAST_30_DAYS
        assert RangeKind.from_value("LAST_90_DAYS") is RangeKind.LAST_90_DAYS
        assert RangeKind.from_value(RangeKind.CUSTOM) is RangeKind.CUSTOM

    def test_from_value_unknown(self):
        """Test unknown values raise unless a default is given."""
        from src.ranges.models import RangeKind

        with pytest.raises(ValueError):
            RangeKind.from_value("yesterday")
        assert RangeKind.from_value("yesterday", default=RangeKind.LAST_7_DAYS) is RangeKind.LAST_7_DAYS


class TestCompute:
    """Tests for compute()."""

    @pytest.mark.parametrize("kind,days", [
        ("last7days", 7),
        ("last30days", 30),
        ("last90days", 90),
    ])
    def test_preset_bounds(self, kind, days, fixed_now):
        """Test end is dayEnd(A) and start is dayStart(A - N days)."""
        from src.ranges.calculator import compute
        from src.ranges.day_bounds import day_end, day_start

        result = compute(kind, fixed_now)

        assert result.end_date == day_end(fixed_now)
        assert result.start_date == day_start(fixed_now - timedelta(days=days))
        assert result.kind.value == kind

    def test_last_7_days_scenario(self):
        """Test Last 7 Days anchored on 2024-12-31."""
        from src.ranges.calculator import compute
        from src.ranges.models import RangeKind

        result = compute(RangeKind.LAST_7_DAYS, date(2024, 12, 31))

        assert result.start_date == datetime(2024, 12, 24, 0, 0, 0)
        assert result.end_date == datetime(2024, 12, 31, 23, 59, 59, 999000)

    def test_time_of_day_ignored(self):
        """Test anchors on the same day give the same range."""
        from src.ranges.calculator import compute

        morning = compute("last30days", datetime(2024, 6, 1, 0, 0, 1))
        night = compute("last30days", datetime(2024, 6, 1, 23, 59))

        assert morning == night

    def test_custom_kind_is_single_anchor_day(self, fixed_now):
        """Test CUSTOM without bounds covers just the anchor day."""
        from src.ranges.calculator import compute

        result = compute("custom", fixed_now)

        assert result.is_single_day
        assert result.start_date == datetime(2024, 12, 31)

    def test_default_anchor_is_now(self):
        """Test the anchor defaults to the current day."""
        from src.ranges.calculator import compute

        before = datetime.now().date()
        result = compute("last7days")
        after = datetime.now().date()

        assert before <= result.end_date.date() <= after


class TestValidate:
    """Tests for validate()."""

    def test_none_is_invalid(self):
        from src.ranges.calculator import validate

        assert validate(None) is False

    def test_ordered_range_is_valid(self, fixed_now):
        from src.ranges.calculator import compute, validate

        assert validate(compute("last90days", fixed_now)) is True

    def test_equal_bounds_are_valid(self):
        """Test a one-day range passes."""
        from src.ranges.calculator import validate
        from src.ranges.models import DateRange

        moment = datetime(2025, 3, 1, 12, 0)
        assert validate(DateRange(moment, moment)) is True

    def test_missing_bounds_are_invalid(self):
        """Test non-datetime bounds fail."""
        from src.ranges.calculator import validate
        from src.ranges.models import DateRange

        assert validate(DateRange(None, datetime(2025, 1, 1))) is False
        assert validate(DateRange("2025-01-01", "2025-01-02")) is False


class TestBuildCustom:
    """Tests for build_custom()."""

    def test_normalizes_to_day_boundaries(self):
        from src.ranges.calculator import build_custom
        from src.ranges.models import RangeKind

        result = build_custom(datetime(2025, 3, 1, 14, 5), date(2025, 3, 10))

        assert result.start_date == datetime(2025, 3, 1)
        assert result.end_date == datetime(2025, 3, 10, 23, 59, 59, 999000)
        assert result.kind is RangeKind.CUSTOM

    def test_reversed_pair_not_swapped(self):
        """Test reversed input stays reversed and fails validation."""
        from src.ranges.calculator import build_custom, validate

        result = build_custom(date(2025, 3, 10), date(2025, 3, 1))

        assert result.start_date.date() == date(2025, 3, 10)
        assert result.end_date.date() == date(2025, 3, 1)
        assert validate(result) is False

    def test_validity_matches_ordering(self):
        """Test validate(build_custom(a, b)) equals a <= b."""
        from src.ranges.calculator import build_custom, validate

        days = [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1), date(2025, 1, 1)]
        for a in days:
            for b in days:
                assert validate(build_custom(a, b)) == (a <= b)


class TestResolveAnchor:
    """Tests for anchor selection."""

    def _binding(self, source):
        from src.binding.models import ColumnBinding

        return ColumnBinding(
            display_name="OrderDate",
            table_name="Sales",
            column_name="OrderDate",
            min_date=datetime(2024, 1, 1),
            max_date=datetime(2024, 6, 30, 23, 59, 59, 999000),
            bounds_source=source,
        )

    def test_now_strategy_ignores_binding(self, fixed_now):
        from src.binding.models import BoundarySource
        from src.ranges.calculator import resolve_anchor

        binding = self._binding(BoundarySource.SAMPLED)
        assert resolve_anchor("now", binding, now=fixed_now) == fixed_now

    def test_data_max_uses_observed_max(self, fixed_now):
        from src.binding.models import BoundarySource
        from src.ranges.calculator import resolve_anchor

        binding = self._binding(BoundarySource.SAMPLED)
        assert resolve_anchor("data_max", binding, now=fixed_now) == binding.max_date

    def test_data_max_ignores_static_window(self, fixed_now):
        """Test a synthetic max date is never used as an anchor."""
        from src.binding.models import BoundarySource
        from src.ranges.calculator import resolve_anchor

        binding = self._binding(BoundarySource.STATIC_WINDOW)
        assert resolve_anchor("data_max", binding, now=fixed_now) == fixed_now

    def test_data_max_without_binding(self, fixed_now):
        from src.ranges.calculator import resolve_anchor

        assert resolve_anchor("data_max", None, now=fixed_now) == fixed_now

    def test_anchors_give_different_ranges(self, fixed_now):
        """Test now and data max anchors produce different results."""
        from src.binding.models import BoundarySource
        from src.ranges.calculator import default_range

        binding = self._binding(BoundarySource.SAMPLED)
        by_now = default_range("last7days", binding, "now", now=fixed_now)
        by_data = default_range("last7days", binding, "data_max", now=fixed_now)

        assert by_now.end_date.date() == date(2024, 12, 31)
        assert by_data.end_date.date() == date(2024, 6, 30)


class TestParseInputDate:
    """Tests for custom input parsing."""

    def test_iso_date(self):
        from src.ranges.calculator import parse_input_date

        assert parse_input_date("2025-03-10") == datetime(2025, 3, 10)

    def test_us_format(self):
        from src.ranges.calculator import parse_input_date

        assert parse_input_date("03/10/2025") == datetime(2025, 3, 10)

    def test_date_object(self):
        from src.ranges.calculator import parse_input_date

        assert parse_input_date(date(2025, 3, 10)) == datetime(2025, 3, 10)

    def test_aware_iso_string_becomes_naive(self):
        from src.ranges.calculator import parse_input_date

        result = parse_input_date("2025-03-10T12:00:00Z")
        expected = datetime(2025, 3, 10, 12, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)

        assert result == expected
        assert result.tzinfo is None

    def test_empty_and_garbage(self):
        from src.ranges.calculator import parse_input_date

        assert parse_input_date(None) is None
        assert parse_input_date("") is None
        assert parse_input_date("   ") is None
        assert parse_input_date("not a date") is None
        assert parse_input_date("2025-02-30") is None


class TestDisplay:
    """Tests for display helpers."""

    def test_format_date(self):
        from src.ranges.calculator import format_date

        assert format_date(datetime(2024, 12, 24, 8, 0)) == "Dec 24, 2024"

    def test_display_text(self):
        from src.ranges.calculator import display_text

        assert display_text("last7days") == "Last 7 Days"
        assert display_text("custom") == "Custom Range"
        assert display_text("fortnight") == "Unknown Range"

    def test_describe(self):
        from src.ranges.calculator import compute, describe

        text = describe(compute("last7days", date(2024, 12, 31)))
        assert text == "Last 7 Days: Dec 24, 2024 - Dec 31, 2024"
