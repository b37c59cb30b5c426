"""Tests for date column discovery."""

import pytest
from datetime import datetime


def _category(source, values):
    return {"categorical": {"categories": [{"source": source, "values": values}]}}


class TestIsDateType:
    """Tests for declared type detection."""

    @pytest.mark.parametrize("declared", [
        {"dateTime": True},
        {"date": True},
        "DateTime",
        "date_time",
        "timestamp",
    ])
    def test_date_types(self, declared):
        from src.binding.discovery import is_date_type

        assert is_date_type(declared) is True

    @pytest.mark.parametrize("declared", [{"text": True}, {"dateTime": False}, "numeric", None, 5])
    def test_non_date_types(self, declared):
        from src.binding.discovery import is_date_type

        assert is_date_type(declared) is False


class TestResolveTarget:
    """Tests for resolve_target."""

    def test_query_name(self, date_source):
        from src.binding.discovery import resolve_target

        display_name, target = resolve_target(date_source)

        assert display_name == "OrderDate"
        assert target == ("Sales", "OrderDate")

    def test_expr_wins_over_query_name(self):
        """Test the expression entity and ref take priority."""
        from src.binding.discovery import resolve_target

        column = {
            "displayName": "Order Date",
            "queryName": "Sum(Orders.Date)",
            "expr": {"source": {"entity": "Orders"}, "ref": "Date"},
        }

        _, target = resolve_target(column)
        assert target == ("Orders", "Date")

    def test_display_name_fallback(self):
        from src.binding.discovery import resolve_target

        _, target = resolve_target({"displayName": "Ship Date"})
        assert target == ("Table", "Ship Date")


class TestDiscover:
    """Tests for discover()."""

    def test_missing_payload(self):
        from src.binding.discovery import discover

        assert discover(None) is None
        assert discover({}) is None
        assert discover("not a payload") is None

    def test_no_date_column(self, empty_payload, fixed_now):
        """Test a payload without date columns binds nothing."""
        from src.binding.discovery import discover

        assert discover(empty_payload, strategy="static_window", now=fixed_now) is None

    def test_categorical_static_window(self, categorical_payload, fixed_now):
        """Test the static window spans 1900 to year end five years ahead."""
        from src.binding.discovery import discover
        from src.binding.models import BoundarySource

        binding = discover(categorical_payload, strategy="static_window", now=fixed_now)

        assert binding.table_name == "Sales"
        assert binding.column_name == "OrderDate"
        assert binding.display_name == "OrderDate"
        assert binding.query_name == "Sales.OrderDate"
        assert binding.bounds_source is BoundarySource.STATIC_WINDOW
        assert binding.min_date == datetime(1900, 1, 1)
        assert binding.max_date == datetime(2029, 12, 31, 23, 59, 59, 999000)
        assert not binding.has_observed_bounds

    def test_first_date_column_wins(self, date_source, fixed_now):
        from src.binding.discovery import discover

        ship = {"displayName": "ShipDate", "queryName": "Sales.ShipDate", "type": {"dateTime": True}}
        payload = {
            "categorical": {
                "categories": [
                    {"source": {"displayName": "Region", "type": {"text": True}}, "values": ["N"]},
                    {"source": date_source, "values": []},
                    {"source": ship, "values": []},
                ]
            }
        }

        binding = discover(payload, strategy="static_window", now=fixed_now)
        assert binding.column_name == "OrderDate"

    def test_sampled_scan_complete(self, categorical_payload, fixed_now):
        """Test a complete sample yields observed bounds at day boundaries."""
        from src.binding.discovery import discover
        from src.binding.models import BoundarySource

        categorical_payload["isComplete"] = True
        binding = discover(categorical_payload, strategy="sampled_scan", sample_limit=1000, now=fixed_now)

        assert binding.bounds_source is BoundarySource.SAMPLED
        assert binding.min_date == datetime(2024, 10, 5)
        assert binding.max_date == datetime(2024, 12, 20, 23, 59, 59, 999000)

    def test_sampled_scan_segmented(self, categorical_payload, fixed_now):
        """Test a segment marker falls back to the static window."""
        from src.binding.discovery import discover
        from src.binding.models import BoundarySource

        categorical_payload["metadata"]["segment"] = {}
        categorical_payload["isComplete"] = True
        binding = discover(categorical_payload, strategy="sampled_scan", sample_limit=1000, now=fixed_now)

        assert binding.bounds_source is BoundarySource.STATIC_WINDOW
        assert binding.min_date == datetime(1900, 1, 1)

    def test_sampled_scan_at_limit(self, categorical_payload, fixed_now):
        """Test a sample that fills the cap is treated as partial."""
        from src.binding.discovery import discover
        from src.binding.models import BoundarySource

        categorical_payload["isComplete"] = True
        binding = discover(categorical_payload, strategy="sampled_scan", sample_limit=3, now=fixed_now)

        assert binding.bounds_source is BoundarySource.STATIC_WINDOW

    def test_unflagged_sample_uses_static_window(self, categorical_payload, fixed_now):
        """Test a small unsegmented sample is not trusted without the flag."""
        from src.binding.discovery import discover
        from src.binding.models import BoundarySource

        binding = discover(categorical_payload, strategy="sampled_scan", sample_limit=1000, now=fixed_now)

        assert binding.bounds_source is BoundarySource.STATIC_WINDOW
        assert binding.min_date == datetime(1900, 1, 1)

    @pytest.mark.parametrize("flag", [False, "yes", 1])
    def test_flag_must_be_true(self, categorical_payload, flag):
        from src.binding.discovery import is_complete_sample

        categorical_payload["isComplete"] = flag

        assert is_complete_sample(categorical_payload, ["2024-01-01"], 1000) is False

    def test_flagged_sample(self, categorical_payload):
        from src.binding.discovery import is_complete_sample

        categorical_payload["isComplete"] = True

        assert is_complete_sample(categorical_payload, ["2024-01-01"], 1000) is True
        assert is_complete_sample(categorical_payload, ["2024-01-01"], 1) is False

    def test_sampled_scan_mixed_values(self, date_source, fixed_now):
        """Test strings, epoch milliseconds and None are handled together."""
        from src.binding.discovery import discover

        epoch_ms = datetime(2024, 3, 15, 12, 0).timestamp() * 1000
        payload = _category(date_source, ["2024-01-02", epoch_ms, None, "garbage", datetime(2024, 2, 1)])
        payload["isComplete"] = True

        binding = discover(payload, strategy="sampled_scan", sample_limit=1000, now=fixed_now)

        assert binding.min_date == datetime(2024, 1, 2)
        assert binding.max_date.date() == datetime(2024, 3, 15).date()

    def test_sampled_scan_unparsable(self, date_source, fixed_now):
        from src.binding.discovery import discover
        from src.binding.models import BoundarySource

        payload = _category(date_source, ["n/a", None])
        payload["isComplete"] = True
        binding = discover(payload, strategy="sampled_scan", sample_limit=1000, now=fixed_now)

        assert binding.bounds_source is BoundarySource.STATIC_WINDOW

    def test_table_shape(self, fixed_now):
        """Test tabular payloads are scanned by column index."""
        from src.binding.discovery import discover
        from src.binding.models import BoundarySource

        payload = {
            "table": {
                "columns": [
                    {"displayName": "Amount", "type": {"numeric": True}},
                    {"displayName": "OrderDate", "queryName": "Orders[OrderDate]", "type": "dateTime"},
                ],
                "rows": [[10, "2024-05-01"], [20, "2024-05-09"]],
            },
            "isComplete": True,
        }

        binding = discover(payload, strategy="sampled_scan", sample_limit=1000, now=fixed_now)

        assert binding.target == ("Orders", "OrderDate")
        assert binding.bounds_source is BoundarySource.SAMPLED
        assert binding.max_date.date() == datetime(2024, 5, 9).date()

    def test_metadata_only_column(self, date_source, fixed_now):
        """Test a column with no values gets the static window even when scanning."""
        from src.binding.discovery import discover
        from src.binding.models import BoundarySource

        payload = {"metadata": {"columns": [date_source]}}
        binding = discover(payload, strategy="sampled_scan", sample_limit=1000, now=fixed_now)

        assert binding.column_name == "OrderDate"
        assert binding.bounds_source is BoundarySource.STATIC_WINDOW

    def test_unparsable_query_name(self, fixed_now):
        from src.binding.discovery import discover

        source = {"displayName": "When", "queryName": "When", "type": {"dateTime": True}}
        binding = discover(_category(source, []), strategy="static_window", now=fixed_now)

        assert binding.target == ("Table", "When")


class TestStaticWindow:
    """Tests for static_window."""

    def test_window_bounds(self):
        from src.binding.discovery import static_window

        start, end = static_window(datetime(2026, 3, 1), future_years=2)

        assert start == datetime(1900, 1, 1)
        assert end == datetime(2028, 12, 31, 23, 59, 59, 999000)


class TestDescribePayload:
    def test_summary(self, categorical_payload):
        from src.binding.discovery import describe_payload

        summary = describe_payload(categorical_payload)

        assert summary["present"] is True
        assert summary["date_columns"] == 2
        assert summary["segmented"] is False

    def test_missing(self):
        from src.binding.discovery import describe_payload

        assert describe_payload(None) == {"present": False}


class TestSameTarget:
    def test_same_target(self, sales_binding):
        from dataclasses import replace
        from src.binding.models import BoundarySource, same_target

        resampled = replace(sales_binding, bounds_source=BoundarySource.SAMPLED)
        other = replace(sales_binding, column_name="ShipDate")

        assert same_target(sales_binding, resampled) is True
        assert same_target(sales_binding, other) is False
        assert same_target(sales_binding, None) is False
