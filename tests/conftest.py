"""Pytest configuration and fixtures for Date Range Slicer tests."""

import pytest
import pandas as pd
from datetime import datetime

from tests.doubles import RecordingFilterManager, RecordingJsonFilter, RecordingSelectionManager


FIXED_NOW = datetime(2024, 12, 31, 15, 30, 0)


@pytest.fixture
def fixed_now():
    """Reference 'now' used by clock-dependent tests."""
    return FIXED_NOW


@pytest.fixture
def clock():
    """Clock callable returning FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def filter_manager():
    return RecordingFilterManager()


@pytest.fixture
def json_filter():
    return RecordingJsonFilter()


@pytest.fixture
def selection_manager():
    return RecordingSelectionManager()


@pytest.fixture
def date_source():
    """Categorical source descriptor for Sales.OrderDate."""
    return {
        "displayName": "OrderDate",
        "queryName": "Sales.OrderDate",
        "type": {"dateTime": True},
    }


@pytest.fixture
def categorical_payload(date_source):
    """Update payload with a small, complete date sample."""
    return {
        "categorical": {
            "categories": [
                {
                    "source": date_source,
                    "values": [
                        datetime(2024, 11, 2, 9, 15),
                        datetime(2024, 12, 20, 18, 0),
                        datetime(2024, 10, 5),
                    ],
                }
            ]
        },
        "metadata": {"columns": [date_source]},
    }


@pytest.fixture
def empty_payload():
    """Update payload with no date column bound."""
    return {
        "categorical": {
            "categories": [
                {
                    "source": {
                        "displayName": "Region",
                        "queryName": "Sales.Region",
                        "type": {"text": True},
                    },
                    "values": ["North", "South"],
                }
            ]
        },
        "metadata": {"columns": []},
    }


@pytest.fixture
def sales_binding():
    """Binding for Sales.OrderDate with static window bounds."""
    from src.binding.models import ColumnBinding, BoundarySource

    return ColumnBinding(
        display_name="OrderDate",
        table_name="Sales",
        column_name="OrderDate",
        min_date=datetime(1900, 1, 1),
        max_date=datetime(2029, 12, 31, 23, 59, 59, 999000),
        bounds_source=BoundarySource.STATIC_WINDOW,
    )


@pytest.fixture
def sample_orders():
    """Orders around the end of 2024, including exact day boundaries."""
    return pd.DataFrame({
        "OrderDate": pd.to_datetime([
            "2024-12-23 23:59:59",
            "2024-12-24 00:00:00",
            "2024-12-28 12:00:00",
            "2024-12-31 23:59:59",
            "2025-01-01 00:00:00",
        ]),
        "Amount": [10, 20, 30, 40, 50],
    })
