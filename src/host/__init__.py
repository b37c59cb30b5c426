"""Reference host used by the demo app and tests."""

from .dataframe_host import DataFrameHost, HostCall, HostFilterError

__all__ = [
    "DataFrameHost",
    "HostCall",
    "HostFilterError",
]
