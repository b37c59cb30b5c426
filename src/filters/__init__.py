"""Filter descriptor construction and application through host capabilities."""

from .errors import (
    FilterErrorKind,
    FilterError,
    InvalidRangeError,
    NoColumnBoundError,
    CapabilityUnavailableError,
    HostRejectionError,
    PathAttempt,
    FilterResult,
)
from .descriptor import FilterCondition, FilterDescriptor, build_descriptor
from .capabilities import FilterAction, HostCapabilities
from .paths import FilterPath, FilterManagerPath, JsonFilterPath, ClearStep, default_paths
from .gateway import FilterGateway

__all__ = [
    "FilterErrorKind",
    "FilterError",
    "InvalidRangeError",
    "NoColumnBoundError",
    "CapabilityUnavailableError",
    "HostRejectionError",
    "PathAttempt",
    "FilterResult",
    "FilterCondition",
    "FilterDescriptor",
    "build_descriptor",
    "FilterAction",
    "HostCapabilities",
    "FilterPath",
    "FilterManagerPath",
    "JsonFilterPath",
    "ClearStep",
    "default_paths",
    "FilterGateway",
]
