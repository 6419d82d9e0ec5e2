"""Shared utilities for update feed parsing.

This module provides configuration, diagnostics, exception types and logging
used across the tree, feed and API layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    FeedConfig,
)
from .exceptions import (
    MalformedDocumentError,
    MalformedReleasePayloadError,
    UnrecognizedChannelStatusError,
    UpdateFeedError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "FeedConfig",
    "MalformedDocumentError",
    "MalformedReleasePayloadError",
    "UnrecognizedChannelStatusError",
    "UpdateFeedError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
]
