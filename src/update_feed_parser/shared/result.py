"""Diagnostic and metric types for update feed parsing.

Diagnostics record the non-fatal defects found while building the model (for
example a release date that could not be parsed) so callers can report them
without scraping log output.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()    # Field defects that were recovered locally
    ERROR = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "details": dict(self.details) if self.details else None,
        }


@dataclass
class PerformanceMetrics:
    """Counters collected during one feed resolution."""

    processing_time_ms: float = 0.0
    products_scanned: int = 0
    channels_built: int = 0
    builds_built: int = 0
    patches_built: int = 0

    @property
    def builds_per_second(self) -> float:
        """Calculate builds constructed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.builds_built * 1000.0) / self.processing_time_ms
