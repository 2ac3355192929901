from __future__ import annotations

from pathlib import Path
from typing import Optional


class SchedulerError(Exception):
    """Base class for every error raised by jobpool_scheduler."""


class ConfigurationError(SchedulerError, ValueError):
    """Invalid run configuration (bad quantum, bad options)."""


class JobPoolFormatError(ConfigurationError):
    """
    A job pool file that does not follow the expected layout.

    Carries the source and the 1-based line number when known so the CLI can
    point at the offending line.
    """

    def __init__(self, message: str, source: Optional[str | Path] = None, line_no: Optional[int] = None):
        self.source = None if source is None else str(source)
        self.line_no = line_no
        location = ""
        if self.source is not None:
            location = self.source if line_no is None else f"{self.source}:{line_no}"
            location += ": "
        super().__init__(f"{location}{message}")


class UnknownPolicyError(ConfigurationError):
    def __init__(self, name: str, available):
        self.name = name
        self.available = sorted(available)
        super().__init__(
            f"Unknown scheduling policy '{name}' (available: {', '.join(self.available)})"
        )


class SchedulingInvariantError(SchedulerError, RuntimeError):
    """Raised when a policy would break a process invariant. Indicates a bug."""
