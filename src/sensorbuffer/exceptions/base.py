"""Base exception for SensorBuffer."""

from typing import Any, Dict, Mapping, Optional


class SensorBufferError(Exception):
    """Base exception for all SensorBuffer errors.

    ``details`` holds the context of the failure (paths, offending values,
    wrapped causes) as strings, so it can be logged or printed as-is.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, str] = {k: str(v) for k, v in (details or {}).items()}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({context})"
