"""Configuration exceptions: config files, environment values, settings."""

from pathlib import Path
from typing import Any, Optional

from .base import SensorBufferError


class ConfigurationError(SensorBufferError):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(
        self,
        reason: str,
        key: Optional[str] = None,
        value: Any = None,
        source: Optional[Path] = None,
    ):
        details = {}
        if key is not None:
            details["key"] = key
            details["value"] = value
        if source is not None:
            details["source"] = source

        super().__init__(f"Invalid configuration: {reason}", details=details)
        self.reason = reason
        self.key = key
        self.value = value
        self.source = source
