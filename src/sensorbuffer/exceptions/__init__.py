"""Exception hierarchy for SensorBuffer."""

from .base import SensorBufferError
from .config import ConfigurationError
from .storage import DirectoryNotFound, StorageError, WriteError

__all__ = [
    "SensorBufferError",
    "ConfigurationError",
    "StorageError",
    "DirectoryNotFound",
    "WriteError",
]
