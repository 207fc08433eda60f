"""
SensorBuffer - offline buffering of sensor events as XML files

Sensor events from tools are written one file each into a directory tree
organized by owner and day, so they can be collected without a running
server and bulk-imported into a collection server later.
"""

__version__ = "0.1.0"

from .api import open_buffer
from .events import SensorEvent
from .exceptions import (
    ConfigurationError,
    DirectoryNotFound,
    SensorBufferError,
    WriteError,
)
from .storage.writer import EventWriter

__all__ = [
    "open_buffer",  # Main entry point
    "EventWriter",
    "SensorEvent",
    "SensorBufferError",
    "DirectoryNotFound",
    "WriteError",
    "ConfigurationError",
]
