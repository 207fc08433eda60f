"""Storage exceptions: missing storage root, failed event writes."""

from pathlib import Path
from typing import Optional

from .base import SensorBufferError


class StorageError(SensorBufferError):
    """Base class for storage-related errors."""

    pass


class DirectoryNotFound(StorageError, FileNotFoundError):
    """Raised when the storage root does not exist at writer construction."""

    def __init__(self, path: Path):
        super().__init__(
            f"The root directory {path} does not exist",
            details={"path": path},
        )
        self.path = path


class WriteError(StorageError):
    """Raised when a sensor event could not be written.

    Wraps the low-level failure (XML construction, directory creation, file
    I/O) so callers only ever catch one type. The original exception is
    available as ``cause`` and is chained as ``__cause__``.
    """

    def __init__(self, cause: BaseException, path: Optional[Path] = None):
        details = {"cause": f"{type(cause).__name__}: {cause}"}
        if path is not None:
            details["path"] = path

        super().__init__("Failed to write sensor event", details=details)
        self.cause = cause
        self.path = path
