"""On-disk layout of buffered events.

    <root>/<sanitized owner>/<YYYY_MM_DD>/<sanitized "<timestamp>_<tool>">[_<n>]

Importers rely on this layout, so it must not change.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

# Characters that are reserved on at least one common filesystem.
UNSAFE_CHARS = "/\\:'\"<>?*|"
REPLACEMENT = "-"

_SANITIZE_TABLE = str.maketrans({c: REPLACEMENT for c in UNSAFE_CHARS})


def sanitize(value: str) -> str:
    """Replace filesystem-reserved characters with ``-``.

    Only the characters in ``UNSAFE_CHARS`` are touched; this keeps a string
    usable as a single path component, it is not a general escaping scheme.

    Example:
        >>> sanitize("a/b:c")
        'a-b-c'
    """
    return value.translate(_SANITIZE_TABLE)


def day_directory_name(timestamp: datetime) -> str:
    """Name of the per-day directory, e.g. ``2024_01_15``."""
    return f"{timestamp.year:04d}_{timestamp.month:02d}_{timestamp.day:02d}"


def day_directory(root: Path, owner: str, timestamp: datetime) -> Path:
    """Directory holding all events of ``owner`` recorded on the timestamp's date."""
    return root / sanitize(owner) / day_directory_name(timestamp)


def event_filename(iso_timestamp: str, tool: str) -> str:
    """Base filename for an event, before any collision suffix."""
    return sanitize(f"{iso_timestamp}_{tool}")


def with_suffix_number(base_name: str, number: int) -> str:
    """Filename used when ``base_name`` is already taken."""
    return f"{base_name}_{number}"
