"""Strictly increasing event timestamps.

Wall-clock time is only a suggestion: if it has not moved past the last
timestamp handed out (coarse clock, several calls within one millisecond,
or the clock stepping backwards), the next millisecond after the last one
is issued instead. Recorded times can therefore drift ahead of real time
under high call rates, but their order always matches the order of calls.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Callable, Optional

# Signed 64-bit minimum; no real clock reading is ever at or below it.
MIN_TIMESTAMP_MS = -(2**63)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


class MonotonicClock:
    """Issues strictly increasing millisecond timestamps.

    Not thread-safe on its own; ``EventWriter`` calls it under its lock.
    """

    def __init__(self, source: Optional[Callable[[], int]] = None) -> None:
        self._source = source or wall_clock_ms
        self.last_issued = MIN_TIMESTAMP_MS
        self._last_synthesized = False

    def next_ms(self) -> int:
        """Return the next timestamp in milliseconds since the epoch."""
        now = self._source()
        if now > self.last_issued:
            self.last_issued = now
            self._last_synthesized = False
        else:
            self.last_issued += 1
            self._last_synthesized = True
        return self.last_issued

    @property
    def synthesized(self) -> bool:
        """Whether the last call had to step past a stalled clock."""
        return self._last_synthesized

    def next_datetime(self, tz: Optional[tzinfo] = None) -> datetime:
        """Return the next timestamp as an aware datetime.

        Args:
            tz: Zone to express the instant in; ``None`` uses the local zone.
        """
        return to_datetime(self.next_ms(), tz)


def to_datetime(ms: int, tz: Optional[tzinfo] = None) -> datetime:
    """Convert epoch milliseconds to an aware datetime in ``tz``."""
    instant = _EPOCH + timedelta(milliseconds=ms)
    return instant.astimezone(tz)


def format_xml_datetime(dt: datetime) -> str:
    """Format an aware datetime as an XML Schema ``dateTime``.

    Always three fractional digits and a zone designator; a zero offset is
    written as ``Z``, e.g. ``2024-01-15T10:30:00.000+01:00`` or
    ``2024-01-15T09:30:00.000Z``.
    """
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError("XML dateTime requires a timezone-aware datetime")

    base = (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )
    millis = dt.microsecond // 1000

    offset = dt.utcoffset()
    if not offset:
        zone = "Z"
    else:
        total_minutes = int(offset.total_seconds()) // 60
        sign = "+" if total_minutes >= 0 else "-"
        hours, minutes = divmod(abs(total_minutes), 60)
        zone = f"{sign}{hours:02d}:{minutes:02d}"

    return f"{base}.{millis:03d}{zone}"
