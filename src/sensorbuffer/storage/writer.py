"""Write sensor events as XML files below a storage root.

Each call to ``EventWriter.write`` produces exactly one file::

    <root>/<owner>/<YYYY_MM_DD>/<timestamp>_<tool>[_<n>]

No server is involved; the directory tree is imported into a collection
server later. Usage::

    writer = EventWriter("/var/spool/sensors")
    path = writer.write("IDE", "Activity", "file.txt", "alice@example.com",
                        {"editor": "vim"})
"""

from __future__ import annotations

import logging
import random
import threading
from datetime import tzinfo
from pathlib import Path
from typing import BinaryIO, Callable, Mapping, Optional, Tuple, Union

from ..events.document import build_document, serialize_document
from ..events.schema import SensorEvent
from ..exceptions import DirectoryNotFound, WriteError
from .clock import MonotonicClock
from .layout import day_directory, event_filename, with_suffix_number

logger = logging.getLogger(__name__)

# Smallest allowed range for the random collision suffix.
DEFAULT_SUFFIX_RANGE = 10000


class EventWriter:
    """Buffers sensor events on local disk, one XML file per event.

    Timestamps are assigned here, not by callers, and strictly increase
    across calls on the same instance. ``write`` may be called from several
    threads; calls are serialized by a per-instance lock. Separate processes
    writing into the same root are not coordinated beyond the exclusive
    file creation, which guarantees an existing file is never overwritten.

    Attributes:
        root: Storage root directory.
        tz: Zone timestamps and day directories are expressed in
            (``None`` = local system zone).
        suffix_range: Upper bound (exclusive) of the random collision suffix.
        pretty_print: Indent the written XML.
    """

    def __init__(
        self,
        root: Union[str, Path],
        *,
        clock: Optional[Callable[[], int]] = None,
        rng: Optional[random.Random] = None,
        tz: Optional[tzinfo] = None,
        suffix_range: int = DEFAULT_SUFFIX_RANGE,
        pretty_print: bool = False,
    ) -> None:
        """Create a writer for an existing storage root.

        Args:
            root: Storage root. Must already exist.
            clock: Returns wall-clock milliseconds since the epoch.
            rng: Random source for collision suffixes.
            tz: Zone for timestamps; ``None`` uses the local zone.
            suffix_range: Collision suffixes are drawn from
                ``[0, suffix_range)``; must be at least 10000.
            pretty_print: Indent the written XML.

        Raises:
            DirectoryNotFound: If ``root`` does not exist or is not a directory.
            ValueError: If ``suffix_range`` is below 10000.
        """
        root = Path(root)
        if not root.is_dir():
            raise DirectoryNotFound(root)
        if suffix_range < DEFAULT_SUFFIX_RANGE:
            raise ValueError(
                f"suffix_range must be at least {DEFAULT_SUFFIX_RANGE}, got {suffix_range}"
            )

        self.root = root
        self.tz = tz
        self.suffix_range = suffix_range
        self.pretty_print = pretty_print
        self._clock = MonotonicClock(clock)
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    @property
    def last_timestamp_ms(self) -> int:
        """Most recently issued timestamp in epoch milliseconds."""
        return self._clock.last_issued

    def write(
        self,
        tool: str,
        sensor_data_type: str,
        resource: str,
        owner: str,
        properties: Optional[Mapping[str, str]] = None,
    ) -> Path:
        """Write one sensor event and return the path of the created file.

        The current time is used as the timestamp. If it is not after the
        previously issued timestamp, the timestamp is moved one millisecond
        past it so that time order and call order agree.

        Args:
            tool: The tool the event originates from.
            sensor_data_type: Kind of sensor data, e.g. ``"Activity"``.
            resource: What the event applies to (file, ticket, ...).
            owner: User the event belongs to, preferably an email address.
            properties: Further key/value properties of the event.

        Raises:
            WriteError: If the document cannot be built or the file cannot
                be created or written. The original exception is attached.
        """
        with self._lock:
            timestamp = self._clock.next_datetime(self.tz)
            if self._clock.synthesized:
                logger.debug(
                    "Clock did not advance, issuing synthetic timestamp %d",
                    self._clock.last_issued,
                )

            target: Optional[Path] = None
            try:
                event = SensorEvent(
                    timestamp=timestamp,
                    tool=tool,
                    sensor_data_type=sensor_data_type,
                    resource=resource,
                    owner=owner,
                    properties=dict(properties or {}),
                )
                document = build_document(event)

                day_dir = day_directory(self.root, owner, timestamp)
                day_dir.mkdir(parents=True, exist_ok=True)

                target, stream = self._create_unique(
                    day_dir, event_filename(event.iso_timestamp, tool)
                )
                with stream:
                    serialize_document(document, stream, pretty_print=self.pretty_print)
            except Exception as e:
                logger.warning("Failed to write %s event for %s: %s", tool, owner, e)
                raise WriteError(e, target) from e

            logger.debug("Wrote %s event to %s", sensor_data_type, target)
            return target

    def _create_unique(self, day_dir: Path, base_name: str) -> Tuple[Path, BinaryIO]:
        """Exclusively create a new file in ``day_dir`` and open it for writing.

        Tries ``base_name`` first, then ``base_name_<n>`` with random ``n``
        until a name is free. The exclusive open means a file created by
        someone else between the check and the open is never truncated.
        """
        name = base_name
        while True:
            candidate = day_dir / name
            if candidate.exists():
                logger.debug("%s already exists, picking a new name", candidate)
            else:
                try:
                    return candidate, candidate.open("xb")
                except FileExistsError:
                    logger.debug("%s was created concurrently, picking a new name", candidate)
            name = with_suffix_number(base_name, self._rng.randrange(self.suffix_range))
