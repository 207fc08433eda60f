"""The sensor event record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ..storage.clock import format_xml_datetime


@dataclass(frozen=True)
class SensorEvent:
    """One timestamped activity record from a tool.

    ``timestamp`` is assigned by the writer, never by the caller.
    """

    timestamp: datetime
    tool: str
    sensor_data_type: str
    resource: str
    owner: str
    properties: dict[str, str] = field(default_factory=dict)

    @property
    def iso_timestamp(self) -> str:
        """Timestamp as an XML Schema dateTime string."""
        return format_xml_datetime(self.timestamp)
