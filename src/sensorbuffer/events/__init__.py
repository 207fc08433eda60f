"""Sensor event records and their XML form.

A ``SensorEvent`` lives only for the duration of one write; what persists
is the ``SensorData`` XML document built from it.
"""

from .document import build_document, serialize_document
from .schema import SensorEvent

__all__ = ["SensorEvent", "build_document", "serialize_document"]
