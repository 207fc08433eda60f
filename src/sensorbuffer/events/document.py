"""Build and serialize ``SensorData`` XML documents.

Element names and their order are read by downstream importers and must
stay exactly as they are:

    SensorData
      Timestamp, Runtime, Tool, SensorDataType, Resource, Owner,
      Properties/Property/(Key, Value)

``Runtime`` always repeats ``Timestamp``. Importers expect both fields.
"""

from __future__ import annotations

import io
import re
import xml.etree.ElementTree as ET
from typing import BinaryIO

from .schema import SensorEvent

ROOT_TAG = "SensorData"

# Code points not allowed anywhere in an XML 1.0 document.
_ILLEGAL_XML_CHARS = re.compile(
    "[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]"
)


def _text_element(parent: ET.Element, tag: str, text: str) -> ET.Element:
    if not isinstance(text, str):
        raise TypeError(f"{tag} must be a string, got {type(text).__name__}")
    match = _ILLEGAL_XML_CHARS.search(text)
    if match:
        raise ValueError(
            f"{tag} contains a character not allowed in XML: {match.group()!r}"
        )
    element = ET.SubElement(parent, tag)
    element.text = text
    return element


def build_document(event: SensorEvent) -> ET.ElementTree:
    """Build the in-memory XML document for ``event``.

    Raises:
        TypeError: If a field or property is not a string.
        ValueError: If any text contains characters XML cannot represent.
    """
    timestamp = event.iso_timestamp

    root = ET.Element(ROOT_TAG)
    _text_element(root, "Timestamp", timestamp)
    _text_element(root, "Runtime", timestamp)
    _text_element(root, "Tool", event.tool)
    _text_element(root, "SensorDataType", event.sensor_data_type)
    _text_element(root, "Resource", event.resource)
    _text_element(root, "Owner", event.owner)

    properties = ET.SubElement(root, "Properties")
    for key, value in event.properties.items():
        prop = ET.SubElement(properties, "Property")
        _text_element(prop, "Key", key)
        _text_element(prop, "Value", value)

    return ET.ElementTree(root)


def serialize_document(
    document: ET.ElementTree, stream: BinaryIO, pretty_print: bool = False
) -> None:
    """Write ``document`` to a binary stream as UTF-8 XML with a declaration.

    Carriage returns in text are written as ``&#13;``; a parser would
    otherwise normalize them to line feeds on read.
    """
    if pretty_print:
        ET.indent(document)
    buffer = io.BytesIO()
    document.write(buffer, encoding="UTF-8", xml_declaration=True)
    # ElementTree emits a raw CR only inside text content
    stream.write(buffer.getvalue().replace(b"\r", b"&#13;"))
