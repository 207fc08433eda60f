"""Tests for events/document.py - SensorData document construction."""

import io
import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone

import pytest

from sensorbuffer.events import SensorEvent, build_document, serialize_document


def _event(**overrides):
    fields = dict(
        timestamp=datetime(2024, 1, 15, 10, 30, tzinfo=timezone(timedelta(hours=1))),
        tool="IDE",
        sensor_data_type="Activity",
        resource="file.txt",
        owner="alice@example.com",
        properties={"editor": "vim", "lines": "42"},
    )
    fields.update(overrides)
    return SensorEvent(**fields)


class TestSensorEvent:
    def test_iso_timestamp(self):
        assert _event().iso_timestamp == "2024-01-15T10:30:00.000+01:00"

    def test_default_properties_empty(self):
        event = SensorEvent(
            timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
            tool="t",
            sensor_data_type="d",
            resource="r",
            owner="o",
        )
        assert event.properties == {}


class TestBuildDocument:
    def test_structure(self):
        root = build_document(_event()).getroot()

        assert root.tag == "SensorData"
        assert root.findtext("Timestamp") == "2024-01-15T10:30:00.000+01:00"
        assert root.findtext("Runtime") == "2024-01-15T10:30:00.000+01:00"
        assert root.findtext("Tool") == "IDE"
        assert root.findtext("SensorDataType") == "Activity"
        assert root.findtext("Resource") == "file.txt"
        assert root.findtext("Owner") == "alice@example.com"

        pairs = [
            (p.findtext("Key"), p.findtext("Value"))
            for p in root.findall("Properties/Property")
        ]
        assert pairs == [("editor", "vim"), ("lines", "42")]

    def test_property_children(self):
        prop = build_document(_event()).getroot().find("Properties/Property")
        assert [child.tag for child in prop] == ["Key", "Value"]

    def test_empty_strings_allowed(self):
        root = build_document(_event(resource="", properties={"": ""})).getroot()
        assert root.findtext("Resource") == ""
        assert root.findtext("Properties/Property/Key") == ""

    @pytest.mark.parametrize("bad", ["\x00", "a\x0bb", "\x1f", "\ufffe"])
    def test_illegal_characters_rejected(self, bad):
        with pytest.raises(ValueError, match="Tool"):
            build_document(_event(tool=bad))

    def test_tab_and_newline_allowed(self):
        root = build_document(_event(resource="a\tb\nc")).getroot()
        assert root.findtext("Resource") == "a\tb\nc"

    def test_non_string_rejected(self):
        with pytest.raises(TypeError, match="Value"):
            build_document(_event(properties={"n": 1}))


class TestSerializeDocument:
    def test_parses_back(self):
        stream = io.BytesIO()
        serialize_document(build_document(_event()), stream)

        data = stream.getvalue()
        assert data.startswith(b"<?xml version='1.0' encoding='UTF-8'?>")
        assert ET.fromstring(data).findtext("Owner") == "alice@example.com"

    def test_pretty_print_indents(self):
        stream = io.BytesIO()
        serialize_document(build_document(_event()), stream, pretty_print=True)
        assert b"\n    <Property>" in stream.getvalue()

    def test_carriage_return_preserved(self):
        stream = io.BytesIO()
        serialize_document(
            build_document(_event(resource="a\rb", properties={"msg": "line1\r\nline2"})),
            stream,
        )

        data = stream.getvalue()
        assert b"\r" not in data
        root = ET.fromstring(data)
        assert root.findtext("Resource") == "a\rb"
        assert root.findtext("Properties/Property/Value") == "line1\r\nline2"
