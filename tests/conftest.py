"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from avrodatum import RecordSchema, parse_schema

REC_SCHEMA = """
{
    "type": "record",
    "name": "rec",
    "fields": [
        {"name": "id", "type": "long"},
        {"name": "label", "type": "string"}
    ]
}
"""

SENSOR_SCHEMA = """
{
    "type": "record",
    "name": "SensorReading",
    "namespace": "telemetry",
    "doc": "One reading from a sensor",
    "fields": [
        {"name": "sensor_id", "type": "int"},
        {"name": "timestamp_ms", "type": "long"},
        {"name": "value", "type": "double"},
        {"name": "unit", "type": {"type": "string"}, "doc": "SI unit symbol"}
    ]
}
"""


@pytest.fixture
def rec_schema_text() -> str:
    """Two-field record schema text (long id, string label)."""
    return REC_SCHEMA


@pytest.fixture
def rec_schema() -> RecordSchema:
    """Parsed two-field record schema."""
    return parse_schema(REC_SCHEMA)


@pytest.fixture
def sensor_schema() -> RecordSchema:
    """Parsed schema using all four supported kinds."""
    return parse_schema(SENSOR_SCHEMA)


@pytest.fixture
def sensor_values() -> dict[str, object]:
    """Complete field values for the sensor schema."""
    return {
        "sensor_id": -17,
        "timestamp_ms": 1_700_000_000_123,
        "value": 21.5,
        "unit": "°C",
    }
