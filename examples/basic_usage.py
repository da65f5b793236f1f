#!/usr/bin/env python3
"""Basic usage example for avrodatum.

This example demonstrates:
1. Parsing an Avro record schema
2. Building a typed record from plain values
3. Encoding to Avro binary and decoding back
4. Reading selected fields from raw bytes
"""

from __future__ import annotations

import json

from avrodatum import (
    WrongTypeError,
    build_record,
    decode,
    encode,
    extract_fields,
    field_sizes,
    parse_schema,
)

SCHEMA = """
{
    "type": "record",
    "name": "SensorReading",
    "namespace": "telemetry",
    "fields": [
        {"name": "sensor_id", "type": "int"},
        {"name": "timestamp_ms", "type": "long"},
        {"name": "value", "type": "double"},
        {"name": "unit", "type": "string"}
    ]
}
"""


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("avrodatum Basic Usage Example")
    print("=" * 60)
    print()

    # Parse the schema once and reuse it
    print("1. Parsing the schema...")
    schema = parse_schema(SCHEMA)
    for name, type_name in schema.field_types().items():
        print(f"   {name}: {type_name}")
    print()

    # Build a record
    print("2. Building a record...")
    values = {"sensor_id": 7, "timestamp_ms": 1_700_000_000_000, "value": 21.5, "unit": "°C"}
    record = build_record(schema, values)
    print(f"   {record!r}")

    try:
        build_record(schema, {"sensor_id": "seven"})
    except WrongTypeError as e:
        print(f"   Rejected bad input: {e}")
    print()

    # Encode
    print("3. Encoding to Avro binary...")
    data = encode(schema, record)
    for name, size in field_sizes(schema, record).items():
        print(f"   {name}: {size} bytes")
    print(f"   Total: {len(data)} bytes")
    print(f"   Hex: {data.hex()}")
    print()

    # Decode
    print("4. Decoding from binary...")
    decoded = decode(schema, data)
    if decoded == record:
        print("   ✓ Round-trip successful! Records match.")
    else:
        print("   ✗ Round-trip failed! Records don't match.")
    print()

    # Narrow read
    print("5. Extracting selected fields...")
    print(f"   {extract_fields(schema, data, ['value', 'unit'])}")
    print()

    # Compare to JSON
    print("6. Comparing to JSON encoding...")
    json_bytes = json.dumps(values).encode("utf-8")
    print(f"   avrodatum size: {len(data)} bytes")
    print(f"   JSON size: {len(json_bytes)} bytes")
    print(f"   Compression ratio: {len(json_bytes) / len(data):.1f}x")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
