"""Schema analysis CLI command."""

from __future__ import annotations

from pathlib import Path

from ..codec.schema import PrimitiveKind, RecordSchema

# Wire form, displayed size range and minimum size (bytes) per kind
_WIRE_FORMS = {
    PrimitiveKind.INT: ("zig-zag varint", "1-5", 1),
    PrimitiveKind.LONG: ("zig-zag varint", "1-10", 1),
    PrimitiveKind.DOUBLE: ("IEEE-754 LE", "8", 8),
    PrimitiveKind.STRING: ("varint length + UTF-8", "1+", 1),
}


def load_schema(file_path: Path) -> RecordSchema:
    """Read and parse a schema file.

    Raises:
        SchemaError: If the file does not hold a valid record schema
    """
    return RecordSchema.from_text(file_path.read_text(encoding="utf-8"))


def analyze_file(file_path: Path) -> None:
    """Print the field layout of the record schema in a file.

    Args:
        file_path: Path to an Avro JSON schema (``.avsc``)
    """
    schema = load_schema(file_path)

    print("|" * 7, "avrodatum: Avro Datum Codec", "|" * 7)
    print(f"Record {schema.fullname}: {len(schema.fields)} field{'s' if len(schema.fields) != 1 else ''}")
    print("Field sizes are in bytes.")
    print()
    analyze_schema(schema)


def analyze_schema(schema: RecordSchema) -> None:
    """Print a field-by-field breakdown of a schema."""
    print(f"{'-' * 28} Body {'-' * 28}")

    minimum = 0
    for i, field_schema in enumerate(schema.fields, 1):
        wire_form, size, min_size = _WIRE_FORMS[field_schema.kind]
        minimum += min_size

        field_desc = f"{i}. {field_schema.name}"
        field_info = f"{field_schema.kind.value} ({wire_form})"
        dots = "." * max(1, 54 - len(field_desc) - len(field_info) - len(size) - 1)
        print(f"        {field_desc}{dots}{field_info} {size}")

    print()
    print(f"{'=' * 24} Summary {'=' * 24}")
    print(f"Minimum encoded size: {minimum} bytes")
    if all(f.kind is PrimitiveKind.DOUBLE for f in schema.fields):
        print("All fields are fixed-size.")
    print()
