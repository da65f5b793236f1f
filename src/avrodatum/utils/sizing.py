"""Datum size calculation utilities.

This module provides functions to calculate the encoded size of a record
without actually encoding it.
"""

from __future__ import annotations

from ..codec.binary import INT_BITS, LONG_BITS, STRUCT_DOUBLE, long_size, string_size
from ..codec.dispatch import TypedValue
from ..codec.record import TypedRecord
from ..codec.schema import PrimitiveKind, RecordSchema
from ..exceptions import MissingFieldError, WrongTypeError


def value_size(value: TypedValue) -> int:
    """Calculate the encoded size of a single typed value in bytes.

    Example:
        >>> value_size(to_typed(PrimitiveKind.LONG, 1))
        1
        >>> value_size(to_typed(PrimitiveKind.STRING, "héllo"))
        7
    """
    if value.kind is PrimitiveKind.INT:
        return long_size(value.value, INT_BITS)
    if value.kind is PrimitiveKind.LONG:
        return long_size(value.value, LONG_BITS)
    if value.kind is PrimitiveKind.DOUBLE:
        return STRUCT_DOUBLE.size
    return string_size(value.value)


def field_sizes(schema: RecordSchema, record: TypedRecord) -> dict[str, int]:
    """Get the encoded size in bytes of each field of a record.

    Args:
        schema: Schema the record will be encoded with
        record: Fully populated record

    Returns:
        Dictionary mapping field names to their size in bytes, in declaration order

    Raises:
        MissingFieldError: If a declared field has no value
        WrongTypeError: If a value was typed for a different kind than its field

    Example:
        >>> field_sizes(schema, build_record(schema, {"id": 1, "label": "a"}))
        {'id': 1, 'label': 2}
    """
    missing = [f.name for f in schema.fields if f.name not in record]
    if missing:
        raise MissingFieldError(missing)

    sizes = {}
    for f in schema.fields:
        value = record[f.name]
        if value.kind is not f.kind:
            raise WrongTypeError(f"Field {f.name}: expected {f.kind.value}, got {value.kind.value}")
        sizes[f.name] = value_size(value)
    return sizes


def encoded_size(schema: RecordSchema, record: TypedRecord) -> int:
    """Calculate the encoded size of a record in bytes.

    The result always equals ``len(encode(schema, record))``.

    Raises:
        MissingFieldError: If a declared field has no value
        WrongTypeError: If a value was typed for a different kind than its field
    """
    return sum(field_sizes(schema, record).values())


def fixed_size(schema: RecordSchema) -> dict[str, int | None]:
    """Get the value-independent size of each field.

    Doubles always take 8 bytes. Integers and strings are variable-length, so
    their entry is None.

    Example:
        >>> fixed_size(schema)
        {'id': None, 'label': None}
    """
    return {
        f.name: STRUCT_DOUBLE.size if f.kind is PrimitiveKind.DOUBLE else None
        for f in schema.fields
    }
