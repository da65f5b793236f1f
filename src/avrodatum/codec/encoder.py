"""Binary encoder for typed records.

This module provides the encode() function that serializes a TypedRecord to
the Avro single-datum binary encoding: fields in schema declaration order,
no header, no embedded schema.
"""

from __future__ import annotations

import logging
import struct
from typing import Any, Callable, Dict, Mapping, Optional

from ..exceptions import EncodeError, MissingFieldError, WrongTypeError
from .binary import BinaryEncoder
from .config import DEFAULT_CONFIG, CodecConfig
from .dispatch import TypedValue
from .record import TypedRecord, build_record
from .schema import FieldSchema, PrimitiveKind, RecordSchema

logger = logging.getLogger(__name__)

_WRITERS: Dict[PrimitiveKind, Callable[[BinaryEncoder, Any], None]] = {
    PrimitiveKind.INT: BinaryEncoder.write_int,
    PrimitiveKind.LONG: BinaryEncoder.write_long,
    PrimitiveKind.DOUBLE: BinaryEncoder.write_double,
    PrimitiveKind.STRING: BinaryEncoder.write_string,
}


def encode(
    schema: RecordSchema, record: TypedRecord, config: Optional[CodecConfig] = None
) -> bytes:
    """Encode a typed record to Avro binary.

    Every field the schema declares must be present in the record. This is
    stricter than building, which accepts partial records.

    Args:
        schema: Schema to encode against
        record: Record built or decoded against ``schema``
        config: Codec options (size limit); defaults apply when omitted

    Returns:
        Encoded datum

    Raises:
        MissingFieldError: If a declared field has no value (all are reported)
        WrongTypeError: If a value's kind differs from the declared kind
        EncodeError: If the datum exceeds ``config.max_encoded_bytes``

    Examples:
        ```python
        from avrodatum import build_record, encode, parse_schema

        schema = parse_schema(
            '{"type": "record", "name": "rec", "fields": ['
            '{"name": "id", "type": "long"}, {"name": "label", "type": "string"}]}'
        )
        data = encode(schema, build_record(schema, {"id": 1, "label": "a"}))
        assert data == b"\\x02\\x02a"
        ```
    """
    config = config or DEFAULT_CONFIG

    missing = [f.name for f in schema.fields if f.name not in record]
    if missing:
        raise MissingFieldError(missing)

    encoder = BinaryEncoder()
    for field_schema in schema.fields:
        _encode_field(encoder, field_schema, record[field_schema.name])

    encoded = encoder.to_bytes()

    max_bytes = config.max_encoded_bytes
    if max_bytes is not None and len(encoded) > max_bytes:
        raise EncodeError(
            f"Encoded datum size ({len(encoded)} bytes) exceeds max_encoded_bytes={max_bytes}"
        )

    logger.debug(f"Encoded {schema.fullname} datum: {len(encoded)} bytes")
    return encoded


def encode_datum(
    schema: RecordSchema, values: Mapping[str, Any], config: Optional[CodecConfig] = None
) -> bytes:
    """Build a record from plain values and encode it in one step.

    Raises:
        FieldNotFoundError: If a key is not declared in the schema
        WrongTypeError: If a value cannot be converted to its field's kind
        MissingFieldError: If a declared field is absent from ``values``
        EncodeError: If the datum exceeds ``config.max_encoded_bytes``
    """
    return encode(schema, build_record(schema, values), config)


def _encode_field(encoder: BinaryEncoder, field_schema: FieldSchema, value: TypedValue) -> None:
    """Encode a single field value.

    Args:
        encoder: BinaryEncoder to write to
        field_schema: Schema information for the field
        value: Typed value to encode

    Raises:
        WrongTypeError: If the value was typed for a different kind
    """
    if not isinstance(value, TypedValue) or value.kind is not field_schema.kind:
        got = value.kind.value if isinstance(value, TypedValue) else type(value).__name__
        raise WrongTypeError(
            f"Field {field_schema.name}: expected {field_schema.kind.value}, got {got}"
        )

    writer = _WRITERS[field_schema.kind]
    try:
        writer(encoder, value.value)
    except (ValueError, TypeError, struct.error) as e:
        raise WrongTypeError(f"Field {field_schema.name}: {e}") from e
