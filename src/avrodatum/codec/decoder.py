"""Binary decoder for typed records.

This module provides the decode functions that turn Avro binary data back into
a TypedRecord. ``decode_with_remainder`` is the byte-level decoder and reports
unconsumed bytes; ``decode`` layers the all-data-consumed check on top of it.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from ..exceptions import MalformedError, TrailingDataError, TruncatedError
from .binary import BinaryDecoder
from .config import DEFAULT_CONFIG, CodecConfig
from .dispatch import TypedValue, to_typed
from .record import TypedRecord
from .schema import FieldSchema, PrimitiveKind, RecordSchema

logger = logging.getLogger(__name__)

_READERS: Dict[PrimitiveKind, Callable[[BinaryDecoder], Any]] = {
    PrimitiveKind.INT: BinaryDecoder.read_int,
    PrimitiveKind.LONG: BinaryDecoder.read_long,
    PrimitiveKind.DOUBLE: BinaryDecoder.read_double,
    PrimitiveKind.STRING: BinaryDecoder.read_string,
}


def decode_with_remainder(schema: RecordSchema, data: bytes) -> Tuple[TypedRecord, bytes]:
    """Decode one datum and return it with any unconsumed bytes.

    Fields are read strictly in schema declaration order. The input buffer is
    only borrowed for the duration of the call.

    Args:
        schema: Schema the datum was written with
        data: Binary data to decode

    Returns:
        Tuple of (record covering every declared field, trailing bytes)

    Raises:
        TruncatedError: If the data ends inside a field
        MalformedError: If a varint is overlong or overflows, a length prefix
            is negative, or string bytes are not valid UTF-8
    """
    decoder = BinaryDecoder(data)
    try:
        values: Dict[str, TypedValue] = {}
        for field_schema in schema.fields:
            values[field_schema.name] = _decode_field(decoder, field_schema)
        remainder = decoder.remainder()
    finally:
        decoder.release()

    return TypedRecord(schema, values), remainder


def decode(
    schema: RecordSchema,
    data: bytes,
    *,
    tolerate_padding: bool = True,
    config: Optional[CodecConfig] = None,
) -> TypedRecord:
    """Decode one datum, requiring that all data is consumed.

    The only trailing data accepted is a single padding byte (by default a
    line feed, see ``CodecConfig.padding_byte``) and only when
    ``tolerate_padding`` is true.

    Args:
        schema: Schema the datum was written with
        data: Binary data to decode
        tolerate_padding: Accept exactly one trailing padding byte
        config: Codec options; defaults apply when omitted

    Returns:
        Decoded record

    Raises:
        TruncatedError: If the data ends inside a field
        MalformedError: If the data cannot be a valid encoding
        TrailingDataError: If the datum decoded but unexpected bytes remain

    Examples:
        ```python
        record = decode(schema, b"\\x02\\x02a")
        record = decode(schema, b"\\x02\\x02a\\n")  # trailing newline tolerated

        decode(schema, b"\\x02\\x02a\\n\\n")  # raises TrailingDataError
        ```
    """
    config = config or DEFAULT_CONFIG

    record, remainder = decode_with_remainder(schema, data)
    if remainder and not (tolerate_padding and remainder == config.padding):
        logger.debug(
            f"Rejecting {schema.fullname} datum with {len(remainder)} trailing byte(s)"
        )
        raise TrailingDataError(remainder)

    logger.debug(f"Decoded {schema.fullname} datum from {len(data)} bytes")
    return record


def decode_to_dict(
    schema: RecordSchema,
    data: bytes,
    *,
    tolerate_padding: bool = True,
    config: Optional[CodecConfig] = None,
) -> Dict[str, Any]:
    """Decode one datum straight to a dict of plain Python values.

    Raises:
        TruncatedError, MalformedError, TrailingDataError: As for ``decode``
    """
    record = decode(schema, data, tolerate_padding=tolerate_padding, config=config)
    return record.to_dict()


def _decode_field(decoder: BinaryDecoder, field_schema: FieldSchema) -> TypedValue:
    """Decode a single field value.

    Args:
        decoder: BinaryDecoder to read from
        field_schema: Schema information for the field

    Returns:
        Decoded typed value

    Raises:
        TruncatedError: If data is truncated
        MalformedError: If data is invalid
    """
    reader = _READERS[field_schema.kind]
    offset = decoder.position()
    try:
        raw = reader(decoder)
    except IndexError as e:
        raise TruncatedError(
            f"Truncated data while decoding field {field_schema.name} at byte {offset}: {e}"
        ) from e
    except ValueError as e:
        raise MalformedError(
            f"Malformed data while decoding field {field_schema.name} at byte {offset}: {e}"
        ) from e

    return to_typed(field_schema.kind, raw)
