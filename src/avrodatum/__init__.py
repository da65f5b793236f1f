"""avrodatum: Avro Datum Codec

A Python library for schema-driven encoding of single Avro record datums.
Records are validated against a parsed schema, serialized to the compact Avro
binary encoding, and recovered fully or field by field.

Key Features:
- Avro JSON record schemas validated with Pydantic
- int, long, double and string fields with strict type checking
- Byte-exact Avro binary encoding (zig-zag varints, little-endian doubles)
- Trailing-data detection on decode
- Field projection without exposing unrequested data

Quick Start:
    >>> from avrodatum import build_record, decode, encode, parse_schema, project
    >>>
    >>> schema = parse_schema('''
    ...     {"type": "record", "name": "rec",
    ...      "fields": [{"name": "id", "type": "long"},
    ...                 {"name": "label", "type": "string"}]}
    ... ''')
    >>> record = build_record(schema, {"id": 1, "label": "a"})
    >>> data = encode(schema, record)
    >>> data
    b'\\x02\\x02a'
    >>> project(decode(schema, data), {"id"})
    {'id': 1}
"""

from __future__ import annotations

from .codec import (
    UNREPRESENTABLE,
    CodecConfig,
    FieldSchema,
    PrimitiveKind,
    RecordBuilder,
    RecordSchema,
    TypedRecord,
    TypedValue,
    build_record,
    decode,
    decode_to_dict,
    decode_with_remainder,
    encode,
    encode_datum,
    extract_field,
    extract_fields,
    from_typed,
    get_value,
    parse_schema,
    project,
    to_typed,
)
from .exceptions import (
    AvrodatumError,
    DecodeError,
    EncodeError,
    FieldNotFoundError,
    MalformedError,
    MissingFieldError,
    NotARecordError,
    SchemaError,
    TrailingDataError,
    TruncatedError,
    WrongTypeError,
)
from .models import FieldDefinition, RecordDefinition
from .utils import encoded_size, field_sizes, fixed_size, value_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "parse_schema",
    "build_record",
    "encode",
    "decode",
    "project",
    # Convenience
    "encode_datum",
    "decode_to_dict",
    "decode_with_remainder",
    "extract_field",
    "extract_fields",
    "get_value",
    # Types
    "RecordSchema",
    "FieldSchema",
    "PrimitiveKind",
    "RecordBuilder",
    "TypedRecord",
    "TypedValue",
    "CodecConfig",
    "to_typed",
    "from_typed",
    "UNREPRESENTABLE",
    # Schema documents
    "RecordDefinition",
    "FieldDefinition",
    # Exceptions
    "AvrodatumError",
    "SchemaError",
    "FieldNotFoundError",
    "WrongTypeError",
    "NotARecordError",
    "EncodeError",
    "MissingFieldError",
    "DecodeError",
    "TruncatedError",
    "MalformedError",
    "TrailingDataError",
    # Sizing
    "encoded_size",
    "field_sizes",
    "fixed_size",
    "value_size",
    # Version
    "__version__",
]
