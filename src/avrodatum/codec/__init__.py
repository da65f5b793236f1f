"""Avro binary codec for avrodatum.

This module provides schema parsing, record building, encoding, decoding and
field projection for single Avro record datums.
"""

from __future__ import annotations

from .config import CodecConfig
from .decoder import decode, decode_to_dict, decode_with_remainder
from .dispatch import UNREPRESENTABLE, TypedValue, from_typed, to_typed
from .encoder import encode, encode_datum
from .projection import extract_field, extract_fields, get_value, project
from .record import RecordBuilder, TypedRecord, build_record
from .schema import FieldSchema, PrimitiveKind, RecordSchema, parse_schema

__all__ = [
    "encode",
    "encode_datum",
    "decode",
    "decode_to_dict",
    "decode_with_remainder",
    "project",
    "get_value",
    "extract_field",
    "extract_fields",
    "build_record",
    "RecordBuilder",
    "TypedRecord",
    "TypedValue",
    "to_typed",
    "from_typed",
    "UNREPRESENTABLE",
    "parse_schema",
    "RecordSchema",
    "FieldSchema",
    "PrimitiveKind",
    "CodecConfig",
]
