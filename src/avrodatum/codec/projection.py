"""Field projection over decoded records.

Projection serves narrow read queries: it returns only the requested fields
of a record, as plain Python values, and fails outright if any requested
field is absent rather than returning a partial result.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from ..exceptions import FieldNotFoundError, NotARecordError
from .config import CodecConfig
from .decoder import decode
from .dispatch import from_typed
from .record import TypedRecord
from .schema import RecordSchema


def project(record: TypedRecord, names: Iterable[str]) -> Dict[str, Any]:
    """Return the requested fields of a record.

    Args:
        record: Record to read from
        names: Field names to return; duplicates are ignored

    Returns:
        Dict of exactly the requested names to plain values, in request order

    Raises:
        NotARecordError: If ``record`` is not a TypedRecord
        FieldNotFoundError: If any requested name is absent (all are reported)

    Example:
        >>> project(record, {"id"})
        {'id': 1}
    """
    _require_record(record)

    requested = list(dict.fromkeys(names))
    missing = [name for name in requested if name not in record]
    if missing:
        raise FieldNotFoundError(missing)

    return {name: from_typed(record[name]) for name in requested}


def get_value(record: TypedRecord, name: str) -> Any:
    """Return a single field of a record as a plain value.

    Raises:
        NotARecordError: If ``record`` is not a TypedRecord
        FieldNotFoundError: If the field is absent
    """
    _require_record(record)

    if name not in record:
        raise FieldNotFoundError([name])
    return from_typed(record[name])


def extract_fields(
    schema: RecordSchema,
    data: bytes,
    names: Iterable[str],
    *,
    tolerate_padding: bool = True,
    config: Optional[CodecConfig] = None,
) -> Dict[str, Any]:
    """Decode a datum and return only the requested fields.

    The whole datum is decoded and checked for trailing data exactly as
    ``decode`` does; only the result is narrowed.

    Raises:
        TruncatedError, MalformedError, TrailingDataError: As for ``decode``
        FieldNotFoundError: If a requested name is not a field of the record
    """
    record = decode(schema, data, tolerate_padding=tolerate_padding, config=config)
    return project(record, names)


def extract_field(
    schema: RecordSchema,
    data: bytes,
    name: str,
    *,
    tolerate_padding: bool = True,
    config: Optional[CodecConfig] = None,
) -> Any:
    """Decode a datum and return a single field.

    Raises:
        TruncatedError, MalformedError, TrailingDataError: As for ``decode``
        FieldNotFoundError: If ``name`` is not a field of the record
    """
    record = decode(schema, data, tolerate_padding=tolerate_padding, config=config)
    return get_value(record, name)


def _require_record(record: Any) -> None:
    if not isinstance(record, TypedRecord):
        raise NotARecordError(f"Expected a TypedRecord, got {type(record).__name__}")
