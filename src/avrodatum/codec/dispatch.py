"""Conversion between plain Python values and typed field values.

Every path that moves a value into or out of a record (building, decoding,
projection) converts through ``to_typed`` and ``from_typed``. The set of
supported kinds lives in one table here, so adding a kind means adding one
validator entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Dict, Union

from pydantic import Field, TypeAdapter, ValidationError

from ..exceptions import WrongTypeError
from .schema import PrimitiveKind

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# Strict mode: no str -> int parsing, no bool -> int, no float -> int truncation
_VALIDATORS: Dict[PrimitiveKind, TypeAdapter[Any]] = {
    PrimitiveKind.INT: TypeAdapter(Annotated[int, Field(strict=True, ge=INT32_MIN, le=INT32_MAX)]),
    PrimitiveKind.LONG: TypeAdapter(Annotated[int, Field(strict=True, ge=INT64_MIN, le=INT64_MAX)]),
    PrimitiveKind.DOUBLE: TypeAdapter(Annotated[float, Field(strict=True)]),
    PrimitiveKind.STRING: TypeAdapter(Annotated[str, Field(strict=True)]),
}

_PYTHON_TYPES: Dict[PrimitiveKind, type] = {
    PrimitiveKind.INT: int,
    PrimitiveKind.LONG: int,
    PrimitiveKind.DOUBLE: float,
    PrimitiveKind.STRING: str,
}


@dataclass(frozen=True)
class TypedValue:
    """A value tagged with the primitive kind it was validated against.

    Attributes:
        kind: Primitive kind of the value
        value: The Python value (int, float or str)
    """

    kind: PrimitiveKind
    value: Union[int, float, str]


class Unrepresentable:
    """Marker returned by ``from_typed`` for values outside the supported kinds."""

    _instance: Unrepresentable | None = None

    def __new__(cls) -> Unrepresentable:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNREPRESENTABLE"


UNREPRESENTABLE = Unrepresentable()


def to_typed(kind: PrimitiveKind, value: Any) -> TypedValue:
    """Validate a plain value against a declared kind.

    Args:
        kind: Declared primitive kind of the target field
        value: Plain Python value

    Returns:
        TypedValue tagged with ``kind``

    Raises:
        WrongTypeError: If the value cannot be represented as ``kind``

    Examples:
        >>> to_typed(PrimitiveKind.LONG, 42)
        TypedValue(kind=<PrimitiveKind.LONG: 'long'>, value=42)
        >>> to_typed(PrimitiveKind.DOUBLE, 1).value
        1.0
    """
    validator = _VALIDATORS.get(kind)
    if validator is None:
        raise WrongTypeError(f"Unsupported kind: {kind!r}")

    try:
        validated = validator.validate_python(value)
    except ValidationError as e:
        reason = e.errors()[0]["msg"] if e.errors() else str(e)
        raise WrongTypeError(
            f"Cannot convert {type(value).__name__} value {value!r} to {kind.value}: {reason}"
        ) from e

    # Lone surrogates pass str validation but have no UTF-8 form
    if kind is PrimitiveKind.STRING:
        try:
            validated.encode("utf-8")
        except UnicodeEncodeError as e:
            raise WrongTypeError(
                f"Cannot convert str value {value!r} to string: not encodable as UTF-8 ({e.reason})"
            ) from e

    return TypedValue(kind=kind, value=_PYTHON_TYPES[kind](validated))


def from_typed(typed: Any) -> Any:
    """Return the plain Python value held by a TypedValue.

    Anything that is not a TypedValue of a supported kind yields the
    UNREPRESENTABLE marker instead of raising.
    """
    if isinstance(typed, TypedValue) and typed.kind in _VALIDATORS:
        return typed.value
    return UNREPRESENTABLE
