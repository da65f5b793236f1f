"""Typed records and the builder that assembles them.

A TypedRecord maps field names to TypedValues against one RecordSchema. It is
read-only: the builder hands out snapshots, so a record never changes after
another component receives it.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator

from ..exceptions import FieldNotFoundError, WrongTypeError
from .dispatch import TypedValue, from_typed, to_typed
from .schema import RecordSchema


class TypedRecord(Mapping[str, TypedValue]):
    """An immutable mapping of field name to TypedValue.

    Iteration follows the schema's declaration order, not the order in which
    values were supplied. A record covers exactly the fields that were set;
    use ``is_complete`` to check that every declared field is present.

    Example:
        >>> record = build_record(schema, {"label": "a", "id": 1})
        >>> list(record)
        ['id', 'label']
        >>> record.to_dict()
        {'id': 1, 'label': 'a'}
    """

    __slots__ = ("_schema", "_values")

    def __init__(self, schema: RecordSchema, values: Mapping[str, TypedValue]) -> None:
        """Create a record snapshot.

        Args:
            schema: Schema the record was built or decoded against
            values: Typed values by field name; names must be declared in schema
        """
        ordered = {name: values[name] for name in schema.field_names if name in values}
        if len(ordered) != len(values):
            undeclared = [name for name in values if name not in schema]
            raise FieldNotFoundError(undeclared)
        self._schema = schema
        self._values = MappingProxyType(ordered)

    @property
    def schema(self) -> RecordSchema:
        """The schema this record belongs to."""
        return self._schema

    def __getitem__(self, name: str) -> TypedValue:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TypedRecord({self._schema.fullname}, {self.to_dict()!r})"

    def missing_fields(self) -> list[str]:
        """Declared field names that have no value, in declaration order."""
        return [name for name in self._schema.field_names if name not in self._values]

    def is_complete(self) -> bool:
        """Return True if every declared field has a value."""
        return len(self._values) == len(self._schema.fields)

    def to_dict(self) -> Dict[str, Any]:
        """Return the record as a plain dict of Python values."""
        return {name: from_typed(value) for name, value in self._values.items()}


class RecordBuilder:
    """Accumulates field values against a schema.

    Setting the same field twice keeps the last value. ``finish`` returns a
    snapshot; values set afterwards do not reach records already finished.

    Example:
        >>> builder = RecordBuilder(schema)
        >>> builder.set("id", 1)
        >>> builder.set("label", "a")
        >>> record = builder.finish()
    """

    def __init__(self, schema: RecordSchema) -> None:
        """Start building a record.

        Args:
            schema: Schema to validate field names and values against
        """
        self.schema = schema
        self._values: Dict[str, TypedValue] = {}

    @classmethod
    def start(cls, schema: RecordSchema) -> RecordBuilder:
        """Create a builder for ``schema``."""
        return cls(schema)

    def set(self, name: str, value: Any) -> None:
        """Validate and assign one field.

        Args:
            name: Declared field name
            value: Plain Python value for the field

        Raises:
            FieldNotFoundError: If name is not declared in the schema
            WrongTypeError: If value cannot be converted to the declared kind
        """
        kind = self.schema.field_type(name)
        if kind is None:
            raise FieldNotFoundError([name])

        try:
            self._values[name] = to_typed(kind, value)
        except WrongTypeError as e:
            raise WrongTypeError(f"Field {name}: {e}") from e

    def finish(self) -> TypedRecord:
        """Return an immutable snapshot of the values set so far."""
        return TypedRecord(self.schema, self._values)


def build_record(schema: RecordSchema, values: Mapping[str, Any]) -> TypedRecord:
    """Build a TypedRecord from a mapping of plain values.

    Every key must be declared in the schema. Fields the schema declares but
    the mapping omits are simply absent from the record.

    Args:
        schema: Schema to build against
        values: Field name to plain Python value

    Returns:
        TypedRecord covering exactly the supplied fields

    Raises:
        FieldNotFoundError: If any key is not declared (all such keys are reported)
        WrongTypeError: If a value cannot be converted to its field's kind
    """
    undeclared = [name for name in values if name not in schema]
    if undeclared:
        raise FieldNotFoundError(undeclared)

    builder = RecordBuilder(schema)
    for name, value in values.items():
        builder.set(name, value)
    return builder.finish()
