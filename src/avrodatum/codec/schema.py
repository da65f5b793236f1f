"""Record schema parsing and introspection.

This module turns Avro JSON schema text into an immutable RecordSchema and
exposes the per-field information the codec needs: declaration order and
each field's primitive kind.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union

from pydantic import ValidationError

from ..exceptions import SchemaError
from ..models.schema import FieldDefinition, RecordDefinition

logger = logging.getLogger(__name__)


class PrimitiveKind(enum.Enum):
    """The closed set of field types the codec supports.

    Values are the Avro type names used in schema documents.
    """

    INT = "int"
    LONG = "long"
    DOUBLE = "double"
    STRING = "string"

    @property
    def bit_width(self) -> Optional[int]:
        """Signed integer width for INT and LONG, None otherwise."""
        return _BIT_WIDTHS.get(self)

    @property
    def max_varint_bytes(self) -> Optional[int]:
        """Longest varint a value of this kind can occupy on the wire."""
        width = self.bit_width
        if width is None:
            return None
        return (width + 6) // 7


_BIT_WIDTHS = {PrimitiveKind.INT: 32, PrimitiveKind.LONG: 64}


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single field.

    Attributes:
        name: Field name
        kind: Declared primitive kind
        doc: Field documentation from the schema, if any
    """

    name: str
    kind: PrimitiveKind
    doc: Optional[str] = None

    @classmethod
    def from_definition(cls, definition: FieldDefinition) -> FieldSchema:
        """Resolve a validated field definition to a supported kind.

        Raises:
            SchemaError: If the declared type is not int, long, double or string
        """
        type_name = definition.type_name()
        try:
            kind = PrimitiveKind(type_name)
        except ValueError:
            raise SchemaError(
                f"Field {definition.name}: unsupported type {definition.type!r}. "
                f"Supported: int, long, double, string."
            ) from None
        return cls(name=definition.name, kind=kind, doc=definition.doc)


@dataclass(frozen=True)
class RecordSchema:
    """An immutable, parsed record schema.

    A RecordSchema is built once per schema text and then shared, read-only,
    by every build, encode, decode and projection call that references it.

    Example:
        >>> schema = RecordSchema.from_text(
        ...     '{"type": "record", "name": "rec",'
        ...     ' "fields": [{"name": "id", "type": "long"}, {"name": "label", "type": "string"}]}'
        ... )
        >>> [f.name for f in schema.fields]
        ['id', 'label']
        >>> schema.field_type("label")
        <PrimitiveKind.STRING: 'string'>
    """

    name: str
    fields: Tuple[FieldSchema, ...]
    namespace: Optional[str] = None
    doc: Optional[str] = None
    _index: Dict[str, FieldSchema] = field(
        init=False, repr=False, compare=False, hash=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        index = {f.name: f for f in self.fields}
        if len(index) != len(self.fields):
            raise SchemaError(f"Record {self.name}: duplicate field names")
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_text(cls, text: Union[str, bytes]) -> RecordSchema:
        """Parse Avro JSON schema text.

        Args:
            text: Schema document, e.g. the contents of an ``.avsc`` file

        Returns:
            RecordSchema instance

        Raises:
            SchemaError: If the text is not a well-formed record schema or
                declares an unsupported field type
        """
        try:
            definition = RecordDefinition.model_validate_json(text)
        except ValidationError as e:
            raise SchemaError(f"Invalid record schema: {e}") from e

        schema = cls.from_definition(definition)
        logger.debug(f"Parsed schema {schema.fullname} with {len(schema.fields)} field(s)")
        return schema

    @classmethod
    def from_definition(cls, definition: RecordDefinition) -> RecordSchema:
        """Create a schema from an already validated RecordDefinition."""
        fields = tuple(FieldSchema.from_definition(f) for f in definition.fields)
        return cls(
            name=definition.name,
            fields=fields,
            namespace=definition.namespace,
            doc=definition.doc,
        )

    @property
    def fullname(self) -> str:
        """Record name qualified by its namespace."""
        if "." in self.name or not self.namespace:
            return self.name
        return f"{self.namespace}.{self.name}"

    @property
    def field_names(self) -> Tuple[str, ...]:
        """Field names in declaration order."""
        return tuple(f.name for f in self.fields)

    def get_field(self, name: str) -> Optional[FieldSchema]:
        """Return the FieldSchema for ``name``, or None if not declared."""
        return self._index.get(name)

    def field_type(self, name: str) -> Optional[PrimitiveKind]:
        """Return the declared kind of ``name``, or None if not declared."""
        field_schema = self._index.get(name)
        return field_schema.kind if field_schema is not None else None

    def field_types(self) -> Dict[str, str]:
        """Map each field name to its Avro type name, in declaration order."""
        return {f.name: f.kind.value for f in self.fields}

    def __contains__(self, name: object) -> bool:
        return name in self._index


def parse_schema(text: Union[str, bytes]) -> RecordSchema:
    """Parse Avro JSON schema text into a RecordSchema.

    Shorthand for ``RecordSchema.from_text``.

    Raises:
        SchemaError: If the text is not a well-formed, supported record schema
    """
    return RecordSchema.from_text(text)
