"""Pydantic models for Avro record schema documents.

These models describe the JSON shape of a record schema. They validate
structure (names, field list, uniqueness) only; mapping declared field types
onto codec kinds happens in ``avrodatum.codec.schema``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Avro name grammar: [A-Za-z_][A-Za-z0-9_]*, dotted for full names
NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"
FULLNAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$"
NAMESPACE_PATTERN = r"^([A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*)?$"


class SchemaDocument(BaseModel):
    """Base class for schema document models."""

    model_config = ConfigDict(
        # Avro allows arbitrary extra attributes as metadata
        extra="ignore",
        frozen=True,
    )


class FieldDefinition(SchemaDocument):
    """A single ``fields`` entry of a record schema.

    Example:
        >>> FieldDefinition.model_validate({"name": "id", "type": "long"})
        FieldDefinition(name='id', type='long', doc=None, default=None, aliases=[])
    """

    name: str = Field(pattern=NAME_PATTERN)
    type: Union[str, Dict[str, Any], List[Any]]
    doc: Optional[str] = None
    default: Any = None
    aliases: List[str] = Field(default_factory=list)

    def type_name(self) -> Optional[str]:
        """Return the declared type name, or None for unions.

        Both the bare form (``"long"``) and the object form
        (``{"type": "long"}``) resolve to the same name.
        """
        declared = self.type
        if isinstance(declared, str):
            return declared
        if isinstance(declared, dict):
            nested = declared.get("type")
            return nested if isinstance(nested, str) else None
        return None


class RecordDefinition(SchemaDocument):
    """A top-level Avro record schema.

    Example:
        >>> RecordDefinition.model_validate_json(
        ...     '{"type": "record", "name": "rec", "fields": [{"name": "id", "type": "long"}]}'
        ... ).fields[0].name
        'id'
    """

    type: Literal["record"]
    name: str = Field(pattern=FULLNAME_PATTERN)
    namespace: Optional[str] = Field(default=None, pattern=NAMESPACE_PATTERN)
    doc: Optional[str] = None
    aliases: List[str] = Field(default_factory=list)
    fields: List[FieldDefinition]

    @model_validator(mode="after")
    def _check_unique_field_names(self) -> RecordDefinition:
        seen: set[str] = set()
        for field in self.fields:
            if field.name in seen:
                raise ValueError(f"duplicate field name {field.name!r}")
            seen.add(field.name)
        return self

    @property
    def fullname(self) -> str:
        """Record name qualified by its namespace, per Avro naming rules."""
        if "." in self.name or not self.namespace:
            return self.name
        return f"{self.namespace}.{self.name}"
