"""Pydantic models for avrodatum schema documents.

This module provides the models that validate the JSON form of a record
schema before it is turned into a codec schema.
"""

from __future__ import annotations

from .schema import FieldDefinition, RecordDefinition

__all__ = [
    "FieldDefinition",
    "RecordDefinition",
]
