"""Exception hierarchy for avrodatum.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from AvrodatumError for easy catching of any avrodatum-specific error.
"""

from __future__ import annotations

from typing import Iterable


class AvrodatumError(Exception):
    """Base exception for all avrodatum errors."""

    pass


class SchemaError(AvrodatumError):
    """Raised when a schema definition is invalid or unsupported.

    Examples:
        - Schema text is not valid JSON
        - Top-level type is not a record
        - Duplicate or invalid field names
        - Unsupported field type (anything but int, long, double, string)
    """

    pass


class FieldNotFoundError(AvrodatumError):
    """Raised when a field name is not declared in the schema or not present in a record.

    Attributes:
        missing: Every requested name that could not be found, in request order
    """

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing: tuple[str, ...] = tuple(missing)
        names = ", ".join(repr(name) for name in self.missing)
        super().__init__(f"Field not found: {names}")


class WrongTypeError(AvrodatumError):
    """Raised when a value cannot be converted to a field's declared type.

    Examples:
        - A string given for a long field
        - An integer outside the 32-bit range for an int field
        - A bool given for any numeric field
    """

    pass


class NotARecordError(AvrodatumError):
    """Raised when a value handed to a projection is not record-shaped."""

    pass


class EncodeError(AvrodatumError):
    """Raised when encoding a record fails.

    Examples:
        - A declared field has no value
        - Encoded datum exceeds the configured size limit
    """

    pass


class MissingFieldError(EncodeError):
    """Raised when a schema-declared field has no value at encode time."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing: tuple[str, ...] = tuple(missing)
        names = ", ".join(repr(name) for name in self.missing)
        super().__init__(f"Missing value for declared field: {names}")


class DecodeError(AvrodatumError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Overlong varint or negative length prefix
        - Unexpected trailing bytes after the datum
    """

    pass


class TruncatedError(DecodeError):
    """Raised when the input ends before a field's encoding is complete."""

    pass


class MalformedError(DecodeError):
    """Raised when the input bytes cannot be a valid encoding.

    Examples:
        - Varint continues past its maximum width
        - Decoded integer outside the declared kind's range
        - Negative string length
        - String bytes that are not valid UTF-8
    """

    pass


class TrailingDataError(DecodeError):
    """Raised when a datum decoded cleanly but unconsumed bytes remain.

    Attributes:
        remaining: The bytes left over after the datum
    """

    def __init__(self, remaining: bytes) -> None:
        self.remaining = bytes(remaining)
        super().__init__(
            f"{len(self.remaining)} unexpected trailing byte(s) after datum: "
            f"{self.remaining[:16].hex()}"
        )
