"""Byte-level primitives of the Avro binary encoding.

This module provides low-level readers and writers for the wire forms used by
the codec:

- int/long: zig-zag transform, then little-endian base-128 varint
- double: 8 bytes, IEEE-754 binary64, little-endian
- string: byte length as a long, then the UTF-8 bytes

Truncated input raises IndexError and invalid input raises ValueError; the
record decoder turns both into DecodeError subclasses with field context.
"""

from __future__ import annotations

import struct

STRUCT_DOUBLE = struct.Struct("<d")

LONG_BITS = 64
INT_BITS = 32


def zigzag_encode(value: int, num_bits: int = LONG_BITS) -> int:
    """Map a signed integer onto an unsigned one, small magnitudes first.

    Args:
        value: Signed integer that fits in ``num_bits`` (two's complement)
        num_bits: Integer width (32 or 64)

    Returns:
        Unsigned zig-zag value

    Raises:
        ValueError: If value doesn't fit in num_bits

    Example:
        >>> [zigzag_encode(n) for n in (0, -1, 1, -2, 2)]
        [0, 1, 2, 3, 4]
    """
    min_value = -(1 << (num_bits - 1))
    max_value = (1 << (num_bits - 1)) - 1
    if value < min_value or value > max_value:
        raise ValueError(
            f"Value {value} doesn't fit in {num_bits} bits (range: {min_value} to {max_value})"
        )
    return (value << 1) ^ (value >> (num_bits - 1))


def zigzag_decode(value: int) -> int:
    """Inverse of ``zigzag_encode``."""
    return (value >> 1) ^ -(value & 1)


def varint_size(value: int) -> int:
    """Number of bytes the varint form of an unsigned value occupies."""
    size = 1
    while value > 0x7F:
        value >>= 7
        size += 1
    return size


def long_size(value: int, num_bits: int = LONG_BITS) -> int:
    """Encoded size in bytes of an int or long."""
    return varint_size(zigzag_encode(value, num_bits))


def string_size(value: str) -> int:
    """Encoded size in bytes of a string, length prefix included."""
    raw_length = len(value.encode("utf-8"))
    return long_size(raw_length) + raw_length


class BinaryEncoder:
    """Writes Avro binary primitives into a growing byte buffer.

    Example:
        >>> encoder = BinaryEncoder()
        >>> encoder.write_long(1)
        >>> encoder.write_string("a")
        >>> encoder.to_bytes()
        b'\\x02\\x02a'
    """

    def __init__(self) -> None:
        """Initialize an empty encoder."""
        self._buffer = bytearray()

    def write_long(self, value: int, num_bits: int = LONG_BITS) -> None:
        """Write a signed integer as a zig-zag varint.

        Args:
            value: Signed integer value to write
            num_bits: Integer width used by the zig-zag transform (32 or 64)

        Raises:
            ValueError: If value doesn't fit in num_bits
        """
        encoded = zigzag_encode(value, num_bits)
        # Low seven bits first, high bit marks continuation
        while encoded > 0x7F:
            self._buffer.append((encoded & 0x7F) | 0x80)
            encoded >>= 7
        self._buffer.append(encoded)

    def write_int(self, value: int) -> None:
        """Write a 32-bit signed integer."""
        self.write_long(value, INT_BITS)

    def write_double(self, value: float) -> None:
        """Write an IEEE-754 double, little-endian."""
        self._buffer.extend(STRUCT_DOUBLE.pack(value))

    def write_bytes(self, data: bytes) -> None:
        """Write length-prefixed raw bytes."""
        self.write_long(len(data))
        self._buffer.extend(data)

    def write_string(self, value: str) -> None:
        """Write a length-prefixed UTF-8 string."""
        self.write_bytes(value.encode("utf-8"))

    def byte_length(self) -> int:
        """Return the number of bytes written so far."""
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return the written bytes."""
        return bytes(self._buffer)


class BinaryDecoder:
    """Reads Avro binary primitives from a byte buffer.

    The decoder reads through a memoryview and never copies or keeps the
    input beyond its own lifetime.

    Example:
        >>> decoder = BinaryDecoder(b"\\x02\\x02a")
        >>> decoder.read_long()
        1
        >>> decoder.read_string()
        'a'
        >>> decoder.bytes_remaining()
        0
    """

    def __init__(self, data: bytes) -> None:
        """Initialize a decoder over the given data.

        Args:
            data: Byte buffer to decode
        """
        self._data = memoryview(data).cast("B")
        self._position = 0

    def _read_byte(self) -> int:
        if self._position >= len(self._data):
            raise IndexError("Attempted to read past end of buffer")
        value = self._data[self._position]
        self._position += 1
        return value

    def read_long(self, num_bits: int = LONG_BITS) -> int:
        """Read a zig-zag varint.

        Args:
            num_bits: Integer width (32 or 64); bounds the varint length and
                the decoded value

        Returns:
            Signed integer value

        Raises:
            IndexError: If the buffer ends inside the varint
            ValueError: If the varint is longer than num_bits allows or its
                value overflows num_bits
        """
        max_bytes = (num_bits + 6) // 7
        result = 0
        shift = 0
        for _ in range(max_bytes):
            byte = self._read_byte()
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                break
            shift += 7
        else:
            raise ValueError(f"Varint exceeds {max_bytes} bytes for a {num_bits}-bit integer")

        if result >> num_bits:
            raise ValueError(f"Varint value overflows {num_bits} bits")

        return zigzag_decode(result)

    def read_int(self) -> int:
        """Read a 32-bit signed integer."""
        return self.read_long(INT_BITS)

    def read_double(self) -> float:
        """Read an IEEE-754 double, little-endian.

        Raises:
            IndexError: If fewer than 8 bytes remain
        """
        raw = self._read_exact(STRUCT_DOUBLE.size)
        return float(STRUCT_DOUBLE.unpack(raw)[0])

    def read_bytes(self) -> bytes:
        """Read length-prefixed raw bytes.

        Raises:
            IndexError: If fewer bytes remain than the length prefix announces
            ValueError: If the length prefix is negative
        """
        length = self.read_long()
        if length < 0:
            raise ValueError(f"Negative length prefix: {length}")
        return self._read_exact(length)

    def read_string(self) -> str:
        """Read a length-prefixed UTF-8 string.

        Raises:
            IndexError: If the buffer ends inside the string
            ValueError: If the length is negative or the bytes are not UTF-8
        """
        return self.read_bytes().decode("utf-8")

    def _read_exact(self, num_bytes: int) -> bytes:
        end = self._position + num_bytes
        if end > len(self._data):
            raise IndexError(
                f"Not enough bytes: need {num_bytes}, have {len(self._data) - self._position}"
            )
        chunk = self._data[self._position : end].tobytes()
        self._position = end
        return chunk

    def bytes_remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def remainder(self) -> bytes:
        """Return a copy of the unread bytes without consuming them."""
        return self._data[self._position :].tobytes()

    def position(self) -> int:
        """Return the current read offset in bytes."""
        return self._position

    def release(self) -> None:
        """Release the view over the input buffer."""
        self._data.release()
