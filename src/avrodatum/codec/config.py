"""Codec configuration.

This module provides the configuration dataclass shared by the encoder and
decoder. A config is a plain value: pass one explicitly to the calls that need it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CodecConfig:
    """Options for encoding and decoding datums.

    Attributes:
        padding_byte: The single trailing byte that ``decode`` tolerates after a
            datum (default 0x0A, a line feed). Producers that write one datum per
            line append it; any other trailing data is rejected.
        max_encoded_bytes: Maximum encoded datum size in bytes (optional).
            ``encode`` raises EncodeError when a datum exceeds it.

    Examples:
        ```python
        from avrodatum import CodecConfig, decode, encode

        # Datums separated by NUL instead of newline, capped at 256 bytes
        config = CodecConfig(padding_byte=0x00, max_encoded_bytes=256)

        data = encode(schema, record, config=config)
        record = decode(schema, data + b"\\x00", config=config)
        ```
    """

    padding_byte: int = 0x0A
    max_encoded_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if isinstance(self.padding_byte, bool) or not 0 <= self.padding_byte <= 0xFF:
            raise ValueError(f"padding_byte must be 0-255, got {self.padding_byte}")

        if self.max_encoded_bytes is not None and self.max_encoded_bytes <= 0:
            raise ValueError(f"max_encoded_bytes must be > 0, got {self.max_encoded_bytes}")

    @property
    def padding(self) -> bytes:
        """The padding byte as a one-byte ``bytes`` value."""
        return bytes([self.padding_byte])


DEFAULT_CONFIG = CodecConfig()
