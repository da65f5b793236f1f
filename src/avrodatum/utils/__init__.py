"""Utility functions for avrodatum.

This module provides size calculation helpers.
"""

from __future__ import annotations

from .sizing import encoded_size, field_sizes, fixed_size, value_size

__all__ = [
    "encoded_size",
    "field_sizes",
    "fixed_size",
    "value_size",
]
