"""Utilities module for common helper functions.

This module contains:
- Atomic file writes for HEAD, index and objects
"""

from devdiary.utils.fs import atomic_write_bytes, atomic_write_text

__all__ = [
    'atomic_write_bytes', 'atomic_write_text',
]
