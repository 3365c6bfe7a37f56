"""Hash utilities for DevDiary."""

import hashlib


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 digest of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def is_digest(value: str, min_length: int = 40) -> bool:
    """Check whether value looks like a (possibly abbreviated) hex digest."""
    if not value or len(value) < min_length or len(value) > 40:
        return False
    return all(c in '0123456789abcdef' for c in value.lower())
