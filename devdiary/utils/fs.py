"""Filesystem helpers for durable repository state."""

import os
import tempfile
from pathlib import Path
from typing import Union


def atomic_write_bytes(path: Union[str, Path], data: bytes) -> None:
    """
    Write data to path through a temporary file and an atomic rename.

    The temporary file lives in the destination directory so the final
    os.replace never crosses filesystems. A reader sees either the old
    content or the new one, never a partial write.

    Args:
        path: Destination file
        data: Bytes to write
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix='.tmp', dir=path.parent)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def atomic_write_text(path: Union[str, Path], text: str) -> None:
    """Write UTF-8 text to path atomically."""
    atomic_write_bytes(path, text.encode('utf-8'))
