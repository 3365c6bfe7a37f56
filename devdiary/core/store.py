"""Content-addressed object storage for DevDiary."""

import logging
from pathlib import Path
from typing import Optional, Union
from .errors import ObjectNotFoundError, CommitNotFoundError, MalformedObjectError
from .hash import hash_object, is_digest
from .objects import DiaryObject, Blob, Commit
from devdiary.utils.fs import atomic_write_bytes

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Stores blobs and commits keyed by the SHA-1 digest of their payload.

    Objects are kept uncompressed, one file per object:
    objects/<40-character digest>
    """

    def __init__(self, objects_dir: Union[str, Path]):
        """
        Initialize object store.

        Args:
            objects_dir: Directory holding object files
        """
        self.objects_dir = Path(objects_dir)

    def object_path(self, digest: str) -> Path:
        """
        Get filesystem path for an object.

        Args:
            digest: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        return self.objects_dir / digest

    def put(self, content: bytes) -> str:
        """
        Store content under its digest.

        Storing content that is already present is a no-op.

        Args:
            content: Raw payload

        Returns:
            str: SHA-1 digest of the content
        """
        digest = hash_object(content)
        path = self.object_path(digest)

        # Object already exists
        if path.exists():
            logger.debug("object %s already stored", digest[:7])
            return digest

        self.objects_dir.mkdir(parents=True, exist_ok=True)
        atomic_write_bytes(path, content)
        logger.debug("stored object %s (%d bytes)", digest[:7], len(content))
        return digest

    def get(self, digest: str) -> bytes:
        """
        Read an object's payload.

        Args:
            digest: 40-character SHA-1 hash

        Returns:
            bytes: Stored payload

        Raises:
            ObjectNotFoundError: If no object exists under digest
        """
        if not is_digest(digest):
            raise ObjectNotFoundError(digest)

        path = self.object_path(digest)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFoundError(digest) from None

    def exists(self, digest: str) -> bool:
        """Check if an object is stored under digest."""
        return is_digest(digest) and self.object_path(digest).is_file()

    def write_object(self, obj: DiaryObject) -> str:
        """
        Write a blob or commit to the store.

        Args:
            obj: Object to write

        Returns:
            str: SHA-1 digest of the object
        """
        return self.put(obj.serialize())

    def read_blob(self, digest: str) -> Blob:
        """Read the object under digest as a blob."""
        return Blob(self.get(digest))

    def read_commit(self, digest: str) -> Commit:
        """
        Read and parse the commit stored under digest.

        Args:
            digest: Commit digest

        Returns:
            Commit: Parsed commit

        Raises:
            CommitNotFoundError: If no object exists under digest
            MalformedObjectError: If the payload is not a commit record
        """
        try:
            data = self.get(digest)
        except ObjectNotFoundError:
            raise CommitNotFoundError(digest) from None

        commit = Commit()
        try:
            commit.deserialize(data)
        except (ValueError, KeyError, TypeError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            raise MalformedObjectError(digest, str(e)) from e
        return commit

    def find_by_prefix(self, prefix: str) -> Optional[str]:
        """
        Resolve an abbreviated digest.

        Args:
            prefix: At least 4 leading hex characters of a digest

        Returns:
            Full digest if exactly one object matches, None otherwise
        """
        prefix = prefix.lower()
        if not is_digest(prefix, min_length=4) or not self.objects_dir.is_dir():
            return None
        if len(prefix) == 40:
            return prefix if self.exists(prefix) else None

        matches = [p.name for p in self.objects_dir.iterdir()
                   if p.is_file() and p.name.startswith(prefix) and is_digest(p.name)]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            logger.warning("abbreviated digest %s is ambiguous (%d matches)", prefix, len(matches))
        return None

    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"
