"""Stored objects for DevDiary."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, List
from .hash import hash_object


class DiaryObject(ABC):
    """Base class for all objects kept in the object store."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Serialized object data
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.

        Args:
            data: Serialized object data
        """
        pass

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, commit)
        """
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object digest.

        The digest covers the serialized payload only, so a blob's digest
        is the digest of the file content itself.

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = hash_object(self.serialize())
        return self._hash

    @property
    def hash(self) -> str:
        """
        Get object digest.

        Returns:
            str: 40-character SHA-1 hash
        """
        return self.compute_hash()


class Blob(DiaryObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @property
    def text(self) -> str:
        """Content decoded as UTF-8, with undecodable bytes replaced."""
        return self.data.decode('utf-8', errors='replace')

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        """String representation of blob."""
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


@dataclass(frozen=True)
class StagingEntry:
    """
    A single staged file: the path as added and the digest of its content.
    """
    path: str
    digest: str

    def to_dict(self) -> dict:
        """Serialized form used by the index file and commit records."""
        return {'path': self.path, 'hash': self.digest}

    @classmethod
    def from_dict(cls, data: dict) -> 'StagingEntry':
        """Build entry from its serialized form."""
        path, digest = data['path'], data['hash']
        if not isinstance(path, str) or not isinstance(digest, str):
            raise TypeError("entry path and hash must be strings")
        return cls(path=path, digest=digest)

    def __repr__(self) -> str:
        return f"StagingEntry({self.digest[:7]} {self.path})"


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as ISO-8601 UTC with millisecond precision.

    Example: 2024-05-01T12:30:45.123Z
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class Commit(DiaryObject):
    """
    Represents a commit record.

    A commit captures:
    - Timestamp (ISO-8601)
    - Commit message
    - Snapshot of staged files (path and blob digest)
    - Parent commit digest, or None for the root commit

    Commits are serialized as compact JSON with the fields
    timeStamp, message, files and parent, in that order.
    """

    def __init__(self):
        super().__init__()
        self.timestamp: str = ''
        self.message: str = ''
        self.files: List[StagingEntry] = []
        self.parent: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'timeStamp': self.timestamp,
            'message': self.message,
            'files': [entry.to_dict() for entry in self.files],
            'parent': self.parent,
        }

    def serialize(self) -> bytes:
        """
        Serialize commit to compact JSON.

        Returns:
            bytes: UTF-8 encoded JSON record
        """
        return json.dumps(self.to_dict(), separators=(',', ':'), ensure_ascii=False).encode('utf-8')

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit from JSON.

        Args:
            data: Serialized commit data

        Raises:
            ValueError: If data is not a commit record
        """
        record = json.loads(data.decode('utf-8'))
        if not isinstance(record, dict):
            raise ValueError("commit record must be a JSON object")

        missing = [key for key in ('timeStamp', 'message', 'files') if key not in record]
        if missing:
            raise ValueError(f"missing fields: {', '.join(missing)}")
        if not isinstance(record['files'], list):
            raise ValueError("files must be a list")
        for key in ('timeStamp', 'message'):
            if not isinstance(record[key], str):
                raise ValueError(f"{key} must be a string")
        parent = record.get('parent')
        if parent is not None and not isinstance(parent, str):
            raise ValueError("parent must be a digest string or null")

        self.timestamp = record['timeStamp']
        self.message = record['message']
        self.files = [StagingEntry.from_dict(item) for item in record['files']]
        self.parent = parent or None
        self._hash = None

    @property
    def is_root(self) -> bool:
        """True if this commit starts the history."""
        return self.parent is None

    def find_file(self, path: str) -> Optional[StagingEntry]:
        """
        Find the entry recorded for path.

        When a path was staged more than once, the last entry wins.

        Args:
            path: File path as staged

        Returns:
            StagingEntry or None if the commit has no such path
        """
        for entry in reversed(self.files):
            if entry.path == path:
                return entry
        return None

    @classmethod
    def create(
        cls,
        files: List[StagingEntry],
        parent: Optional[str],
        message: str,
        timestamp: Optional[str] = None
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            files: Staged entries to snapshot
            parent: Parent commit digest, or None for a root commit
            message: Commit message
            timestamp: ISO-8601 timestamp (defaults to now)

        Returns:
            Commit: New commit object
        """
        commit = cls()
        commit.files = list(files)
        commit.parent = parent or None
        commit.message = message
        commit.timestamp = timestamp or utc_timestamp()
        return commit

    def __repr__(self) -> str:
        """String representation."""
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"
