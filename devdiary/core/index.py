"""Staging index implementation."""

import json
import logging
from pathlib import Path
from typing import List, Union
from .errors import InvalidConfigError, MalformedIndexError
from .objects import StagingEntry
from devdiary.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)

# Duplicate-path policies applied when the index is committed
KEEP_DUPLICATES = 'keep'
LAST_ENTRY_WINS = 'last'
DUPLICATE_POLICIES = (KEEP_DUPLICATES, LAST_ENTRY_WINS)


class StagingIndex:
    """
    Ordered list of files staged for the next commit.

    The index is stored as a JSON list of {"path", "hash"} objects and is
    reread from disk on every access; nothing is cached between calls.
    Adding the same path twice appends a second entry.
    """

    def __init__(self, index_file: Union[str, Path]):
        """
        Initialize staging index.

        Args:
            index_file: Path to index file
        """
        self.index_file = Path(index_file)

    def read_all(self) -> List[StagingEntry]:
        """
        Read pending entries.

        Returns:
            List of staged entries in insertion order (empty if no index file)

        Raises:
            MalformedIndexError: If the index file cannot be parsed
        """
        if not self.index_file.exists():
            return []

        raw = self.index_file.read_text(encoding='utf-8')
        if not raw.strip():
            return []

        try:
            items = json.loads(raw)
        except ValueError as e:
            raise MalformedIndexError(self.index_file, str(e)) from e

        if not isinstance(items, list):
            raise MalformedIndexError(self.index_file, "expected a JSON list")

        try:
            return [StagingEntry.from_dict(item) for item in items]
        except (KeyError, TypeError) as e:
            raise MalformedIndexError(self.index_file, f"invalid entry: {e}") from e

    def write(self, entries: List[StagingEntry]) -> None:
        """
        Replace the index content with entries.

        Args:
            entries: Entries to persist
        """
        payload = json.dumps([entry.to_dict() for entry in entries], separators=(',', ':'))
        atomic_write_text(self.index_file, payload)

    def append(self, path: str, digest: str) -> StagingEntry:
        """
        Stage one entry and persist the index.

        Args:
            path: File path as added
            digest: Digest of the file content

        Returns:
            StagingEntry: The appended entry
        """
        entries = self.read_all()
        entry = StagingEntry(path=path, digest=digest)

        if any(e.path == path for e in entries):
            logger.debug("path %s is already staged, appending another entry", path)

        entries.append(entry)
        self.write(entries)
        return entry

    def clear(self) -> None:
        """Reset the index to an empty list."""
        self.write([])

    def effective_entries(self, policy: str = KEEP_DUPLICATES) -> List[StagingEntry]:
        """
        Get entries after applying a duplicate-path policy.

        Policies:
        - 'keep': every staged entry, as staged
        - 'last': one entry per path, the most recently staged one,
          ordered by where the path first appeared

        Args:
            policy: Duplicate policy name

        Returns:
            List of entries

        Raises:
            InvalidConfigError: If policy is not a known policy name
        """
        if policy not in DUPLICATE_POLICIES:
            raise InvalidConfigError('index.duplicates', policy, " or ".join(DUPLICATE_POLICIES))

        entries = self.read_all()
        if policy == KEEP_DUPLICATES:
            return entries

        latest = {}
        for entry in entries:
            latest[entry.path] = entry
        # dict keeps first insertion position, value is the last entry
        return list(latest.values())

    def __len__(self) -> int:
        """Number of staged entries."""
        return len(self.read_all())

    def __repr__(self) -> str:
        return f"StagingIndex(path={self.index_file})"
