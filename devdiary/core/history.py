"""Commit creation and linear history traversal."""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional
from .objects import Commit, StagingEntry
from .refs import HeadRef
from .store import ObjectStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogEntry:
    """One commit as reported by a history walk."""
    digest: str
    timestamp: str
    message: str
    parent: Optional[str]

    @property
    def short_hash(self) -> str:
        return self.digest[:7]


class CommitGraph:
    """
    Builds commits on top of HEAD and walks history back from it.

    History is a singly linked list: every commit names at most one
    parent, and the commit whose parent is None is the root.
    """

    def __init__(self, store: ObjectStore, head: HeadRef):
        """
        Initialize commit graph.

        Args:
            store: Object store holding commits
            head: HEAD reference
        """
        self.store = store
        self.head = head

    def create_commit(self, files: List[StagingEntry], message: str,
                      timestamp: Optional[str] = None) -> str:
        """
        Record a commit whose parent is the current HEAD and advance HEAD.

        The commit object is written before HEAD is moved, so HEAD never
        names a commit that is not stored.

        Args:
            files: Entries to snapshot
            message: Commit message
            timestamp: ISO-8601 timestamp (defaults to now)

        Returns:
            str: Digest of the new commit
        """
        parent = self.head.resolve()
        commit = Commit.create(files=files, parent=parent, message=message, timestamp=timestamp)

        commit_hash = self.store.write_object(commit)
        self.head.set(commit_hash)

        logger.info("created commit %s (%d file(s)%s)", commit_hash[:7], len(files),
                    f", parent {parent[:7]}" if parent else ", root commit")
        return commit_hash

    def walk(self, start: Optional[str] = None) -> Iterator[LogEntry]:
        """
        Lazily walk history from start (HEAD by default) to the root.

        Each call starts over from the given commit, so the walk can be
        repeated. Traversal is iterative and bounded only by history length.

        Args:
            start: Commit digest to start from

        Yields:
            LogEntry for each commit, newest first

        Raises:
            CommitNotFoundError: If a commit in the chain is missing
            MalformedObjectError: If a commit in the chain cannot be parsed
        """
        commit_hash = start if start is not None else self.head.resolve()
        seen = set()

        while commit_hash:
            if commit_hash in seen:
                # Corrupt chain pointing back on itself
                logger.warning("history cycle detected at %s", commit_hash[:7])
                return
            seen.add(commit_hash)

            commit = self.store.read_commit(commit_hash)
            yield LogEntry(
                digest=commit_hash,
                timestamp=commit.timestamp,
                message=commit.message,
                parent=commit.parent,
            )
            commit_hash = commit.parent

    def __repr__(self) -> str:
        return f"CommitGraph(head={self.head.resolve()})"
