"""Diff engine for comparing blobs and commits."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
from devdiary.core.errors import ObjectNotFoundError, MalformedObjectError
from devdiary.core.objects import Commit
from devdiary.core.store import ObjectStore

logger = logging.getLogger(__name__)


class DiffKind(Enum):
    ADDED = 'added'
    REMOVED = 'removed'
    UNCHANGED = 'unchanged'


@dataclass(frozen=True)
class DiffPart:
    """A single line of a diff and how it changed."""
    kind: DiffKind
    text: str

    @property
    def added(self) -> bool:
        return self.kind is DiffKind.ADDED

    @property
    def removed(self) -> bool:
        return self.kind is DiffKind.REMOVED


class ChangeStatus(Enum):
    ROOT = 'root'          # commit has no parent
    NEW = 'new'            # parent commit does not record this path
    MODIFIED = 'modified'  # diffed against the parent's version
    MISSING = 'missing'    # parent commit or a blob could not be read


@dataclass
class FileChange:
    """Represents the change to a single file within a commit."""
    path: str
    digest: str
    status: ChangeStatus
    content: Optional[str] = None
    parent_content: Optional[str] = None
    parts: List[DiffPart] = field(default_factory=list)

    @property
    def is_new(self) -> bool:
        return self.status in (ChangeStatus.ROOT, ChangeStatus.NEW)

    @property
    def is_unchanged(self) -> bool:
        return self.status is ChangeStatus.MODIFIED and all(
            part.kind is DiffKind.UNCHANGED for part in self.parts
        )


@dataclass
class CommitDiff:
    """All file changes recorded by one commit."""
    digest: str
    commit: Commit
    changes: List[FileChange] = field(default_factory=list)

    @property
    def parent(self) -> Optional[str]:
        return self.commit.parent


def split_lines(text: str) -> List[str]:
    """
    Split text into lines, keeping each line's newline.

    Only '\\n' ends a line. A final line without a newline is kept as is.
    """
    if not text:
        return []
    lines = text.split('\n')
    result = [line + '\n' for line in lines[:-1]]
    if lines[-1]:
        result.append(lines[-1])
    return result


def _edit_script(old: List[str], new: List[str]) -> List[Tuple[DiffKind, int]]:
    """
    Shortest edit script from old to new (Myers' O(ND) greedy walk).

    Returns (kind, index) pairs in order; the index points into new for
    UNCHANGED and ADDED, into old for REMOVED.
    """
    n, m = len(old), len(new)
    frontier = {1: 0}
    trace = []

    for d in range(n + m + 1):
        trace.append(dict(frontier))
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and frontier[k - 1] < frontier[k + 1]):
                x = frontier[k + 1]
            else:
                x = frontier[k - 1] + 1
            y = x - k
            while x < n and y < m and old[x] == new[y]:
                x += 1
                y += 1
            frontier[k] = x
            if x >= n and y >= m:
                break
        else:
            continue
        break

    script = []
    x, y = n, m
    for d in range(len(trace) - 1, -1, -1):
        frontier = trace[d]
        k = x - y
        if k == -d or (k != d and frontier[k - 1] < frontier[k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = frontier[prev_k]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            x -= 1
            y -= 1
            script.append((DiffKind.UNCHANGED, y))
        if d > 0:
            if x == prev_x:
                script.append((DiffKind.ADDED, y - 1))
            else:
                script.append((DiffKind.REMOVED, x - 1))
        x, y = prev_x, prev_y

    script.reverse()
    return script


def diff(old_text: str, new_text: str) -> List[DiffPart]:
    """
    Compute a minimal line-level diff from old_text to new_text.

    Each line becomes one part. Within a run of changed lines, the
    removed lines come before the added ones. Joining the UNCHANGED and
    ADDED parts in order gives new_text; joining UNCHANGED and REMOVED
    gives old_text.

    Args:
        old_text: Previous content
        new_text: Current content

    Returns:
        List of DiffPart objects
    """
    old_lines = split_lines(old_text)
    new_lines = split_lines(new_text)

    parts = []
    removed, added = [], []
    for kind, index in _edit_script(old_lines, new_lines):
        if kind is DiffKind.REMOVED:
            removed.append(DiffPart(kind, old_lines[index]))
        elif kind is DiffKind.ADDED:
            added.append(DiffPart(kind, new_lines[index]))
        else:
            parts.extend(removed + added)
            removed, added = [], []
            parts.append(DiffPart(kind, new_lines[index]))
    parts.extend(removed + added)

    return parts


def stats(parts: List[DiffPart]) -> Tuple[int, int]:
    """Count (added, removed) lines in a diff."""
    added = sum(1 for part in parts if part.added)
    removed = sum(1 for part in parts if part.removed)
    return added, removed


class DiffEngine:
    """
    Engine for computing the changes a commit introduced.

    Every file recorded by a commit is compared with the version of the
    same path in the parent commit.
    """

    def __init__(self, store: ObjectStore):
        """
        Initialize diff engine.

        Args:
            store: Object store holding commits and blobs
        """
        self.store = store

    def diff(self, old_text: str, new_text: str) -> List[DiffPart]:
        """Line diff between two texts."""
        return diff(old_text, new_text)

    def _read_text(self, digest: str) -> Optional[str]:
        try:
            return self.store.read_blob(digest).text
        except ObjectNotFoundError:
            logger.warning("blob %s is missing from the object store", digest[:7])
            return None

    def show_commit(self, commit_hash: str) -> CommitDiff:
        """
        Compute per-file changes between a commit and its parent.

        Args:
            commit_hash: Commit digest

        Returns:
            CommitDiff object

        Raises:
            CommitNotFoundError: If commit_hash does not resolve
            MalformedObjectError: If the object is not a commit record
        """
        commit = self.store.read_commit(commit_hash)
        result = CommitDiff(digest=commit_hash, commit=commit)

        parent_commit = None
        if commit.parent:
            try:
                parent_commit = self.store.read_commit(commit.parent)
            except (ObjectNotFoundError, MalformedObjectError) as e:
                logger.warning("parent of %s is unavailable: %s", commit_hash[:7], e)

        for entry in commit.files:
            change = FileChange(path=entry.path, digest=entry.digest, status=ChangeStatus.MISSING)
            change.content = self._read_text(entry.digest)
            result.changes.append(change)

            if change.content is None:
                continue

            if commit.parent is None:
                change.status = ChangeStatus.ROOT
                continue

            if parent_commit is None:
                continue

            parent_entry = parent_commit.find_file(entry.path)
            if parent_entry is None:
                change.status = ChangeStatus.NEW
                continue

            change.parent_content = self._read_text(parent_entry.digest)
            if change.parent_content is None:
                continue

            change.status = ChangeStatus.MODIFIED
            change.parts = diff(change.parent_content, change.content)

        return result

    def format_commit_diff(self, commit_diff: CommitDiff, color: bool = True) -> str:
        """
        Format a commit diff for display.

        Added lines are prefixed with '++', removed lines with '--'.

        Args:
            commit_diff: Result of show_commit
            color: Whether to use color output

        Returns:
            Formatted diff string
        """
        from colorama import Fore, Style

        def paint(text, colour):
            return f"{colour}{text}{Style.RESET_ALL}" if color else text

        output = []
        commit = commit_diff.commit

        output.append(paint(f"commit {commit_diff.digest}", Fore.YELLOW))
        if commit.parent:
            output.append(f"Parent: {commit.parent}")
        output.append(f"Date:   {commit.timestamp}")
        output.append('')
        for line in commit.message.split('\n'):
            output.append(f"    {line}")

        for change in commit_diff.changes:
            output.append('')
            output.append(paint(f"Changes in file: {change.path}", Fore.CYAN))

            if change.status is ChangeStatus.ROOT:
                output.append("First commit. No parent commit.")
                output.extend(line.rstrip('\n') for line in split_lines(change.content))
            elif change.status is ChangeStatus.NEW:
                output.append("New file (not in parent commit).")
                for line in split_lines(change.content):
                    output.append(paint("++" + line.rstrip("\n"), Fore.GREEN))
            elif change.status is ChangeStatus.MISSING:
                output.append(paint("Content unavailable (missing object).", Fore.RED))
            elif change.is_unchanged:
                output.append("(no changes)")
            else:
                for part in change.parts:
                    text = part.text.rstrip('\n')
                    if part.added:
                        output.append(paint(f"++{text}", Fore.GREEN))
                    elif part.removed:
                        output.append(paint(f"--{text}", Fore.RED))
                    else:
                        output.append(f"  {text}")

        return '\n'.join(output)
