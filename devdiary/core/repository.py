"""Repository management for DevDiary."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional
from .config import Config
from .errors import (
    AlreadyInitializedError, NotARepositoryError, SourceFileNotFoundError, ObjectNotFoundError,
    MalformedObjectError, NothingToCommitError,
)
from .history import CommitGraph, LogEntry
from .index import StagingIndex
from .objects import Blob, StagingEntry
from .refs import HeadRef
from .store import ObjectStore
from devdiary.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)

DIARY_DIR_NAME = '.devdiary'


@dataclass(frozen=True)
class RepositoryPaths:
    """Fixed on-disk locations of one repository."""
    work_tree: Path
    diary_dir: Path
    objects_dir: Path
    head_file: Path
    index_file: Path
    config_file: Path

    @classmethod
    def for_work_tree(cls, work_tree: Path) -> 'RepositoryPaths':
        diary_dir = work_tree / DIARY_DIR_NAME
        return cls(
            work_tree=work_tree,
            diary_dir=diary_dir,
            objects_dir=diary_dir / 'objects',
            head_file=diary_dir / 'HEAD',
            index_file=diary_dir / 'index',
            config_file=diary_dir / 'config',
        )


class Repository:
    """
    Represents a DevDiary repository.

    A repository is an explicit handle: it owns nothing but its paths, and
    all state (objects, HEAD, index) is read from disk on demand, so
    several handles can be used side by side in one process.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository handle.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.paths = RepositoryPaths.for_work_tree(Path(path).resolve())

        self.store = ObjectStore(self.paths.objects_dir)
        self.index = StagingIndex(self.paths.index_file)
        self.head_ref = HeadRef(self.paths.head_file)
        self.graph = CommitGraph(self.store, self.head_ref)
        self.config = Config(self.paths.config_file)

        # Lazy loading to avoid circular import
        self._diff_engine = None

    @property
    def work_tree(self) -> Path:
        return self.paths.work_tree

    @property
    def diary_dir(self) -> Path:
        return self.paths.diary_dir

    @property
    def objects_dir(self) -> Path:
        return self.paths.objects_dir

    @property
    def head_file(self) -> Path:
        return self.paths.head_file

    @property
    def index_file(self) -> Path:
        return self.paths.index_file

    @property
    def config_file(self) -> Path:
        return self.paths.config_file

    @property
    def diff(self):
        """Get DiffEngine instance."""
        if self._diff_engine is None:
            from devdiary.operations.diff import DiffEngine
            self._diff_engine = DiffEngine(self.store)
        return self._diff_engine

    def init(self, exist_ok: bool = False) -> 'Repository':
        """
        Initialize the repository.

        Creates the .devdiary directory structure:
        .devdiary/
        ├── objects/       # Object database
        ├── HEAD           # Latest commit digest (empty until first commit)
        ├── index          # Staging area
        └── config         # Repository configuration

        Only missing pieces are created; existing history and staged
        files are never touched.

        Args:
            exist_ok: Do not raise if the repository already existed

        Returns:
            Repository: self for method chaining

        Raises:
            AlreadyInitializedError: If HEAD and index already existed
        """
        self.objects_dir.mkdir(parents=True, exist_ok=True)

        created_head = self.head_ref.initialize()

        created_index = False
        if not self.index_file.exists():
            self.index.clear()
            created_index = True

        if not self.config_file.exists():
            atomic_write_text(self.config_file, '[core]\n\trepositoryformatversion = 0\n')

        if not created_head and not created_index:
            if exist_ok:
                return self
            raise AlreadyInitializedError(self.diary_dir)

        logger.debug("initialized repository at %s", self.diary_dir)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .devdiary
        directory or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / DIARY_DIR_NAME).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def discover(cls, path: str = '.') -> 'Repository':
        """
        Like find_repository, but raise when nothing is found.

        Raises:
            NotARepositoryError: If no .devdiary exists at or above path
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise NotARepositoryError(Path(path).resolve())
        return repo

    def _staged_path(self, file_path: Path) -> str:
        """Path recorded in the index: work-tree relative when possible."""
        try:
            return file_path.relative_to(self.work_tree).as_posix()
        except ValueError:
            return file_path.as_posix()

    def add(self, path: str) -> StagingEntry:
        """
        Stage a file for commit.

        Relative paths are resolved against the work tree. The content is
        stored before the index is updated, so a staged digest always
        resolves. Adding a path that is already staged appends a second
        entry.

        Args:
            path: Path to file (absolute or relative)

        Returns:
            StagingEntry: The appended entry

        Raises:
            SourceFileNotFoundError: If path is missing or not a regular file
        """
        file_path = Path(path)
        if not file_path.is_absolute():
            file_path = self.work_tree / file_path
        # Collapse ".." so one file always stages under one path
        file_path = Path(os.path.normpath(file_path))

        if not file_path.is_file():
            raise SourceFileNotFoundError(path)

        try:
            blob = Blob.from_file(str(file_path))
        except OSError as e:
            raise SourceFileNotFoundError(path) from e

        digest = self.store.write_object(blob)
        entry = self.index.append(self._staged_path(file_path), digest)
        logger.debug("staged %s as %s", entry.path, digest[:7])
        return entry

    def status(self) -> List[StagingEntry]:
        """Entries waiting for the next commit."""
        return self.index.read_all()

    def commit(self, message: str, allow_empty: bool = True) -> str:
        """
        Record staged files as a new commit.

        Steps run in a fixed order: the commit object is written, HEAD is
        advanced, then the index is cleared.

        Args:
            message: Commit message
            allow_empty: Permit a commit with nothing staged

        Returns:
            str: Digest of the new commit

        Raises:
            NothingToCommitError: If nothing is staged and allow_empty is False
        """
        policy = self.config.duplicate_policy
        files = self.index.effective_entries(policy)

        if not files:
            if not allow_empty:
                raise NothingToCommitError()
            logger.warning("committing with an empty staging area")

        commit_hash = self.graph.create_commit(files, message)
        self.index.clear()
        return commit_hash

    def head(self) -> Optional[str]:
        """
        Get the current HEAD digest.

        Returns:
            Digest of the latest commit, or None if there is no history
        """
        return self.head_ref.resolve()

    def log(self) -> Iterator[LogEntry]:
        """
        Walk history from HEAD, newest first.

        A missing or unreadable commit ends the walk with a warning
        instead of an exception, so the commits before it are still shown.

        Yields:
            LogEntry for each reachable commit
        """
        walker = self.graph.walk(self.head())
        while True:
            try:
                entry = next(walker)
            except StopIteration:
                return
            except (ObjectNotFoundError, MalformedObjectError) as e:
                logger.warning("history ends early: %s", e)
                return
            yield entry

    def resolve_commit(self, ref: str) -> Optional[str]:
        """
        Resolve HEAD, a full digest or an unambiguous prefix to a digest.

        Returns:
            Digest, or None if ref names nothing in the store
        """
        if ref == 'HEAD':
            return self.head()
        return self.store.find_by_prefix(ref)

    def show(self, ref: str):
        """
        Compute the changes a commit introduced relative to its parent.

        Args:
            ref: Commit digest, prefix, or 'HEAD'

        Returns:
            CommitDiff, or None if ref does not resolve to a commit
        """
        commit_hash = self.resolve_commit(ref)
        if not commit_hash:
            logger.debug("no object matches %s", ref)
            return None

        try:
            return self.diff.show_commit(commit_hash)
        except ObjectNotFoundError:
            logger.debug("commit %s not found", ref)
            return None
        except MalformedObjectError as e:
            # Blob digests land here too
            logger.debug("%s is not a commit: %s", ref, e.reason)
            return None

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
