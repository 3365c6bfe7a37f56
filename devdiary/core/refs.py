"""HEAD pointer management for DevDiary."""

import logging
from pathlib import Path
from typing import Optional, Union
from devdiary.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)


class HeadRef:
    """
    Manages the HEAD file.

    HEAD holds either an empty string (no commits yet) or the digest of
    the latest commit. It only ever moves forward: it is set on every
    commit and never cleared.
    """

    def __init__(self, head_file: Union[str, Path]):
        """
        Initialize HEAD reference.

        Args:
            head_file: Path to HEAD file
        """
        self.head_file = Path(head_file)

    def resolve(self) -> Optional[str]:
        """
        Resolve HEAD to a commit digest.

        Returns:
            Commit digest, or None if there are no commits yet
        """
        if not self.head_file.exists():
            return None

        content = self.head_file.read_text(encoding='utf-8').strip()
        return content or None

    def set(self, commit_hash: str) -> None:
        """
        Point HEAD at a commit.

        Args:
            commit_hash: Digest of the new head commit
        """
        previous = self.resolve()
        atomic_write_text(self.head_file, commit_hash)
        logger.debug("HEAD %s -> %s", previous[:7] if previous else '(empty)', commit_hash[:7])

    def initialize(self) -> bool:
        """
        Create an empty HEAD file if none exists.

        Returns:
            True if created, False if HEAD already existed
        """
        if self.head_file.exists():
            return False
        atomic_write_text(self.head_file, '')
        return True

    def __repr__(self) -> str:
        return f"HeadRef(head={self.resolve()})"
