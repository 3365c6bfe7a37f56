"""Operations module for high-level DevDiary operations.

This module contains the business logic for:
- Line diff computation
- Commit-to-parent comparison for show
"""

from devdiary.operations.diff import (
    DiffEngine, DiffKind, DiffPart, ChangeStatus, FileChange, CommitDiff, diff,
)

__all__ = [
    'DiffEngine', 'DiffKind', 'DiffPart',
    'ChangeStatus', 'FileChange', 'CommitDiff', 'diff',
]
