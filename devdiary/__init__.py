"""DevDiary - a minimal local version-control core implemented in Python."""

__version__ = '0.1.0'

from devdiary.core.repository import Repository
from devdiary.core.objects import DiaryObject, Blob, Commit, StagingEntry

__all__ = [
    'Repository',
    'DiaryObject',
    'Blob',
    'Commit',
    'StagingEntry',
]
