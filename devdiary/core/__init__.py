"""Core functionality for DevDiary.

This module contains the core data structures:
- Stored objects (Blob, Commit) and staging entries
- Content-addressed object store
- Staging index
- HEAD pointer and commit history
- Repository management
- Configuration management
- Hashing utilities

For diff computation, see devdiary.operations
"""

from devdiary.core.objects import DiaryObject, Blob, Commit, StagingEntry
from devdiary.core.store import ObjectStore
from devdiary.core.index import StagingIndex
from devdiary.core.refs import HeadRef
from devdiary.core.history import CommitGraph, LogEntry
from devdiary.core.repository import Repository, RepositoryPaths
from devdiary.core.hash import hash_object, is_digest
from devdiary.core.config import Config, get_config

__all__ = [
    'DiaryObject',
    'Blob',
    'Commit',
    'StagingEntry',
    'ObjectStore',
    'StagingIndex',
    'HeadRef',
    'CommitGraph',
    'LogEntry',
    'Repository',
    'RepositoryPaths',
    'Config',
    'get_config',
    'hash_object',
    'is_digest',
]
