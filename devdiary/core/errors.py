"""Error types for DevDiary operations."""


class DiaryError(Exception):
    """Base exception for all DevDiary errors."""
    pass


class NotARepositoryError(DiaryError):
    """Raised when no .devdiary directory can be found."""
    
    def __init__(self, path):
        self.path = path
        super().__init__(f"Not a devdiary repository: {path}")


class AlreadyInitializedError(DiaryError):
    """Raised when HEAD and index already exist at init time."""
    
    def __init__(self, path):
        self.path = path
        super().__init__(f"Already initialized the .devdiary folder at {path}")


class SourceFileNotFoundError(DiaryError, FileNotFoundError):
    """Raised when a file to be added does not exist or is not a regular file."""
    
    def __init__(self, path):
        self.path = path
        super().__init__(f"File not found: {path}")


class ObjectNotFoundError(DiaryError):
    """Raised when a requested object does not exist in the store."""
    
    def __init__(self, digest: str):
        self.digest = digest
        super().__init__(f"Object not found: {digest}")


class CommitNotFoundError(ObjectNotFoundError):
    """Raised when a digest does not resolve to a stored commit."""
    
    def __init__(self, digest: str):
        super().__init__(digest)
        self.args = (f"Commit not found: {digest}",)


class MalformedStateError(DiaryError):
    """Raised when persisted state cannot be parsed."""
    pass


class MalformedIndexError(MalformedStateError):
    """Raised when the index file is not a valid entry list."""
    
    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed index {path}: {reason}")


class MalformedObjectError(MalformedStateError):
    """Raised when an object is not a valid commit record."""
    
    def __init__(self, digest: str, reason: str):
        self.digest = digest
        self.reason = reason
        super().__init__(f"Malformed object {digest}: {reason}")


class NothingToCommitError(DiaryError):
    """Raised when committing an empty staging area is not allowed."""
    
    def __init__(self):
        super().__init__("Nothing to commit (staging area is empty)")


class InvalidConfigError(DiaryError, ValueError):
    """Raised when a config key holds a value DevDiary cannot use."""

    def __init__(self, key: str, value, expected: str):
        self.key = key
        self.value = value
        super().__init__(f"Invalid value for {key}: {value!r} (expected {expected})")
