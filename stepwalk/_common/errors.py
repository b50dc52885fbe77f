"""Error taxonomy for StepWalk.

Traversal errors come in three kinds:

- ``NotADirectory``: the root handed to an iterator is not a directory.
  Fatal to that construction attempt.
- ``EntryAccessError``: one entry (or one directory listing) could not be
  read. Recoverable - the iterator has already moved past the failure, so
  the caller simply asks for the next entry again.
- ``MisuseError``: an accessor was called in a state where it has no
  meaningful answer (e.g. before the first entry was produced).

The file operation helpers in ``stepwalk.sync.fileops`` raise ``FileOpError``
and its subclasses.
"""

from typing import Optional


class StepWalkError(Exception):
    """Base class for every error raised by StepWalk."""


class NotADirectory(StepWalkError, NotADirectoryError):
    """Raised when a traversal root does not point to a directory."""

    def __init__(self, path: str):
        super().__init__(f'"{path}" is not a directory')
        self.path = path
        self.filename = path

    def __str__(self) -> str:
        return self.args[0] if self.args else f'"{self.path}" is not a directory'


class EntryAccessError(StepWalkError, OSError):
    """Raised when a single entry cannot be listed or classified.

    Attributes:
        path: The path of the offending entry (or directory)
        cause: The underlying exception, usually an ``OSError``
    """

    def __init__(self, path: str, cause: Optional[BaseException] = None,
                 message: Optional[str] = None):
        if message is None:
            message = f'Failed to access "{path}"'
            if cause is not None:
                message = f"{message}: {cause}"
        super().__init__(message)
        self.path = path
        self.cause = cause
        self.filename = path
        self.errno = getattr(cause, 'errno', None)
        self.strerror = getattr(cause, 'strerror', None)

    def __str__(self) -> str:
        return self.args[0] if self.args else f'Failed to access "{self.path}"'


class DirectoryReadError(EntryAccessError):
    """Raised when reading the listing of an open directory fails.

    The directory's remaining children are unreachable; the iterator
    drops its frame before this is raised.
    """


class MisuseError(StepWalkError, RuntimeError):
    """Raised when an iterator accessor is called in the wrong state."""


class ErrorThresholdExceeded(StepWalkError, RuntimeError):
    """Raised by ThresholdPolicy once too many entries have failed."""


class FileOpError(StepWalkError, OSError):
    """I/O failure in one of the file operation helpers."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
        self.errno = getattr(cause, 'errno', None)

    def __str__(self) -> str:
        return self.args[0] if self.args else "File operation failed"


class NotFoundError(FileOpError):
    """The path a file operation needs does not exist."""


class ExistsError(FileOpError):
    """The destination of a file operation already exists."""
