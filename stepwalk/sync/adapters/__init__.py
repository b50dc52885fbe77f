"""Tree adapters for StepWalk."""

from .filesystem import FileSystemAdapter, FilteredFileSystemAdapter, ScandirCursor

__all__ = [
    'FileSystemAdapter',
    'FilteredFileSystemAdapter',
    'ScandirCursor',
]
