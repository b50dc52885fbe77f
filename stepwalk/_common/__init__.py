"""Common components shared across StepWalk.

This internal package contains non-I/O code: configuration and the error
taxonomy. It should NOT be imported directly by users.

Important: This package must NEVER import from sync to avoid circular
dependencies.
"""

from .config import WalkConfig
from .errors import (
    StepWalkError,
    NotADirectory,
    EntryAccessError,
    DirectoryReadError,
    MisuseError,
    FileOpError,
    NotFoundError,
    ExistsError,
    ErrorThresholdExceeded,
)

__all__ = [
    'WalkConfig',
    'StepWalkError',
    'NotADirectory',
    'EntryAccessError',
    'DirectoryReadError',
    'MisuseError',
    'FileOpError',
    'NotFoundError',
    'ExistsError',
    'ErrorThresholdExceeded',
]
