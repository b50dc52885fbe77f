"""Synchronous implementation of StepWalk.

All components here operate in a blocking, synchronous manner: each step
of a walk may block on filesystem I/O and returns only when an entry, the
end sentinel, or an error is available.
"""

# Core components
from .core.node import ChildEntry, WalkEntry
from .core.adapter import TreeAdapter, DirectoryCursor
from .core.frame import TraversalFrame
from .core.iterator import (
    DirectoryTreeIterator,
    WalkState,
    StepKind,
    StepResult,
)

# Adapters
from .adapters.filesystem import (
    FileSystemAdapter,
    FilteredFileSystemAdapter,
    ScandirCursor,
)

# Error handling
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)

# Configuration and errors
from .._common.config import WalkConfig
from .._common.errors import (
    StepWalkError,
    NotADirectory,
    EntryAccessError,
    DirectoryReadError,
    MisuseError,
    ErrorThresholdExceeded,
)

# High-level API
from .api import (
    walk,
    walk_paths,
    count_entries,
    find_entries,
    get_tree_stats,
)

__all__ = [
    # Core
    'ChildEntry',
    'WalkEntry',
    'TreeAdapter',
    'DirectoryCursor',
    'TraversalFrame',
    'DirectoryTreeIterator',
    'WalkState',
    'StepKind',
    'StepResult',
    # Adapters
    'FileSystemAdapter',
    'FilteredFileSystemAdapter',
    'ScandirCursor',
    # Error handling
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'ThresholdPolicy',
    # Config and errors
    'WalkConfig',
    'StepWalkError',
    'NotADirectory',
    'EntryAccessError',
    'DirectoryReadError',
    'MisuseError',
    'ErrorThresholdExceeded',
    # API
    'walk',
    'walk_paths',
    'count_entries',
    'find_entries',
    'get_tree_stats',
]
