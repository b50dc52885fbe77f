"""StepWalk - Resumable Directory Tree Walking.

StepWalk enumerates every entry under a root directory one step at a time.
A walk can be paused between any two steps, pruned by the caller, and it
keeps going when individual entries cannot be read.

    from stepwalk.sync import DirectoryTreeIterator, walk

File operation helpers for code that consumes a walk live in
``stepwalk.sync.fileops``.
"""

__version__ = "0.1.0"

from . import sync

__all__ = [
    "__version__",
    "sync",
]
