"""Core abstractions for StepWalk.

This package contains the traversal engine: the adapter seam, the frame
stack and the resumable iterator built on them.
"""

from .node import ChildEntry, WalkEntry
from .adapter import TreeAdapter, DirectoryCursor
from .frame import TraversalFrame
from .iterator import DirectoryTreeIterator, WalkState, StepKind, StepResult

__all__ = [
    "ChildEntry",
    "WalkEntry",
    "TreeAdapter",
    "DirectoryCursor",
    "TraversalFrame",
    "DirectoryTreeIterator",
    "WalkState",
    "StepKind",
    "StepResult",
]
