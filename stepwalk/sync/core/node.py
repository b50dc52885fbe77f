"""Entry records for StepWalk.

Entries are intentionally kept simple - they are plain data containers.
Reading the filesystem is delegated to the TreeAdapter, and the order in
which entries are visited is the job of the DirectoryTreeIterator.
"""

from typing import NamedTuple


class ChildEntry(NamedTuple):
    """One immediate child of a directory, as reported by an adapter.

    Attributes:
        name: Base name of the child
        path: Path of the child, joined onto the parent's path
        is_directory: Whether the child should be treated as a directory
    """
    name: str
    path: str
    is_directory: bool


class WalkEntry(NamedTuple):
    """An entry produced by a walk, paired with its classification.

    Attributes:
        path: Path of the entry, spelled relative to the root as supplied
        is_directory: Whether the entry is a directory
        depth: Depth below the root (root = 0, its children = 1)
    """
    path: str
    is_directory: bool
    depth: int

    def __str__(self) -> str:
        return self.path
