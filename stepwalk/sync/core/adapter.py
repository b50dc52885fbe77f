"""TreeAdapter abstraction for StepWalk.

The TreeAdapter is the seam between the traversal engine and the storage
it walks. The DirectoryTreeIterator never touches ``os`` directly: every
existence check, type check and directory read goes through an adapter,
which also translates low-level failures into StepWalk's error taxonomy.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Hashable
from .node import ChildEntry


class DirectoryCursor(ABC):
    """A live, forward-only cursor over one directory's children.

    Cursors are owned by exactly one TraversalFrame. Iterating a cursor
    yields ChildEntry instances and has two failure modes:

    - ``DirectoryReadError``: the listing itself broke. The cursor is
      finished and will not yield anything else.
    - ``EntryAccessError``: one child could not be classified. The cursor
      has already moved past that child and can be advanced again.
    """

    def __iter__(self) -> 'DirectoryCursor':
        return self

    @abstractmethod
    def __next__(self) -> ChildEntry:
        """Return the next child or raise StopIteration."""
        pass

    def close(self) -> None:
        """Release any handle held by the cursor. Safe to call twice."""
        pass

    def __enter__(self) -> 'DirectoryCursor':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class TreeAdapter(ABC):
    """Abstract adapter for reading directory trees.

    Every method may fail at any call, and a call that succeeded once is
    not assumed to succeed again - the tree can change underneath a walk.
    """

    @abstractmethod
    def is_directory(self, path: str) -> bool:
        """Check if a path points to a directory.

        Args:
            path: The path to check

        Returns:
            True if the path is a directory, False if it is anything
            else or does not exist

        Raises:
            EntryAccessError: If the path cannot be inspected
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if something exists at a path.

        Args:
            path: The path to check

        Returns:
            True if the path points to something
        """
        pass

    @abstractmethod
    def open_directory(self, path: str) -> DirectoryCursor:
        """Open a cursor over the immediate children of a directory.

        This should be lazy when possible - the returned cursor reads
        children on demand rather than materializing them at once.

        Args:
            path: The directory path

        Returns:
            DirectoryCursor over the directory's children

        Raises:
            EntryAccessError: If the directory cannot be opened
        """
        pass

    def list_children(self, path: str) -> List[ChildEntry]:
        """Read every immediate child of a directory.

        Default implementation drains ``open_directory``. The first
        failure is raised; partial results are discarded.

        Args:
            path: The directory path

        Returns:
            List of ChildEntry instances in listing order

        Raises:
            EntryAccessError: If the directory or any child cannot be read
        """
        with self.open_directory(path) as cursor:
            return list(cursor)

    def iter_children(self, path: str) -> Iterator[ChildEntry]:
        """Lazy variant of list_children that closes the cursor when done."""
        with self.open_directory(path) as cursor:
            yield from cursor

    def directory_key(self, path: str) -> Optional[Hashable]:
        """Return a stable identity for a directory, if the adapter has one.

        Used to avoid descending into a directory that is already being
        enumerated higher up the stack (symlink cycles). Return None when
        identity cannot be determined.

        Args:
            path: The directory path

        Returns:
            Hashable identity or None
        """
        return None

    def follows_symlinks(self) -> bool:
        """Check if links to directories are reported as directories.

        Returns:
            True if the iterator must guard against cycles
        """
        return False
