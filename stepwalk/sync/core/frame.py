"""Traversal frames for the DirectoryTreeIterator.

A frame is the iteration state for one directory: where it is, how deep it
sits, and the cursor over its children. Frames live only on the iterator's
stack and own their cursor exclusively.
"""

from typing import Hashable, Optional
from .adapter import DirectoryCursor
from .node import ChildEntry
from ..._common.errors import DirectoryReadError


class TraversalFrame:
    """Iteration over one directory's immediate children."""

    __slots__ = ('path', 'depth', 'key', '_cursor')

    def __init__(self,
                 path: str,
                 depth: int,
                 cursor: DirectoryCursor,
                 key: Optional[Hashable] = None):
        """Create a frame.

        Args:
            path: The directory path
            depth: Depth of the directory (root = 0)
            cursor: Cursor over the directory's children, now owned by the frame
            key: Directory identity for cycle detection, if known
        """
        self.path = path
        self.depth = depth
        self.key = key
        self._cursor: Optional[DirectoryCursor] = cursor

    @property
    def exhausted(self) -> bool:
        """True once the cursor has reported its end, failed, or been closed."""
        return self._cursor is None

    def next_child(self) -> Optional[ChildEntry]:
        """Advance the cursor.

        Returns:
            The next ChildEntry, or None when the directory has no more children

        Raises:
            DirectoryReadError: The listing broke; the frame is now exhausted
            EntryAccessError: One child could not be read; the frame is still usable
        """
        if self._cursor is None:
            return None
        try:
            return next(self._cursor)
        except StopIteration:
            self.close()
            return None
        except DirectoryReadError:
            self.close()
            raise

    def close(self) -> None:
        if self._cursor is not None:
            cursor, self._cursor = self._cursor, None
            cursor.close()

    def __repr__(self) -> str:
        return f"TraversalFrame(path={self.path!r}, depth={self.depth}, exhausted={self.exhausted})"
