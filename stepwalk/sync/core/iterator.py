"""Resumable directory tree iterator.

The DirectoryTreeIterator walks a directory tree one entry per call, in
pre-order (a directory is produced before its children). It keeps an
explicit stack of TraversalFrames instead of recursing, so a walk can be
suspended between any two calls, pruned by the caller, and resumed after
an individual entry fails.

Error isolation works by advancing first and reporting second: by the time
an EntryAccessError reaches the caller, the iterator has already moved past
the entry (or dropped the directory) that failed. Calling again continues
the walk.

Example:
    >>> it = DirectoryTreeIterator("photos")
    >>> while True:
    ...     try:
    ...         path = it.produce_next()
    ...     except EntryAccessError as e:
    ...         print(f"skipped {e.path}")
    ...         continue
    ...     if path is None:
    ...         break
    ...     if it.current_is_directory() and path.endswith(".git"):
    ...         it.skip_subtree()
"""

import logging
import os
from enum import Enum
from typing import List, NamedTuple, Optional, Union

from .adapter import TreeAdapter
from .frame import TraversalFrame
from .node import WalkEntry
from ..adapters.filesystem import FileSystemAdapter
from ..._common.config import WalkConfig
from ..._common.errors import (
    NotADirectory,
    EntryAccessError,
    DirectoryReadError,
    MisuseError,
)

logger = logging.getLogger(__name__)


class WalkState(Enum):
    """Lifecycle of a DirectoryTreeIterator.

    Errors are per-call signals, not states - there is no failure state.
    """
    FRESH = "fresh"              # Constructed, nothing produced yet
    POSITIONED = "positioned"    # Holds a current entry
    EXHAUSTED = "exhausted"      # End sentinel returned (terminal)


class StepKind(Enum):
    """Tag of a StepResult."""
    ENTRY = "entry"
    END = "end"
    ERROR = "error"


class StepResult(NamedTuple):
    """Outcome of one DirectoryTreeIterator.step() call.

    Exactly one of ``entry`` (ENTRY) or ``error`` (ERROR) is set; both are
    None for END.
    """
    kind: StepKind
    entry: Optional[WalkEntry] = None
    error: Optional[EntryAccessError] = None

    @property
    def is_entry(self) -> bool:
        return self.kind is StepKind.ENTRY

    @property
    def is_end(self) -> bool:
        return self.kind is StepKind.END

    @property
    def is_error(self) -> bool:
        return self.kind is StepKind.ERROR


class DirectoryTreeIterator:
    """Pre-order, resumable, prunable walk over a directory tree.

    The root itself is not produced unless ``config.include_root`` is set.
    Returned paths are joined onto the root exactly as it was supplied, so a
    relative root yields relative paths.

    An instance is not safe for use by several callers at once. Separate
    instances share nothing and may run on separate threads.
    """

    def __init__(self,
                 root: Union[str, os.PathLike],
                 adapter: Optional[TreeAdapter] = None,
                 config: Optional[WalkConfig] = None):
        """Bind the iterator to a root directory and open it.

        Args:
            root: Directory to walk
            adapter: TreeAdapter used for every filesystem access
                (defaults to a FileSystemAdapter built from ``config``)
            config: Walk configuration

        Raises:
            ValueError: If the configuration is invalid
            NotADirectory: If ``root`` is not a directory
            EntryAccessError: If the root cannot be inspected or listed
        """
        self.config = config or WalkConfig()
        problems = self.config.validate()
        if problems:
            raise ValueError(f"Invalid walk configuration: {'; '.join(problems)}")

        self.root = os.fspath(root)
        self.adapter = adapter or FileSystemAdapter(
            follow_symlinks=self.config.follow_symlinks,
            include_hidden=self.config.include_hidden,
        )

        self._stack: List[TraversalFrame] = []
        self._current: Optional[WalkEntry] = None
        self._pending: Optional[WalkEntry] = None
        self._skip_pending = False
        self._state = WalkState.FRESH

        if not self.adapter.is_directory(self.root):
            raise NotADirectory(self.root)

        root_entry = WalkEntry(self.root, True, 0)
        self._root_pending = self.config.include_root
        # The root frame is opened eagerly so a bad root fails here and not
        # on the first step.
        if self.config.should_descend(0):
            self._descend(root_entry)

    # Public protocol

    @property
    def state(self) -> WalkState:
        """Current lifecycle state."""
        return self._state

    @property
    def current(self) -> Optional[WalkEntry]:
        """The most recently produced entry, or None if there is none."""
        return self._current

    @property
    def open_frames(self) -> int:
        """Number of directories currently open on the frame stack."""
        return len(self._stack)

    def produce_next(self) -> Optional[str]:
        """Produce the path of the next entry.

        Returns:
            The next path in pre-order, or None once the walk is complete.
            Further calls keep returning None.

        Raises:
            EntryAccessError: An entry or directory could not be read. The
                iterator has already moved past it; call again to continue.
        """
        entry = self.next_entry()
        return None if entry is None else entry.path

    def next_entry(self) -> Optional[WalkEntry]:
        """Like produce_next, but return the full WalkEntry."""
        if self._state is WalkState.EXHAUSTED:
            return None

        # Consume the pending descent and skip flag before touching the
        # filesystem, so a failure below never replays them.
        pending, self._pending = self._pending, None
        skip, self._skip_pending = self._skip_pending, False

        if self._root_pending:
            self._root_pending = False
            root_entry = WalkEntry(self.root, True, 0)
            self._pending = root_entry
            return self._position(root_entry)

        if pending is not None:
            if skip:
                logger.debug("Skipping subtree of %s", pending.path)
                if pending.depth == 0:
                    self._drop_frames()
            elif pending.depth > 0:
                self._descend(pending)
        elif skip and self._current_is_open():
            # The last step entered the current directory and then failed
            logger.debug("Skipping rest of subtree of %s", self._current.path)
            self._pop()

        while self._stack:
            frame = self._stack[-1]
            try:
                child = frame.next_child()
            except DirectoryReadError:
                self._pop()
                raise
            except EntryAccessError:
                # Cursor already moved past the child
                raise
            except OSError as e:
                self._pop()
                raise DirectoryReadError(frame.path, e) from e

            if child is None:
                self._pop()
                continue

            entry = WalkEntry(child.path, child.is_directory, frame.depth + 1)
            if entry.is_directory and self.config.should_descend(entry.depth):
                self._pending = entry
            return self._position(entry)

        self._finish()
        return None

    def step(self) -> StepResult:
        """Advance once and report the outcome as a tagged result.

        Recoverable errors come back as ``StepKind.ERROR`` instead of being
        raised; retrying is simply calling step() again.
        """
        try:
            entry = self.next_entry()
        except EntryAccessError as e:
            return StepResult(StepKind.ERROR, error=e)
        if entry is None:
            return StepResult(StepKind.END)
        return StepResult(StepKind.ENTRY, entry=entry)

    def current_is_directory(self) -> bool:
        """Check if the most recently produced entry is a directory.

        Raises:
            MisuseError: If nothing has been produced yet or the walk is over
        """
        return self._require_current("current_is_directory").is_directory

    def skip_subtree(self) -> None:
        """Do not descend into the most recently produced directory.

        The next produce_next() continues with that directory's next
        sibling. This also holds after a step inside the directory failed:
        its remaining children are dropped. Calling this more than once
        before the next step has no additional effect. If the current entry
        is not a directory this is a no-op.

        Raises:
            MisuseError: If nothing has been produced yet or the walk is over
        """
        current = self._require_current("skip_subtree")
        if not current.is_directory:
            logger.debug("skip_subtree() ignored: %s is not a directory", current.path)
            return
        self._skip_pending = True

    def close(self) -> None:
        """Release every open directory cursor and end the walk."""
        self._drop_frames()
        self._finish()

    def __iter__(self) -> 'DirectoryTreeIterator':
        return self

    def __next__(self) -> str:
        path = self.produce_next()
        if path is None:
            raise StopIteration
        return path

    def __enter__(self) -> 'DirectoryTreeIterator':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (f"DirectoryTreeIterator(root={self.root!r}, state={self._state.name}, "
                f"open_frames={len(self._stack)})")

    # Internals

    def _position(self, entry: WalkEntry) -> WalkEntry:
        self._current = entry
        self._state = WalkState.POSITIONED
        return entry

    def _require_current(self, operation: str) -> WalkEntry:
        if self._current is None:
            if self._state is WalkState.EXHAUSTED:
                raise MisuseError(f"{operation}() called after the walk of {self.root!r} finished")
            raise MisuseError(f"{operation}() called before any entry was produced")
        return self._current

    def _current_is_open(self) -> bool:
        if self._current is None or not self._stack:
            return False
        top = self._stack[-1]
        return top.path == self._current.path and top.depth == self._current.depth

    def _descend(self, entry: WalkEntry) -> None:
        """Push a frame for ``entry``. The caller's position is already past it."""
        key = None
        if self.adapter.follows_symlinks():
            key = self.adapter.directory_key(entry.path)
            if key is not None and any(frame.key == key for frame in self._stack):
                logger.debug("Not descending into %s: it is already being walked", entry.path)
                return
        try:
            cursor = self.adapter.open_directory(entry.path)
        except EntryAccessError:
            raise
        except OSError as e:
            raise EntryAccessError(entry.path, e) from e
        self._stack.append(TraversalFrame(entry.path, entry.depth, cursor, key))
        logger.debug("Entered %s (depth %d)", entry.path, entry.depth)

    def _pop(self) -> None:
        frame = self._stack.pop()
        frame.close()
        logger.debug("Left %s", frame.path)

    def _drop_frames(self) -> None:
        while self._stack:
            self._pop()

    def _finish(self) -> None:
        self._current = None
        self._pending = None
        self._skip_pending = False
        self._root_pending = False
        self._state = WalkState.EXHAUSTED
