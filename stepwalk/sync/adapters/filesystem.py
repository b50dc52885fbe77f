"""Filesystem adapter for StepWalk.

This adapter lets the DirectoryTreeIterator walk the local filesystem
using ``os.scandir``. All ``OSError`` failures are translated into
EntryAccessError / DirectoryReadError so the iterator can isolate them.
"""

import os
import stat
from typing import Callable, Hashable, Optional, Set
from ..core.node import ChildEntry
from ..core.adapter import TreeAdapter, DirectoryCursor
from ..._common.errors import EntryAccessError, DirectoryReadError


class ScandirCursor(DirectoryCursor):
    """DirectoryCursor backed by an ``os.scandir`` iterator."""

    def __init__(self,
                 path: str,
                 follow_symlinks: bool = False,
                 include_hidden: bool = True,
                 accept: Optional[Callable[[ChildEntry], bool]] = None):
        """Open a scandir iterator over ``path``.

        Args:
            path: Directory to list
            follow_symlinks: Whether links to directories count as directories
            include_hidden: Whether dot-entries are reported
            accept: Optional predicate; children it rejects are not reported

        Raises:
            EntryAccessError: If the directory cannot be opened
        """
        self.path = path
        self.follow_symlinks = follow_symlinks
        self.include_hidden = include_hidden
        self.accept = accept
        try:
            self._scandir = os.scandir(path)
        except OSError as e:
            raise EntryAccessError(path, e) from e

    def __next__(self) -> ChildEntry:
        while True:
            if self._scandir is None:
                raise StopIteration
            try:
                entry = next(self._scandir)
            except StopIteration:
                self.close()
                raise
            except OSError as e:
                self.close()
                raise DirectoryReadError(self.path, e) from e

            if not self.include_hidden and entry.name.startswith('.'):
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=self.follow_symlinks)
            except OSError as e:
                if self._rejected_either_way(entry):
                    continue
                raise EntryAccessError(entry.path, e) from e

            child = ChildEntry(entry.name, entry.path, is_dir)
            if self.accept is not None and not self.accept(child):
                continue
            return child

    def _rejected_either_way(self, entry) -> bool:
        """True if ``accept`` hides the entry whether or not it is a directory."""
        if self.accept is None:
            return False
        return not (self.accept(ChildEntry(entry.name, entry.path, True))
                    or self.accept(ChildEntry(entry.name, entry.path, False)))

    def close(self) -> None:
        if self._scandir is not None:
            self._scandir.close()
            self._scandir = None


class FileSystemAdapter(TreeAdapter):
    """Adapter for local filesystem traversal.

    Symlinks are always reported as entries. They are only descended into
    when ``follow_symlinks`` is set, and the iterator then guards against
    cycles through ``directory_key``.
    """

    def __init__(self,
                 follow_symlinks: bool = False,
                 include_hidden: bool = True):
        """Initialize filesystem adapter.

        Args:
            follow_symlinks: Whether to follow symbolic links to directories
            include_hidden: Whether to include hidden files/directories
        """
        self.follow_symlinks = follow_symlinks
        self.include_hidden = include_hidden

    def is_directory(self, path: str) -> bool:
        """Check if a path is a directory, following symlinks."""
        try:
            return stat.S_ISDIR(os.stat(path).st_mode)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as e:
            raise EntryAccessError(path, e) from e

    def exists(self, path: str) -> bool:
        """Check if anything (including a dangling symlink) is at a path."""
        return os.path.lexists(path)

    def open_directory(self, path: str) -> ScandirCursor:
        """Open a scandir cursor over a directory."""
        return ScandirCursor(path,
                             follow_symlinks=self.follow_symlinks,
                             include_hidden=self.include_hidden,
                             accept=self._accept)

    def directory_key(self, path: str) -> Optional[Hashable]:
        """Identify a directory by device and inode."""
        try:
            st = os.stat(path)
        except OSError:
            return None
        return (st.st_dev, st.st_ino)

    def follows_symlinks(self) -> bool:
        return self.follow_symlinks

    def _accept(self, child: ChildEntry) -> bool:
        """Hook for subclasses that hide some children."""
        return True

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(follow_symlinks={self.follow_symlinks!r}, "
                f"include_hidden={self.include_hidden!r})")


class FilteredFileSystemAdapter(FileSystemAdapter):
    """Filesystem adapter with built-in filtering.

    Useful for excluding certain paths or file types during traversal.
    Excluded children are never reported, so excluded directories are
    never descended into either. A child whose type cannot be read is
    dropped silently when it would be excluded as a directory and as a
    file alike. Otherwise its EntryAccessError is raised as usual.
    """

    def __init__(self,
                 exclude_dirs: Optional[Set[str]] = None,
                 exclude_extensions: Optional[Set[str]] = None,
                 **kwargs):
        """Initialize filtered adapter.

        Args:
            exclude_dirs: Directory names to exclude (e.g., {'.git', '__pycache__'})
            exclude_extensions: File extensions to exclude (e.g., {'.pyc', '.tmp'})
            **kwargs: Other FileSystemAdapter arguments
        """
        super().__init__(**kwargs)
        self.exclude_dirs = set(exclude_dirs or ())
        self.exclude_extensions = set(exclude_extensions or ())

    def _accept(self, child: ChildEntry) -> bool:
        if child.is_directory:
            return child.name not in self.exclude_dirs
        return os.path.splitext(child.name)[1] not in self.exclude_extensions
