"""Test fixtures for StepWalk consumers.

These fixtures build small directory trees on disk and provide an in-memory
TreeAdapter with controllable failures, so error isolation can be tested
deterministically (permission tricks do not work when running as root).

Tree specs are nested dicts: a ``str``/``bytes`` value is a file with that
content, a ``dict`` is a directory, and a ``Symlink`` is a link.

Example:
    tree = {"a": "", "dir1": {"b": ""}, "dir2": {"c": ""}}
    build_tree(tmp_path, tree)
    adapter = FakeTreeAdapter(tree, unreadable_dirs={"root/dir2"})
"""

import os
import posixpath
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Set, Tuple, Union

from ..sync.core.adapter import TreeAdapter, DirectoryCursor
from ..sync.core.iterator import DirectoryTreeIterator
from ..sync.core.node import ChildEntry
from .._common.errors import EntryAccessError, DirectoryReadError


class Symlink(NamedTuple):
    """A symlink in a tree spec. ``target`` is used verbatim."""
    target: str


TreeSpec = Mapping[str, Union[str, bytes, Symlink, 'TreeSpec']]


# The layout used by most tests:
#
# root/
# ├── a
# ├── dir1/
# │   ├── b
# │   └── sub/
# │       └── d
# └── dir2/
#     └── c
STANDARD_TREE: Dict[str, object] = {
    "a": "alpha",
    "dir1": {
        "b": "bravo",
        "sub": {"d": "delta"},
    },
    "dir2": {"c": "charlie"},
}


def build_tree(base: Union[str, Path], spec: TreeSpec) -> List[str]:
    """Materialize a tree spec under ``base``.

    Args:
        base: Existing directory to populate
        spec: Tree spec

    Returns:
        Relative paths (``/``-separated) of everything created
    """
    base = Path(base)
    created: List[str] = []

    def _build(directory: Path, node: TreeSpec, prefix: str) -> None:
        for name, value in node.items():
            path = directory / name
            rel = f"{prefix}{name}"
            created.append(rel)
            if isinstance(value, Symlink):
                os.symlink(value.target, path)
            elif isinstance(value, bytes):
                path.write_bytes(value)
            elif isinstance(value, str):
                path.write_text(value)
            else:
                path.mkdir()
                _build(path, value, rel + "/")

    _build(base, spec, "")
    return created


def spec_paths(spec: TreeSpec, root: Optional[str] = None) -> Set[str]:
    """Every path in a tree spec, ``/``-separated, optionally under ``root``."""
    paths: Set[str] = set()

    def _collect(node: TreeSpec, prefix: str) -> None:
        for name, value in node.items():
            path = posixpath.join(prefix, name) if prefix else name
            paths.add(path)
            if isinstance(value, Mapping):
                _collect(value, path)

    _collect(spec, root or "")
    return paths


def relative_paths(paths: Iterable[str], root: Union[str, Path]) -> Set[str]:
    """Express produced paths relative to ``root`` with ``/`` separators."""
    return {Path(os.path.relpath(p, root)).as_posix() for p in paths}


def drain(iterator: DirectoryTreeIterator) -> Tuple[List[str], List[EntryAccessError]]:
    """Run an iterator to completion, retrying after every recoverable error.

    Returns:
        ``(paths, errors)`` in the order they were produced
    """
    paths: List[str] = []
    errors: List[EntryAccessError] = []
    while True:
        try:
            path = iterator.produce_next()
        except EntryAccessError as e:
            errors.append(e)
            continue
        if path is None:
            return paths, errors
        paths.append(path)


class FakeCursor(DirectoryCursor):
    """Cursor over a FakeTreeAdapter directory."""

    def __init__(self, adapter: 'FakeTreeAdapter', path: str, children: List[ChildEntry]):
        self._adapter = adapter
        self.path = path
        self._children = list(children)
        self._index = 0
        self._closed = False

    def __next__(self) -> ChildEntry:
        if self._closed:
            raise StopIteration

        broken_after = self._adapter.broken_listings.get(self.path)
        if broken_after is not None and self._index >= broken_after:
            self.close()
            raise DirectoryReadError(self.path, OSError(5, "Input/output error"))

        if self._index >= len(self._children):
            self.close()
            raise StopIteration

        child = self._children[self._index]
        self._index += 1
        if child.path in self._adapter.unclassifiable:
            raise EntryAccessError(child.path, PermissionError(13, "Permission denied"))
        return child

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._adapter.closed.append(self.path)


class FakeTreeAdapter(TreeAdapter):
    """In-memory TreeAdapter over a tree spec.

    Paths are ``/``-joined under ``root``. Children are listed in the
    spec's insertion order. Symlinks are reported as non-directories.

    Failure injection:
        unreadable_dirs: directories whose open_directory() fails
        unclassifiable: child paths whose classification fails
        broken_listings: directory -> number of children listed before
            the listing itself fails
    """

    def __init__(self,
                 spec: TreeSpec,
                 root: str = "root",
                 unreadable_dirs: Iterable[str] = (),
                 unclassifiable: Iterable[str] = (),
                 broken_listings: Optional[Mapping[str, int]] = None):
        self.spec = spec
        self.root = root
        self.unreadable_dirs = set(unreadable_dirs)
        self.unclassifiable = set(unclassifiable)
        self.broken_listings = dict(broken_listings or {})
        self.opened: List[str] = []
        self.closed: List[str] = []

    def _lookup(self, path: str):
        if path == self.root:
            return self.spec
        prefix = self.root + "/"
        if not path.startswith(prefix):
            return None
        node = self.spec
        for part in path[len(prefix):].split("/"):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node

    def is_directory(self, path: str) -> bool:
        return isinstance(self._lookup(path), Mapping)

    def exists(self, path: str) -> bool:
        return self._lookup(path) is not None

    def open_directory(self, path: str) -> FakeCursor:
        if path in self.unreadable_dirs:
            raise EntryAccessError(path, PermissionError(13, "Permission denied"))
        node = self._lookup(path)
        if not isinstance(node, Mapping):
            raise EntryAccessError(path, NotADirectoryError(20, "Not a directory"))
        self.opened.append(path)
        children = [
            ChildEntry(name, posixpath.join(path, name), isinstance(value, Mapping))
            for name, value in node.items()
        ]
        return FakeCursor(self, path, children)

    def directory_key(self, path: str):
        return path

    @property
    def open_count(self) -> int:
        """Number of cursors opened and not yet closed."""
        return len(self.opened) - len(self.closed)
