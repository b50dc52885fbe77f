"""Tests for per-entry error isolation.

A failing entry is reported once, the iterator has already moved past it,
and every other reachable entry is still produced. Failures are injected
through FakeTreeAdapter; the permission-based test only runs where file
modes are actually enforced.
"""

import os
import stat
import sys

import pytest

from stepwalk.sync import (
    DirectoryTreeIterator,
    EntryAccessError,
    DirectoryReadError,
    TreeAdapter,
    DirectoryCursor,
    ChildEntry,
)
from stepwalk.testing import (
    STANDARD_TREE,
    FakeTreeAdapter,
    build_tree,
    spec_paths,
    relative_paths,
    drain,
)

ALL_PATHS = spec_paths(STANDARD_TREE, "root")


class TestUnreadableDirectory:
    """A directory that cannot be opened loses only its contents."""

    def test_error_reported_once(self):
        adapter = FakeTreeAdapter(STANDARD_TREE, unreadable_dirs={"root/dir1"})

        paths, errors = drain(DirectoryTreeIterator("root", adapter=adapter))

        assert [e.path for e in errors] == ["root/dir1"]
        assert isinstance(errors[0].cause, PermissionError)
        assert set(paths) == ALL_PATHS - {"root/dir1/b", "root/dir1/sub", "root/dir1/sub/d"}

    def test_directory_itself_is_produced(self):
        adapter = FakeTreeAdapter(STANDARD_TREE, unreadable_dirs={"root/dir2"})

        paths, _ = drain(DirectoryTreeIterator("root", adapter=adapter))

        assert "root/dir2" in paths
        assert "root/dir2/c" not in paths

    def test_nested_unreadable_directory(self):
        adapter = FakeTreeAdapter(STANDARD_TREE, unreadable_dirs={"root/dir1/sub"})

        paths, errors = drain(DirectoryTreeIterator("root", adapter=adapter))

        assert [e.path for e in errors] == ["root/dir1/sub"]
        assert set(paths) == ALL_PATHS - {"root/dir1/sub/d"}

    def test_no_frame_pushed_for_failed_directory(self):
        adapter = FakeTreeAdapter(STANDARD_TREE, unreadable_dirs={"root/dir1"})
        iterator = DirectoryTreeIterator("root", adapter=adapter)

        iterator.produce_next()                      # root/a
        iterator.produce_next()                      # root/dir1
        with pytest.raises(EntryAccessError):
            iterator.produce_next()

        assert iterator.open_frames == 1
        assert iterator.produce_next() == "root/dir2"


class TestUnclassifiableEntry:
    """A child whose type cannot be read is skipped by itself."""

    def test_single_entry_skipped(self):
        adapter = FakeTreeAdapter(STANDARD_TREE, unclassifiable={"root/dir1/b"})

        paths, errors = drain(DirectoryTreeIterator("root", adapter=adapter))

        assert [e.path for e in errors] == ["root/dir1/b"]
        assert set(paths) == ALL_PATHS - {"root/dir1/b"}

    def test_unclassifiable_directory_skips_subtree(self):
        adapter = FakeTreeAdapter(STANDARD_TREE, unclassifiable={"root/dir1"})

        paths, errors = drain(DirectoryTreeIterator("root", adapter=adapter))

        assert [e.path for e in errors] == ["root/dir1"]
        assert set(paths) == {"root/a", "root/dir2", "root/dir2/c"}

    def test_many_failures(self):
        adapter = FakeTreeAdapter(
            STANDARD_TREE,
            unclassifiable={"root/a", "root/dir2/c"},
            unreadable_dirs={"root/dir1/sub"},
        )

        paths, errors = drain(DirectoryTreeIterator("root", adapter=adapter))

        assert sorted(e.path for e in errors) == ["root/a", "root/dir1/sub", "root/dir2/c"]
        assert set(paths) == {"root/dir1", "root/dir1/b", "root/dir1/sub", "root/dir2"}
        assert len(paths) == len(set(paths))


class TestBrokenListing:
    """A listing that fails midway drops the rest of that directory only."""

    def test_listing_failure_pops_frame(self):
        spec = {"d": {"one": "", "two": "", "three": ""}, "z": ""}
        adapter = FakeTreeAdapter(spec, broken_listings={"root/d": 1})
        iterator = DirectoryTreeIterator("root", adapter=adapter)

        assert iterator.produce_next() == "root/d"
        assert iterator.produce_next() == "root/d/one"
        with pytest.raises(DirectoryReadError) as exc_info:
            iterator.produce_next()
        assert exc_info.value.path == "root/d"
        assert iterator.open_frames == 1

        assert iterator.produce_next() == "root/z"
        assert iterator.produce_next() is None
        assert adapter.open_count == 0

    def test_root_listing_failure_ends_walk(self):
        adapter = FakeTreeAdapter(STANDARD_TREE, broken_listings={"root": 0})
        iterator = DirectoryTreeIterator("root", adapter=adapter)

        paths, errors = drain(iterator)

        assert paths == []
        assert [e.path for e in errors] == ["root"]
        assert iterator.produce_next() is None


class _RawOSErrorAdapter(TreeAdapter):
    """Adapter that leaks a plain OSError from its cursor."""

    class _Cursor(DirectoryCursor):
        def __init__(self):
            self._calls = 0

        def __next__(self):
            self._calls += 1
            if self._calls == 1:
                return ChildEntry("f", "top/f", False)
            raise OSError(5, "Input/output error")

    def is_directory(self, path):
        return path == "top"

    def exists(self, path):
        return path in ("top", "top/f")

    def open_directory(self, path):
        return self._Cursor()


class TestForeignErrors:
    """Plain OSErrors from an adapter are still isolated."""

    def test_raw_oserror_becomes_directory_read_error(self):
        iterator = DirectoryTreeIterator("top", adapter=_RawOSErrorAdapter())

        assert iterator.produce_next() == "top/f"
        with pytest.raises(DirectoryReadError) as exc_info:
            iterator.produce_next()
        assert exc_info.value.path == "top"
        assert exc_info.value.errno == 5
        assert iterator.produce_next() is None


class TestErrorAttributes:
    """EntryAccessError carries the path and cause."""

    def test_fields(self):
        cause = PermissionError(13, "Permission denied")
        error = EntryAccessError("some/path", cause)

        assert error.path == "some/path"
        assert error.cause is cause
        assert error.errno == 13
        assert "some/path" in str(error)
        assert isinstance(error, OSError)

    def test_without_cause(self):
        error = EntryAccessError("p")
        assert error.cause is None
        assert str(error) == 'Failed to access "p"'


@pytest.mark.skipif(sys.platform == "win32" or not hasattr(os, "geteuid") or os.geteuid() == 0,
                    reason="file modes are not enforced for root or on Windows")
class TestPermissionDenied:
    """Real permission failures on disk."""

    def test_permission_stripped_directory(self, tmp_path):
        build_tree(tmp_path, {
            "a": "",
            "noacc": {"hidden": ""},
            "dir2": {"c": ""},
        })
        noacc = tmp_path / "noacc"
        noacc.chmod(0)
        try:
            paths, errors = drain(DirectoryTreeIterator(tmp_path))
        finally:
            noacc.chmod(stat.S_IRWXU)

        assert [e.path for e in errors] == [str(noacc)]
        assert isinstance(errors[0].cause, PermissionError)
        assert relative_paths(paths, tmp_path) == {"a", "noacc", "dir2", "dir2/c"}
