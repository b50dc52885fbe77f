"""Testing utilities for StepWalk consumers."""

from .fixtures import (
    STANDARD_TREE,
    Symlink,
    FakeCursor,
    FakeTreeAdapter,
    build_tree,
    spec_paths,
    relative_paths,
    drain,
)

__all__ = [
    'STANDARD_TREE',
    'Symlink',
    'FakeCursor',
    'FakeTreeAdapter',
    'build_tree',
    'spec_paths',
    'relative_paths',
    'drain',
]
