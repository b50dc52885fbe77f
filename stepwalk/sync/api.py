"""High-level API for StepWalk.

This module provides simple, functional interfaces for common walking
operations. These functions drive a DirectoryTreeIterator, route every
recoverable error to an ErrorPolicy, and apply the configured pruning.
"""

import os
from typing import Any, Callable, Dict, Iterator, Optional, Union

from .core.adapter import TreeAdapter
from .core.iterator import DirectoryTreeIterator
from .core.node import WalkEntry
from .error_policies import ErrorPolicy, ContinueOnErrorsPolicy, _RecordingPolicy
from .._common.config import WalkConfig
from .._common.errors import EntryAccessError

PathLike = Union[str, os.PathLike]


def walk(
    root: PathLike,
    adapter: Optional[TreeAdapter] = None,
    config: Optional[WalkConfig] = None,
    policy: Optional[ErrorPolicy] = None,
) -> Iterator[WalkEntry]:
    """Walk a directory tree, yielding one WalkEntry per entry.

    This is the primary high-level function. Unreadable entries are handed
    to ``policy`` (default: ContinueOnErrorsPolicy) and the walk carries on
    unless the policy raises. Directories matching ``config.prune`` are
    yielded but not descended into.

    Args:
        root: Directory to walk
        adapter: Tree adapter (defaults to a FileSystemAdapter)
        config: Walk configuration
        policy: What to do with entries that cannot be read

    Yields:
        WalkEntry instances in pre-order

    Raises:
        NotADirectory: If ``root`` is not a directory

    Example:
        >>> config = WalkConfig(prune=lambda e: os.path.basename(e.path) == ".git")
        >>> for entry in walk("/home/user/project", config=config):
        ...     print(entry.path)
    """
    config = config or WalkConfig()
    policy = policy or ContinueOnErrorsPolicy()

    with DirectoryTreeIterator(root, adapter=adapter, config=config) as iterator:
        while True:
            try:
                entry = iterator.next_entry()
            except EntryAccessError as e:
                policy.handle(e)
                continue
            if entry is None:
                return
            if entry.is_directory and config.prune is not None and config.prune(entry):
                iterator.skip_subtree()
            yield entry


def walk_paths(root: PathLike, **kwargs) -> Iterator[str]:
    """Walk a tree and yield only the paths.

    Args:
        root: Directory to walk
        **kwargs: Options accepted by walk()

    Yields:
        Entry paths in pre-order
    """
    for entry in walk(root, **kwargs):
        yield entry.path


def count_entries(root: PathLike, **kwargs) -> int:
    """Count the entries under a directory.

    Args:
        root: Directory to walk
        **kwargs: Options accepted by walk()

    Returns:
        Number of entries produced
    """
    count = 0
    for _ in walk(root, **kwargs):
        count += 1
    return count


def find_entries(
    root: PathLike,
    predicate: Callable[[WalkEntry], bool],
    **kwargs
) -> Iterator[WalkEntry]:
    """Find entries that match a predicate.

    Non-matching directories are still descended into; use
    ``WalkConfig.prune`` to cut whole subtrees.

    Example:
        >>> for entry in find_entries("/srv", lambda e: e.path.endswith(".log")):
        ...     print(entry.path)
    """
    for entry in walk(root, **kwargs):
        if predicate(entry):
            yield entry


def get_tree_stats(root: PathLike, **kwargs) -> Dict[str, Any]:
    """Get statistics about a directory tree.

    Args:
        root: Directory to walk
        **kwargs: Options accepted by walk()

    Returns:
        Dictionary with entry counts, depth histogram and error count.
        ``errors`` is only counted when the policy records errors.
    """
    policy = kwargs.pop('policy', None) or ContinueOnErrorsPolicy(verbose=False)
    stats = {
        'total_entries': 0,
        'directories': 0,
        'files': 0,
        'max_depth': 0,
        'depths': {},
        'errors': 0,
    }

    for entry in walk(root, policy=policy, **kwargs):
        stats['total_entries'] += 1
        if entry.is_directory:
            stats['directories'] += 1
        else:
            stats['files'] += 1

        stats['max_depth'] = max(stats['max_depth'], entry.depth)
        stats['depths'][entry.depth] = stats['depths'].get(entry.depth, 0) + 1

    if isinstance(policy, _RecordingPolicy):
        stats['errors'] = len(policy.errors)

    return stats
