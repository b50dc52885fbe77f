"""Single-call filesystem operations.

Thin wrappers over ``os``/``shutil`` that translate ``OSError`` into
StepWalk's FileOpError family, for code that consumes a walk (sync and
backup tools moving and copying what the iterator found).
"""

import os
import shutil
import stat
import tempfile
from enum import Enum
from typing import BinaryIO, Optional, Tuple, Union

from .._common.errors import FileOpError, NotFoundError, ExistsError

PathLike = Union[str, os.PathLike]


class FileType(Enum):
    """Kinds of object that can be found at a path."""
    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    OTHER = "other"
    NOT_FOUND = "not_found"


def get_type(path: PathLike) -> FileType:
    """Check what a path points to, without following a final symlink.

    Raises:
        FileOpError: If the path cannot be inspected
    """
    try:
        mode = os.lstat(path).st_mode
    except (FileNotFoundError, NotADirectoryError):
        return FileType.NOT_FOUND
    except OSError as e:
        raise FileOpError(f'Failed to get the type of "{os.fspath(path)}"', e) from e

    if stat.S_ISLNK(mode):
        return FileType.SYMLINK
    if stat.S_ISDIR(mode):
        return FileType.DIRECTORY
    if stat.S_ISREG(mode):
        return FileType.FILE
    return FileType.OTHER


def is_directory(path: PathLike) -> bool:
    """True if the path is a directory (following symlinks)."""
    return _stat_is(path, stat.S_ISDIR, "a directory")


def is_file(path: PathLike) -> bool:
    """True if the path is a regular file (following symlinks)."""
    return _stat_is(path, stat.S_ISREG, "a file")


def is_symlink(path: PathLike) -> bool:
    """True if the path itself is a symlink."""
    return get_type(path) is FileType.SYMLINK


def exists(path: PathLike) -> bool:
    """True if anything, including a dangling symlink, is at the path."""
    return get_type(path) is not FileType.NOT_FOUND


def size(path: PathLike) -> int:
    """Return the size of a file in bytes.

    Raises:
        NotFoundError: If nothing is at the path, or it is not a file
        FileOpError: On I/O error
    """
    if not exists(path):
        raise NotFoundError(f'"{os.fspath(path)}" does not exist.')
    if not is_file(path):
        raise NotFoundError(f'"{os.fspath(path)}" is not a file.')
    try:
        return os.stat(path).st_size
    except OSError as e:
        raise FileOpError(f'Failed to determine the file size of "{os.fspath(path)}"', e) from e


def move(src: PathLike, dst: PathLike) -> None:
    """Move a file, directory or symlink.

    A no-op when both paths are the same.

    Raises:
        ExistsError: If the destination already exists
        FileOpError: On I/O error
    """
    if os.fspath(src) == os.fspath(dst):
        return
    if exists(dst):
        raise ExistsError(f'Move destination "{os.fspath(dst)}" already exists')
    try:
        shutil.move(os.fspath(src), os.fspath(dst))
    except OSError as e:
        raise FileOpError(f'Failed to move "{os.fspath(src)}" to "{os.fspath(dst)}".', e) from e


def copy(src: PathLike, dst: PathLike) -> None:
    """Copy a file, directory (recursively) or symlink.

    Symlinks are copied as links, both at the top level and inside
    directories. A no-op when both paths are the same.

    Raises:
        NotFoundError: If the source does not exist
        ExistsError: If the destination already exists
        FileOpError: On I/O error
    """
    if os.fspath(src) == os.fspath(dst):
        return
    if exists(dst):
        raise ExistsError(f'Copy destination "{os.fspath(dst)}" already exists')

    kind = get_type(src)
    try:
        if kind is FileType.NOT_FOUND:
            raise NotFoundError(f'Copy source "{os.fspath(src)}" does not exist')
        elif kind is FileType.SYMLINK:
            os.symlink(os.readlink(src), dst)
        elif kind is FileType.DIRECTORY:
            shutil.copytree(src, dst, symlinks=True)
        else:
            shutil.copy2(src, dst)
    except FileOpError:
        raise
    except OSError as e:
        raise FileOpError(
            f'Failed to copy "{os.fspath(src)}" to destination "{os.fspath(dst)}"', e
        ) from e


def remove(path: PathLike) -> bool:
    """Remove a file, symlink or directory (recursively).

    Returns:
        False if nothing existed at the path, True otherwise

    Raises:
        FileOpError: On I/O error
    """
    kind = get_type(path)
    if kind is FileType.NOT_FOUND:
        return False
    try:
        if kind is FileType.DIRECTORY:
            shutil.rmtree(path)
        else:
            os.remove(path)
    except OSError as e:
        raise FileOpError(f'Failed to remove "{os.fspath(path)}"', e) from e
    return True


def create_symlink(path: PathLike, target: PathLike) -> None:
    """Create a symlink at ``path`` pointing to ``target``.

    The target does not have to exist.

    Raises:
        ExistsError: If something already exists at ``path``
        FileOpError: On I/O error
    """
    if exists(path):
        raise ExistsError(f'Symlink path "{os.fspath(path)}" already exists')
    try:
        os.symlink(target, path)
    except OSError as e:
        raise FileOpError(
            f'Failed to create symlink at "{os.fspath(path)}" with target "{os.fspath(target)}"', e
        ) from e


def create_directory(path: PathLike) -> bool:
    """Create a directory and any missing parents.

    Returns:
        True if the directory was created, False if it already existed

    Raises:
        ExistsError: If a non-directory is at the path
        FileOpError: On I/O error
    """
    if exists(path):
        if is_directory(path):
            return False
        raise ExistsError(f'A file/symlink already exists at the path "{os.fspath(path)}"')
    try:
        os.makedirs(path)
    except OSError as e:
        raise FileOpError(f'Failed to create directory "{os.fspath(path)}"', e) from e
    return True


def make_temp(base_dir: Optional[PathLike] = None) -> Tuple[str, BinaryIO]:
    """Create a temporary file.

    Args:
        base_dir: Directory to create it in (default: the system temp dir)

    Returns:
        ``(path, file)`` where ``file`` is open for binary writing. The
        caller closes and deletes it.

    Raises:
        FileOpError: On I/O error
    """
    try:
        fd, path = tempfile.mkstemp(dir=base_dir)
    except OSError as e:
        raise FileOpError("Failed to create a temporary file", e) from e
    return path, os.fdopen(fd, 'wb')


def parent_dir(path: PathLike) -> str:
    """Return the parent directory of a path.

    Trailing separators are ignored, so ``"a/b/"`` gives ``"a"``. A bare
    name gives ``"."``.
    """
    parent = os.path.dirname(os.path.normpath(os.fspath(path)))
    return parent or os.curdir


def _stat_is(path: PathLike, predicate, what: str) -> bool:
    try:
        return predicate(os.stat(path).st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        raise FileOpError(f'Failed to determine if "{os.fspath(path)}" is {what}', e) from e
