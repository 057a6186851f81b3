# -*- coding: utf-8 -*-


"""
common utils for filerepo
"""


import hashlib
import os
import threading
from contextlib import contextmanager
from typing import Iterable, Optional, Union

import fs as pyfs
import fs.base
import fs.errors
import fs.info
import fs.opener.errors
import fs.osfs
import fs.path

from .exceptions import RootError


def load_fs(root: Union[pyfs.base.FS, str, os.PathLike],
            dmode: int = 0o777) -> pyfs.base.FS:
    """Return a filesystem for `root`, creating the directory if needed.

    Args:
        root: An open filesystem, a filesystem URL (``mem://``) or a path
            on the local disk.
        dmode: Mode used for any directories created along the way.

    Raises:
        RootError: If the root can't be opened or created.
    """
    if isinstance(root, pyfs.base.FS):
        return root

    root = os.fspath(root)

    try:
        if "://" in root:
            return pyfs.open_fs(root, create=True)
        return pyfs.osfs.OSFS(root, create=True, create_mode=dmode)
    except (pyfs.errors.CreateFailed, pyfs.opener.errors.OpenerError) as exc:
        raise RootError("Could not open repository root {0!r}: {1}"
                        .format(root, exc)) from exc


def extension(name: str) -> str:
    """Return the extension of `name` including the leading dot, or an empty
    string. Dot-files are all extension, so ``.bashrc`` gives ``.bashrc``.
    """
    basename = pyfs.path.basename(name)
    index = basename.rfind(".")
    return basename[index:] if index >= 0 else ""


def matches(name: str, extensions: Optional[Iterable[str]]) -> bool:
    """Return whether `name` passes the extension filter. An empty filter
    lets everything through.
    """
    if not extensions:
        return True
    return extension(name) in extensions


def is_link(info: pyfs.info.Info) -> bool:
    """Return whether `info` describes a symlink. Filesystems that don't
    report the ``link`` namespace have no symlinks.
    """
    return info.has_namespace("link") and info.is_link


def to_key(path: str) -> str:
    """Normalize `path` to the form used as an index key: forward slashes,
    no leading slash, no ``.`` or ``..`` segments.

    Raises:
        fs.errors.IllegalBackReference: If `path` escapes the root.
    """
    return pyfs.path.relpath(pyfs.path.normpath(path))


def hash64(data: bytes, algorithm: str = "blake2b") -> int:
    """Hash `data` to an unsigned 64-bit integer using the first 8 bytes of
    a ``hashlib`` digest.
    """
    digest = hashlib.new(algorithm, data).digest()
    return int.from_bytes(digest[:8], "big")


class ReadWriteLock(object):
    """Lock allowing many concurrent readers or a single writer.

    Waiting writers block new readers, so a steady stream of readers can't
    starve a writer. Not reentrant.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if not self._readers:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self):
        """Hold the shared lock for the duration of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        """Hold the exclusive lock for the duration of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
