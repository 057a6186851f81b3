"""Module for Repo class."""

import logging
from typing import Callable, Iterable, Iterator, List, Optional, Union

import fs as pyfs
import fs.base
import fs.errors
import fs.path

import filerepo.utils as u
from filerepo.exceptions import ScanError

logger = logging.getLogger(__name__)

HashFunc = Callable[[bytes], int]


class Repo(object):
    """File repository indexed by content hash. Files under the root are
    registered at construction and hashed lazily on first request; the hash
    is then cached until the file is saved through the repository again.

    A hash of ``0`` means "not computed yet", so :meth:`hash` returns ``0``
    for unknown paths, for unreadable files and for content that really
    hashes to ``0``. Use ``path in repo`` to tell unknown paths apart.

    Attributes:
        root: Directory the repository governs. Either a local path, a
            filesystem URL such as ``mem://`` or an open ``fs.base.FS``.
        fs: Filesystem opened on `root`.
        hashfunc: Callable mapping ``bytes`` to an unsigned 64-bit ``int``.
        recursive (bool): Whether subdirectories were scanned.
        extensions (tuple): Extensions, with leading dot, that were scanned.
            Empty when every file was included.
        dmode (int): Mode used when creating the root directory. Defaults to
            ``0o777``, leaving the final permissions to the umask.

    Raises:
        ValueError: If `hashfunc` is missing.
        TypeError: If `hashfunc` isn't callable, or `extensions` is a single
            string instead of a collection.
            Also raised if `extensions` is a single string.
        RootError: If the root can't be opened or created.
        ScanError: If any directory under the root can't be listed.
    """

    def __init__(self,
                 root: Union[pyfs.base.FS, str],
                 recursive: bool = False,
                 extensions: Optional[Iterable[str]] = None,
                 hashfunc: Optional[HashFunc] = None,
                 dmode: int = 0o777):
        if hashfunc is None:
            raise ValueError("A hash function is required")
        if not callable(hashfunc):
            raise TypeError("hashfunc must be callable, got {0!r}"
                            .format(hashfunc))
        if isinstance(extensions, str):
            raise TypeError("extensions must be a collection of extensions, "
                            "got the string {0!r}".format(extensions))

        self.root = root
        self.hashfunc = hashfunc
        self.recursive = recursive
        self.extensions = tuple(extensions or ())
        self.dmode = dmode

        self._lock = u.ReadWriteLock()
        self._hashes = {}

        self.fs = u.load_fs(root, dmode=dmode)

        try:
            self._scan("/")
        except pyfs.errors.FSError as exc:
            raise ScanError("Could not scan {0!r}: {1}".format(root, exc)) \
                from exc

        logger.debug("Indexed %d file(s) under %r", len(self._hashes), root)

    def hash(self, path: str) -> int:
        """Return the hash of the file at `path`, computing and caching it on
        first access. Returns ``0`` if `path` is unknown or can't be read;
        failed reads aren't cached so the next call tries again.
        """
        try:
            key = u.to_key(path)
        except pyfs.errors.IllegalBackReference:
            return 0

        with self._lock.read_locked():
            value = self._hashes.get(key)

        if value is None:
            return 0
        if value:
            return value

        try:
            data = self.fs.readbytes(key)
        except pyfs.errors.FSError as exc:
            logger.debug("Could not hash %r: %s", key, exc)
            return 0

        value = self.hashfunc(data)

        with self._lock.write_locked():
            self._hashes[key] = value

        return value

    def read(self, path: str) -> bytes:
        """Return the content of the file at `path`. The index isn't
        consulted, so files the repository doesn't know about can be read too.

        Raises:
            fs.errors.ResourceNotFound: If the file doesn't exist.
            fs.errors.FileExpected: If `path` is a directory.
        """
        return self.fs.readbytes(path)

    def save(self, path: str, data: bytes) -> None:
        """Write `data` to `path`, replacing any existing file, and cache its
        hash. The cache is left alone if the write fails.

        New files get the filesystem's default permissions, which on a local
        disk is ``0o666`` masked by the process umask, not ``0o777``.

        Raises:
            fs.errors.ResourceNotFound: If the parent directory doesn't exist.
        """
        key = u.to_key(path)
        self.fs.writebytes(key, data)
        value = self.hashfunc(data)

        with self._lock.write_locked():
            self._hashes[key] = value

    def paths(self) -> List[str]:
        """Return a sorted snapshot of the paths known to the repository."""
        with self._lock.read_locked():
            return sorted(self._hashes)

    def __contains__(self, path: str) -> bool:
        """Return whether `path` is known to the repository, whether or not
        its hash has been computed.
        """
        try:
            key = u.to_key(path)
        except pyfs.errors.IllegalBackReference:
            return False

        with self._lock.read_locked():
            return key in self._hashes

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._hashes)

    def __repr__(self):
        return "{0}({1!r})".format(type(self).__name__, self.root)

    def _scan(self, dir_path: str) -> None:
        """Register every matching file in `dir_path`, descending into
        subdirectories when :attr:`recursive` is set. Symlinks are never
        followed; they are registered like files.
        """
        for info in self.fs.scandir(dir_path, namespaces=["link"]):
            path = pyfs.path.join(dir_path, info.name)

            if info.is_dir and not u.is_link(info):
                if self.recursive:
                    self._scan(path)
                continue

            if not u.matches(info.name, self.extensions):
                continue

            self._hashes[pyfs.path.relpath(path)] = 0
