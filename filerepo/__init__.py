# -*- coding: utf-8 -*-
"""filerepo manages a directory of files indexed by content hash. Files are
found by scanning the directory once, hashed the first time their hash is
asked for, and rehashed only when saved through the repository.

Typical use cases for this kind of system are ones where:

- A caller needs to know whether file content changed since it last looked.
- Re-reading and re-hashing every file on each check is too slow.
- The set of files changes mostly through the caller itself.
"""

from .__meta__ import (
    __title__,
    __summary__,
    __url__,
    __version__,
    __author__,
    __email__,
    __license__,
)

from .exceptions import RepoError, RootError, ScanError
from .filerepo import Repo
from .utils import ReadWriteLock, hash64


__all__ = (
    "Repo",
    "ReadWriteLock",
    "RepoError",
    "RootError",
    "ScanError",
    "hash64",
)
