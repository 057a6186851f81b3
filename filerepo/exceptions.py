# -*- coding: utf-8 -*-
"""Exceptions raised by filerepo.
"""


class RepoError(Exception):
    """Base class for repository errors."""


class RootError(RepoError):
    """The repository root could not be opened or created."""


class ScanError(RepoError):
    """The initial scan of the repository root failed."""
