# -*- coding: utf-8 -*-
"""Define project metadata
"""

__title__ = "filerepo"
__summary__ = "A directory of files indexed by lazily computed content hashes."
__url__ = ""

__version__ = "0.1.0"

__install_requires__ = ["fs>=2.4.16", "setuptools<81"]
__tests_require__ = ["pytest", "tox"]

__author__ = "filerepo developers"
__email__ = ""

__license__ = "MIT License"
