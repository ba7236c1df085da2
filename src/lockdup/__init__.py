"""lockdup core package.

Finds packages resolved to more than one version in npm, pnpm, yarn and bun
lock files. ``find_duplicates`` is the entrypoint; the ``dup`` command line
tool wraps it with lock file discovery and override writing.
"""

from .core import SpecifierPolicy, find_duplicates
from .models import InvalidInputKind
from .report import DuplicateReport

__version__ = "0.1.0"

__all__ = [
    "DuplicateReport",
    "InvalidInputKind",
    "SpecifierPolicy",
    "find_duplicates",
]
