"""Data models for lock file duplicate detection."""

from __future__ import annotations

from .lock_input import (
    InvalidInputKind,
    LockInput,
    StructuredInput,
    TextInput,
    coerce_input,
)
from .package_record import Decoded, NoMatch, PackageRecord

__all__ = [
    "Decoded",
    "InvalidInputKind",
    "LockInput",
    "NoMatch",
    "PackageRecord",
    "StructuredInput",
    "TextInput",
    "coerce_input",
]
