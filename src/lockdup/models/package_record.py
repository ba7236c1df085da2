"""Package record model and the explicit "no match" decode outcome."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(slots=True, frozen=True)
class PackageRecord:
    """One resolved dependency occurrence found in a lock file."""

    name: str
    version: str


@dataclass(slots=True, frozen=True)
class NoMatch:
    """Returned by a decoder when an entry yields no record."""

    reason: str

    def __bool__(self) -> bool:
        return False


Decoded: TypeAlias = PackageRecord | NoMatch
