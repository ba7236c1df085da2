"""Parse pnpm-lock.yaml text to capture resolved dependencies."""

from __future__ import annotations

import logging

from ..models import NoMatch, PackageRecord
from .keys import decode_composite_entry

logger = logging.getLogger(__name__)

PACKAGES_HEADER = "packages:"
ENTRY_INDENT = "  "


def parse(text: str) -> list[PackageRecord]:
    """Return list of records from the ``packages:`` block of a pnpm lock file.

    Entry headers are the lines indented by exactly one level inside the block,
    e.g. ``  /foo@1.0.0:`` (v6) or ``  foo@1.0.0(react@18.2.0):`` (v9).
    Deeper lines are entry fields and are ignored. Other top level sections
    such as ``importers:`` or ``snapshots:`` end the block.
    """
    records: list[PackageRecord] = []
    in_packages = False

    for line in text.splitlines():
        if not line.strip():
            continue
        if not line.startswith(" "):
            in_packages = line.rstrip() == PACKAGES_HEADER
            continue
        if not in_packages:
            continue
        if not line.startswith(ENTRY_INDENT) or line[len(ENTRY_INDENT)] == " ":
            continue

        decoded = decode_composite_entry(line[len(ENTRY_INDENT) :].rstrip())
        if isinstance(decoded, NoMatch):
            logger.debug("Skipping pnpm entry: %s", decoded.reason)
            continue
        records.append(decoded)

    return records
