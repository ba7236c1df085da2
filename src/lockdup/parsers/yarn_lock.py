"""Parse yarn.lock text (classic v1 and berry) to capture resolved dependencies."""

from __future__ import annotations

import logging

from ..models import NoMatch, PackageRecord
from .keys import split_package_name

logger = logging.getLogger(__name__)

VERSION_FIELD = "  version"


def read_version_field(line: str) -> str | None:
    """Return the value of a ``version`` field line, or None if it is not one.

    Accepts ``  version "1.0.0"`` (v1) and ``  version: 1.0.0`` (berry);
    surrounding double quotes are removed.
    """
    if not line.startswith(VERSION_FIELD):
        return None
    if line[len(VERSION_FIELD) : len(VERSION_FIELD) + 1] not in (" ", ":"):
        return None
    value = line[len(VERSION_FIELD) + 1 :].strip()
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        value = value[1:-1]
    return value or None


def parse(text: str) -> list[PackageRecord]:
    """Return list of records from yarn lock text.

    Every non-indented line is an entry header such as
    ``"foo@^1.0.0", "foo@^1.1.0":``; the line right after it must be the
    ``version`` field or the entry is skipped.
    """
    lines = text.splitlines()
    records: list[PackageRecord] = []

    for index, line in enumerate(lines):
        if not line or line.startswith((" ", "#")):
            continue

        name = split_package_name(line)
        if isinstance(name, NoMatch):
            logger.debug("Skipping yarn entry: %s", name.reason)
            continue

        following = lines[index + 1] if index + 1 < len(lines) else ""
        version = read_version_field(following)
        if version is None:
            logger.debug("Skipping yarn entry %r: no version field follows", line)
            continue
        records.append(PackageRecord(name, version))

    return records
