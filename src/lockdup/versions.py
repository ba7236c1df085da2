"""Version ordering used to pick override targets.

Lock file versions are npm-style semver strings and are ordered by semver
precedence: numeric ``major.minor.patch`` first, then a release above its
prereleases, then prerelease identifiers one by one (numeric identifiers
numerically and below alphanumeric ones). Strings that are not semver but
parse with packaging.version (``1.0``) sort below every semver version;
anything else (``workspace:*``, git URLs) sorts lowest, lexicographically.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from packaging.version import InvalidVersion, Version

_SEMVER = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


def _parse_version(v: str) -> Version | None:
    try:
        return Version(v)
    except InvalidVersion:
        return None


def _prerelease_key(pre: str | None) -> tuple[Any, ...]:
    if pre is None:
        return (1,)
    identifiers = tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part) for part in pre.split(".")
    )
    return (0, identifiers)


def version_key(v: str) -> tuple[Any, ...]:
    match = _SEMVER.match(v)
    if match:
        core = (int(match["major"]), int(match["minor"]), int(match["patch"]))
        return (2, core, _prerelease_key(match["pre"]), v)
    parsed = _parse_version(v)
    if parsed is not None:
        return (1, parsed, v)
    return (0, v)


def greatest(versions: Iterable[str]) -> str:
    """Return the highest version in ``versions``.

    Raises:
        ValueError: if ``versions`` is empty.
    """
    candidates = list(versions)
    if not candidates:
        raise ValueError("No versions to compare")
    return max(candidates, key=version_key)
