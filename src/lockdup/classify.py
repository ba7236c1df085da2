"""Decide which lock file convention applies to an input.

All format markers live here so that detection is one auditable decision.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from .parsers.keys import NPM_PATH_PREFIX

logger = logging.getLogger(__name__)

BOM = "\ufeff"
LOCKFILE_VERSION_FIELD = "lockfileVersion"
PACKAGES_FIELD = "packages"
LEGACY_DEPENDENCIES_FIELD = "dependencies"
NPM_ROOT_KEY = ""
PNPM_HEADER_TOKEN = "lockfileVersion"
YARN_BANNER = "yarn lockfile"
YARN_METADATA = "__metadata"
JSON_OBJECT_START = "{"


class LockFormat(Enum):
    """Lock file conventions understood by the extractors."""

    NPM = "npm"
    NPM_LEGACY = "npm-legacy"
    BUN = "bun"
    PNPM_OBJECT = "pnpm-object"
    YARN_OBJECT = "yarn-object"
    PNPM_TEXT = "pnpm-text"
    YARN_TEXT = "yarn-text"
    JSON_TEXT = "json-text"
    UNKNOWN = "unknown"


def _is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def classify_mapping(data: Mapping[str, Any]) -> LockFormat:
    """Classify an already-parsed lock file.

    Without a ``lockfileVersion`` field the mapping itself is the package
    table (yarn keys). Otherwise the ``packages`` table is probed: an npm root
    key or ``node_modules/`` paths mean npm, array values mean bun, anything
    else is treated as pnpm composite keys.
    """
    if LOCKFILE_VERSION_FIELD not in data:
        return LockFormat.YARN_OBJECT

    packages = data.get(PACKAGES_FIELD)
    if not isinstance(packages, Mapping):
        if isinstance(data.get(LEGACY_DEPENDENCIES_FIELD), Mapping):
            return LockFormat.NPM_LEGACY
        return LockFormat.UNKNOWN

    if NPM_ROOT_KEY in packages or any(
        isinstance(key, str) and key.startswith(NPM_PATH_PREFIX) for key in packages
    ):
        return LockFormat.NPM
    if any(_is_array(value) for value in packages.values()):
        return LockFormat.BUN
    return LockFormat.PNPM_OBJECT


def classify_text(text: str) -> LockFormat:
    """Classify raw lock file text by its leading characters and markers."""
    body = text.removeprefix(BOM)
    if body.startswith(JSON_OBJECT_START):
        return LockFormat.JSON_TEXT
    if body.startswith(PNPM_HEADER_TOKEN):
        return LockFormat.PNPM_TEXT
    if YARN_BANNER in body or YARN_METADATA in body:
        return LockFormat.YARN_TEXT
    return LockFormat.UNKNOWN
