"""Core duplicate-detection entrypoints.

This module performs no I/O: it accepts lock file content already read by the
caller, either as raw text or as a decoded mapping, and returns the packages
resolved to more than one version.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .classify import BOM, LockFormat, classify_text
from .models import LockInput, PackageRecord, StructuredInput, coerce_input
from .parsers import object_lock, pnpm_lock, yarn_lock
from .parsers.lenient_json import LenientJSONError, parse_lenient_json
from .report import DuplicateReport, aggregate

logger = logging.getLogger(__name__)


class SpecifierPolicy(Enum):
    """What to report when a yarn key has a specifier but no resolved version."""

    KEEP = "keep"
    REQUIRE_RESOLVED = "require-resolved"


def _records_from_mapping(
    data: Mapping[str, Any], policy: SpecifierPolicy
) -> list[PackageRecord]:
    return object_lock.parse(
        data, require_resolved=policy is SpecifierPolicy.REQUIRE_RESOLVED
    )


def _records_from_text(text: str, policy: SpecifierPolicy) -> list[PackageRecord]:
    text = text.removeprefix(BOM)
    fmt = classify_text(text)
    logger.debug("Detected %s lock file", fmt.value)

    if fmt is LockFormat.JSON_TEXT:
        try:
            data = parse_lenient_json(text)
        except LenientJSONError as exc:
            logger.warning("Failed to parse lock file as JSON: %s", exc)
            return []
        if not isinstance(data, Mapping):
            logger.warning("Lock file JSON is not an object")
            return []
        return _records_from_mapping(data, policy)
    if fmt is LockFormat.PNPM_TEXT:
        return pnpm_lock.parse(text)
    if fmt is LockFormat.YARN_TEXT:
        return yarn_lock.parse(text)
    return []


def extract_records(
    lock_input: LockInput,
    specifier_policy: SpecifierPolicy = SpecifierPolicy.KEEP,
) -> list[PackageRecord]:
    """Return every (name, version) record found in ``lock_input``, in scan order."""
    if isinstance(lock_input, StructuredInput):
        return _records_from_mapping(lock_input.mapping, specifier_policy)
    return _records_from_text(lock_input.text, specifier_policy)


def find_duplicates(
    lockfile: Any,
    *,
    specifier_policy: SpecifierPolicy = SpecifierPolicy.KEEP,
) -> DuplicateReport:
    """Find packages resolved to more than one version.

    Params:
        lockfile: contents of pnpm-lock.yaml / package-lock.json / yarn.lock /
            bun.lock as text, or an already-decoded lock file mapping
        specifier_policy: whether yarn specifiers without a resolved version
            are reported as-is or dropped

    Returns: mapping of package name -> distinct versions in first-seen order,
        e.g. ``{"foo": ["1.0.0", "2.0.0"]}``

    Raises:
        InvalidInputKind: if ``lockfile`` is neither text nor a mapping.
    """
    lock_input = coerce_input(lockfile)
    return aggregate(extract_records(lock_input, specifier_policy))
