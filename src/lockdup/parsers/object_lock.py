"""Extract package records from an already-parsed lock file mapping.

Covers npm package-lock.json (v2/v3 ``packages`` paths and the v1
``dependencies`` tree), bun.lock, pnpm in object form and yarn in object form.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from functools import partial
from typing import Any

from ..classify import (
    LEGACY_DEPENDENCIES_FIELD,
    PACKAGES_FIELD,
    LockFormat,
    classify_mapping,
)
from ..models import Decoded, NoMatch, PackageRecord
from .keys import (
    decode_bun_entry,
    decode_composite_entry,
    decode_legacy_npm_entry,
    decode_npm_entry,
)

logger = logging.getLogger(__name__)

EntryDecoder = Callable[[str, Any], Decoded]


def _table_decoder(fmt: LockFormat, require_resolved: bool) -> EntryDecoder | None:
    if fmt is LockFormat.NPM:
        return decode_npm_entry
    if fmt is LockFormat.BUN:
        return decode_bun_entry
    if fmt is LockFormat.PNPM_OBJECT:
        return decode_composite_entry
    if fmt is LockFormat.YARN_OBJECT:
        return partial(
            decode_composite_entry,
            specifier_in_key=True,
            require_resolved=require_resolved,
        )
    return None


def _collect_legacy(deps: Mapping[str, Any], records: list[PackageRecord]) -> None:
    for name, meta in deps.items():
        decoded = decode_legacy_npm_entry(name, meta)
        if isinstance(decoded, NoMatch):
            logger.debug("Skipping entry: %s", decoded.reason)
        else:
            records.append(decoded)
        if isinstance(meta, Mapping):
            nested = meta.get(LEGACY_DEPENDENCIES_FIELD)
            if isinstance(nested, Mapping):
                _collect_legacy(nested, records)


def parse(
    data: Mapping[str, Any],
    fmt: LockFormat | None = None,
    *,
    require_resolved: bool = False,
) -> list[PackageRecord]:
    """Return one record per resolved dependency entry in ``data``.

    ``fmt`` is detected with ``classify_mapping`` when not given.
    ``require_resolved`` drops yarn entries whose key specifier has no
    resolved ``version`` companion.
    """
    if fmt is None:
        fmt = classify_mapping(data)
    logger.debug("Extracting records from %s mapping", fmt.value)

    records: list[PackageRecord] = []
    if fmt is LockFormat.NPM_LEGACY:
        deps = data.get(LEGACY_DEPENDENCIES_FIELD)
        if isinstance(deps, Mapping):
            _collect_legacy(deps, records)
        return records

    decode = _table_decoder(fmt, require_resolved)
    table = data if fmt is LockFormat.YARN_OBJECT else data.get(PACKAGES_FIELD)
    if decode is None or not isinstance(table, Mapping):
        return records

    for key, value in table.items():
        if not isinstance(key, str) or not key:
            continue
        decoded = decode(key, value)
        if isinstance(decoded, NoMatch):
            logger.debug("Skipping entry: %s", decoded.reason)
            continue
        records.append(decoded)

    return records
