"""Split lock file keys into package names and versions.

Each lock file format spells "package X at version Y" its own way. The
functions here take one key (and, where the format needs it, the value stored
under that key) and return either a ``PackageRecord`` or a ``NoMatch`` naming
why the entry was dropped. None of them raise on malformed content.

Key shapes handled:
- npm:  ``node_modules/a/node_modules/@scope/b`` with ``{"version": ...}``
- bun:  ``a/@scope/b`` with ``["@scope/b@1.0.0", ...]``
- pnpm: ``/name@1.0.0``, ``name@1.0.0(peer@2.0.0)``, ``'@scope/name@1.0.0'``
- yarn: ``name@^1.0.0, name@^1.1.0`` with ``{"version": ...}``
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from ..models import Decoded, NoMatch, PackageRecord

NPM_PATH_PREFIX = "node_modules/"

# A version (or specifier) ends at a closing quote, the next specifier of a
# multi-specifier yarn key, a pnpm peer suffix or the YAML key colon.
_VERSION_END = re.compile(r"['\",(:]")
_QUOTES = ("'", '"')


def trailing_package_name(path: str) -> str:
    """Return the last one or two path segments, joined when scoped."""
    parts = path.split("/")
    if len(parts) >= 2 and parts[-2].startswith("@"):
        return f"{parts[-2]}/{parts[-1]}"
    return parts[-1]


def _split_at_version(ref: str) -> tuple[str, str] | None:
    # Search from index 1 so the "@" of a scoped name is not the separator.
    idx = ref.find("@", 1)
    if idx <= 0:
        return None
    return ref[:idx], ref[idx + 1 :]


def split_package_name(key: str) -> str | NoMatch:
    """Return the name part of a possibly quoted ``name@specifier`` key.

    Unlike ``split_composite_key`` an empty specifier is accepted, so a yarn
    header like ``"foo@":`` still names ``foo``.
    """
    ref = key[1:] if key[:1] in _QUOTES else key
    split = _split_at_version(ref)
    if split is None:
        return NoMatch(f"no name@version separator in {key!r}")
    return split[0]


def split_composite_key(key: str) -> tuple[str, str] | NoMatch:
    """Split a pnpm/yarn style ``name@version`` key.

    A leading quote and a leading ``/`` are stripped. Everything after the
    first terminator (quote, comma, ``(`` or ``:``) is discarded, which drops
    pnpm peer-dependency suffixes and the extra specifiers of yarn keys.
    """
    ref = key
    if ref[:1] in _QUOTES:
        ref = ref[1:]
    if ref.startswith("/"):
        ref = ref[1:]

    split = _split_at_version(ref)
    if split is None:
        return NoMatch(f"no name@version separator in {key!r}")
    name, rest = split

    match = _VERSION_END.search(rest)
    version = rest[: match.start()] if match else rest
    if not version:
        return NoMatch(f"empty version in {key!r}")
    return name, version


def _companion_version(value: Any) -> str | None:
    if isinstance(value, Mapping):
        version = value.get("version")
        if isinstance(version, str) and version:
            return version
    return None


def decode_npm_entry(key: str, value: Any) -> Decoded:
    """Decode an npm ``packages`` entry; the version lives on the value."""
    if not key.startswith(NPM_PATH_PREFIX):
        return NoMatch(f"{key!r} is not under {NPM_PATH_PREFIX}")
    name = trailing_package_name(key)
    if not name:
        return NoMatch(f"empty package name in {key!r}")
    version = _companion_version(value)
    if version is None:
        return NoMatch(f"{key!r} has no version field")
    return PackageRecord(name, version)


def decode_legacy_npm_entry(name: str, value: Any) -> Decoded:
    """Decode an npm v1 ``dependencies`` entry keyed by the bare name."""
    if not name:
        return NoMatch("empty package name")
    version = _companion_version(value)
    if version is None:
        return NoMatch(f"{name!r} has no version field")
    return PackageRecord(name, version)


def decode_bun_entry(key: str, value: Any) -> Decoded:
    """Decode a bun ``packages`` entry.

    The name comes from the key, the version from the ``name@version``
    identifier stored as the first element of the value.
    """
    name = trailing_package_name(key)
    if not name:
        return NoMatch(f"empty package name in {key!r}")
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or not value:
        return NoMatch(f"{key!r} has no identifier array")
    ident = value[0]
    if not isinstance(ident, str):
        return NoMatch(f"{key!r} identifier is not a string")
    split = _split_at_version(ident)
    if split is None or not split[1]:
        return NoMatch(f"no version in identifier {ident!r}")
    return PackageRecord(name, split[1])


def decode_composite_entry(
    key: str,
    value: Any = None,
    *,
    specifier_in_key: bool = False,
    require_resolved: bool = False,
) -> Decoded:
    """Decode a pnpm or yarn composite key.

    pnpm keys carry the resolved version. Yarn keys carry a dependency
    specifier (``specifier_in_key=True``); the ``version`` field of the entry's
    value replaces it when present. With ``require_resolved`` a specifier that
    cannot be replaced drops the record instead of being reported.
    """
    split = split_composite_key(key)
    if isinstance(split, NoMatch):
        return split
    name, version = split
    if not specifier_in_key:
        return PackageRecord(name, version)

    resolved = _companion_version(value)
    if resolved is not None:
        return PackageRecord(name, resolved)
    if require_resolved:
        return NoMatch(f"{key!r} has a specifier but no resolved version")
    return PackageRecord(name, version)
