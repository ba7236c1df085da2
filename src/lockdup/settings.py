"""Runtime configuration read from environment variables.

``DUP_EVIL``                 truthy value enables writing overrides
``LOCKDUP_SPECIFIER_POLICY`` ``keep`` (default) or ``require-resolved``
``LOCKDUP_BUN_BINARY``       executable used to print bun.lockb (default ``bun``)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .core import SpecifierPolicy

APPLY_OVERRIDES_ENV_VAR = "DUP_EVIL"
SPECIFIER_POLICY_ENV_VAR = "LOCKDUP_SPECIFIER_POLICY"
BUN_BINARY_ENV_VAR = "LOCKDUP_BUN_BINARY"

_TRUTHY = {"1", "true", "yes", "y"}


class ConfigError(RuntimeError):
    """Raised when an environment variable holds an invalid value."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    apply_overrides: bool = False
    specifier_policy: SpecifierPolicy = SpecifierPolicy.KEEP
    bun_binary: str = "bun"


def _parse_policy(raw: str) -> SpecifierPolicy:
    try:
        return SpecifierPolicy(raw)
    except ValueError as exc:
        known = ", ".join(p.value for p in SpecifierPolicy)
        raise ConfigError(
            f"Invalid {SPECIFIER_POLICY_ENV_VAR} value {raw!r}. Expected one of: {known}"
        ) from exc


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build ``Settings`` from ``environ`` (defaults to ``os.environ``).

    Raises:
        ConfigError: if the specifier policy or bun binary is invalid.
    """
    env = os.environ if environ is None else environ

    apply_overrides = env.get(APPLY_OVERRIDES_ENV_VAR, "").strip().lower() in _TRUTHY

    policy = SpecifierPolicy.KEEP
    raw_policy = env.get(SPECIFIER_POLICY_ENV_VAR, "").strip().lower()
    if raw_policy:
        policy = _parse_policy(raw_policy)

    bun_binary = env.get(BUN_BINARY_ENV_VAR, "bun")
    if not bun_binary.strip():
        raise ConfigError(f"{BUN_BINARY_ENV_VAR} must not be empty")

    return Settings(
        apply_overrides=apply_overrides,
        specifier_policy=policy,
        bun_binary=bun_binary.strip(),
    )
