"""Lock file discovery utilities."""

from __future__ import annotations

from pathlib import Path

# Checked in order; the first lock file present wins.
LOCKFILE_NAMES = (
    "pnpm-lock.yaml",
    "package-lock.json",
    "yarn.lock",
    "bun.lock",
    "bun.lockb",
)


def find_lockfile(root: Path) -> Path | None:
    """Return the highest-priority lock file directly under ``root``, if any."""
    root = root.resolve()
    for name in LOCKFILE_NAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def resolve_root(directory: str | None) -> Path:
    """Return ``directory`` when it names an existing directory, else the cwd."""
    if directory:
        path = Path(directory)
        if path.is_dir():
            return path.resolve()
    return Path.cwd()
