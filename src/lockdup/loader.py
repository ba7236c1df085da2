"""Read lock files from disk into text for the core."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

BINARY_LOCKFILES = {"bun.lockb"}


class LockfileReadError(RuntimeError):
    """Raised when a lock file cannot be read or materialized as text."""


def _print_binary_lockfile(path: Path, bun_binary: str) -> str:
    # `bun bun.lockb` prints the lock file in yarn v1 format.
    cmd = [bun_binary, path.name]
    logger.debug("Running %s in %s", " ".join(cmd), path.parent)
    try:
        completed = subprocess.run(
            cmd,
            cwd=path.parent,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=True,
        )
    except FileNotFoundError as exc:
        raise LockfileReadError(
            f"Cannot read {path.name}: '{bun_binary}' executable not found"
        ) from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
        raise LockfileReadError(f"Failed to print {path.name} with bun: {detail}") from exc
    return completed.stdout


def read_lockfile(path: Path, bun_binary: str = "bun") -> str:
    """Return the text content of ``path``.

    Binary bun lock files are converted to text by the ``bun`` executable.

    Raises:
        LockfileReadError: if the file cannot be read or converted.
    """
    if path.name in BINARY_LOCKFILES:
        return _print_binary_lockfile(path, bun_binary)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LockfileReadError(f"Failed to read {path}: {exc}") from exc
