"""Pin duplicated packages to one version via package manager overrides.

npm reads ``overrides``, yarn reads ``resolutions`` and pnpm reads
``pnpm.overrides`` from package.json, or ``overrides`` from
pnpm-workspace.yaml when a workspace file exists. The workspace file is never
rewritten (that would drop its comments); the lines to add are rendered for
the user instead.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .report import DuplicateReport
from .versions import greatest

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
PNPM_WORKSPACE = "pnpm-workspace.yaml"

_SECTIONS: dict[str, tuple[str, ...]] = {
    "pnpm-lock.yaml": ("pnpm", "overrides"),
    "yarn.lock": ("resolutions",),
}
_DEFAULT_SECTION = ("overrides",)


class OverridesError(RuntimeError):
    """Raised when the override target cannot be read or updated."""


@dataclass(slots=True)
class OverrideResult:
    """Outcome of an ``add_overrides`` run."""

    target: Path | None
    applied: dict[str, str] = field(default_factory=dict)
    pending: dict[str, str] = field(default_factory=dict)
    snippet: str | None = None


def pick_overrides(report: DuplicateReport) -> dict[str, str]:
    """Return the greatest version of every duplicated package."""
    return {name: greatest(versions) for name, versions in report.items()}


def _detect_indent(text: str) -> str:
    for line in text.splitlines()[1:]:
        stripped = line.lstrip(" \t")
        if stripped and stripped != line:
            return line[: len(line) - len(stripped)]
    return "  "


def _section(data: dict[str, Any], path: tuple[str, ...], file: Path) -> dict[str, Any]:
    obj = data
    for key in path:
        child = obj.get(key)
        if child is None:
            child = obj[key] = {}
        elif not isinstance(child, dict):
            raise OverridesError(f"'{'.'.join(path)}' in {file} is not an object")
        obj = child
    return obj


def edit_package_json(
    file: Path, path: tuple[str, ...], overrides: dict[str, str]
) -> OverrideResult:
    """Write ``overrides`` into the ``path`` section of package.json.

    Only changed entries are written; the section is kept sorted by name.
    """
    try:
        text = file.read_text(encoding="utf-8")
        data = json.loads(text)
    except (OSError, json.JSONDecodeError) as exc:
        raise OverridesError(f"Failed to read {file}: {exc}") from exc
    if not isinstance(data, dict):
        raise OverridesError(f"{file} must contain a JSON object")

    section = _section(data, path, file)
    applied: dict[str, str] = {}
    for name, version in overrides.items():
        if section.get(name) != version:
            section[name] = version
            applied[name] = version
            logger.debug("Override %s@%s in %s", name, version, file)

    if applied:
        ordered = sorted(section.items())
        section.clear()
        section.update(ordered)
        output = json.dumps(data, indent=_detect_indent(text), ensure_ascii=False) + "\n"
        file.write_text(output, encoding="utf-8")

    return OverrideResult(target=file, applied=applied)


def render_workspace_overrides(file: Path, overrides: dict[str, str]) -> OverrideResult:
    """Return the ``overrides:`` YAML the user should add to pnpm-workspace.yaml."""
    try:
        workspace = yaml.safe_load(file.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise OverridesError(f"Failed to read {file}: {exc}") from exc

    current = workspace.get("overrides") if isinstance(workspace, dict) else None
    if not isinstance(current, dict):
        current = {}

    pending = {name: v for name, v in overrides.items() if str(current.get(name)) != v}
    snippet = None
    if pending:
        snippet = yaml.safe_dump(
            {"overrides": pending}, default_flow_style=False, sort_keys=False
        )
    return OverrideResult(target=file, pending=pending, snippet=snippet)


def add_overrides(root: Path, lockfile: str, report: DuplicateReport) -> OverrideResult:
    """Pin every duplicated package in ``report`` to its greatest version.

    Params:
        root: project directory containing the lock file and package.json
        lockfile: lock file name, selects which override section is edited
        report: duplicate report from ``find_duplicates``

    Raises:
        OverridesError: if the target file is missing or malformed.
    """
    overrides = pick_overrides(report)
    if not overrides:
        return OverrideResult(target=None)

    if lockfile == "pnpm-lock.yaml":
        workspace = root / PNPM_WORKSPACE
        if workspace.is_file():
            return render_workspace_overrides(workspace, overrides)

    section = _SECTIONS.get(lockfile, _DEFAULT_SECTION)
    return edit_package_json(root / PACKAGE_JSON, section, overrides)
