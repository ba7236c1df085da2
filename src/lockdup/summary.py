"""Human-readable renderings of a duplicate report."""

from __future__ import annotations

from .report import DuplicateReport


def render_lines(report: DuplicateReport) -> list[str]:
    """Return one ``name@version`` line per duplicated version."""
    return [f"{name}@{version}" for name, versions in report.items() for version in versions]


def render_summary(report: DuplicateReport, lockfile: str = "") -> str:
    """Return a Markdown string with totals and a table of duplicated packages."""
    total_versions = sum(len(v) for v in report.values())

    lines = []
    lines.append("# lockdup Summary")
    lines.append("")
    if lockfile:
        lines.append(f"Lock file: `{lockfile}`")
        lines.append("")
    lines.append(f"Duplicated packages: {len(report)} | Versions: {total_versions}")
    lines.append("")
    lines.append("| Package | Versions |")
    lines.append("| --- | --- |")

    for name, versions in report.items():
        lines.append(f"| {name} | {', '.join(versions)} |")

    if not report:
        lines.append("| (none) | n/a |")

    return "\n".join(lines) + "\n"
