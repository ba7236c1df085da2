"""Duplicate aggregation and schema-friendly report output."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from typing import Any, TypeAlias

from jsonschema import Draft202012Validator

from .models import PackageRecord

logger = logging.getLogger(__name__)

DuplicateReport: TypeAlias = dict[str, list[str]]

REPORT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["version", "hasDuplicates", "packages", "totals"],
    "additionalProperties": False,
    "properties": {
        "version": {"type": "string"},
        "hasDuplicates": {"type": "boolean"},
        "packages": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "versions"],
                "additionalProperties": False,
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "versions": {
                        "type": "array",
                        "items": {"type": "string"},
                        "minItems": 2,
                        "uniqueItems": True,
                    },
                },
            },
        },
        "totals": {
            "type": "object",
            "required": ["packages", "versions"],
            "properties": {
                "packages": {"type": "integer", "minimum": 0},
                "versions": {"type": "integer", "minimum": 0},
            },
        },
    },
}


class ReportSchemaError(ValueError):
    """Raised when a report document does not match ``REPORT_SCHEMA``."""


class DuplicateCollector:
    """Accumulate distinct versions per package name in first-seen order."""

    def __init__(self) -> None:
        # dict keys double as an insertion-ordered set
        self._versions: defaultdict[str, dict[str, None]] = defaultdict(dict)

    def add(self, record: PackageRecord) -> bool:
        """Record one occurrence; return False if it was rejected for an empty name."""
        if not record.name:
            logger.debug("Ignoring record with empty name (version %r)", record.version)
            return False
        self._versions[record.name][record.version] = None
        return True

    def extend(self, records: Iterable[PackageRecord]) -> None:
        """Record every occurrence in ``records`` in order."""
        for record in records:
            self.add(record)

    def report(self) -> DuplicateReport:
        """Return names seen with two or more distinct versions."""
        return {
            name: list(versions)
            for name, versions in self._versions.items()
            if len(versions) > 1
        }


def aggregate(records: Iterable[PackageRecord]) -> DuplicateReport:
    """Fold ``records`` into a duplicate report."""
    collector = DuplicateCollector()
    collector.extend(records)
    return collector.report()


def to_document(report: DuplicateReport) -> dict[str, Any]:
    """Wrap a duplicate report in the versioned JSON document emitted by the CLI."""
    packages = [{"name": name, "versions": list(versions)} for name, versions in report.items()]
    return {
        "version": "1",
        "hasDuplicates": bool(packages),
        "packages": packages,
        "totals": {
            "packages": len(packages),
            "versions": sum(len(p["versions"]) for p in packages),
        },
    }


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_document(document: dict[str, Any]) -> None:
    """Raise ``ReportSchemaError`` listing every schema violation in ``document``."""
    validator = Draft202012Validator(REPORT_SCHEMA)
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ReportSchemaError("\n" + _format_errors(errors))
