"""Tests for duplicate aggregation and the report document."""

import pytest

from lockdup.models import PackageRecord
from lockdup.report import (
    DuplicateCollector,
    ReportSchemaError,
    aggregate,
    to_document,
    validate_document,
)


class TestAggregate:
    """Test folding records into a duplicate report."""

    def test_single_versions_are_not_reported(self):
        records = [PackageRecord("a", "1.0.0"), PackageRecord("b", "1.0.0")]
        assert aggregate(records) == {}

    def test_repeated_literal_versions_collapse(self):
        records = [
            PackageRecord("x", "1.0.0"),
            PackageRecord("x", "1.0.0"),
            PackageRecord("x", "2.0.0"),
        ]
        assert aggregate(records) == {"x": ["1.0.0", "2.0.0"]}

    def test_first_seen_order(self):
        records = [
            PackageRecord("x", "2.0.0"),
            PackageRecord("y", "1.0.0"),
            PackageRecord("x", "1.0.0"),
            PackageRecord("x", "2.0.0"),
        ]
        assert aggregate(records) == {"x": ["2.0.0", "1.0.0"]}

    def test_versions_are_literal(self):
        records = [PackageRecord("x", "1.0.0"), PackageRecord("x", "^1.0.0")]
        assert aggregate(records) == {"x": ["1.0.0", "^1.0.0"]}

    def test_empty_name_is_rejected(self):
        collector = DuplicateCollector()

        assert collector.add(PackageRecord("", "1.0.0")) is False
        assert collector.add(PackageRecord("", "2.0.0")) is False
        assert collector.report() == {}


class TestDocument:
    """Test the versioned JSON report document."""

    def test_document_is_valid(self):
        document = to_document({"x": ["1.0.0", "2.0.0"], "@s/y": ["1", "2", "3"]})

        validate_document(document)
        assert document["hasDuplicates"] is True
        assert document["totals"] == {"packages": 2, "versions": 5}
        assert document["packages"][0] == {"name": "x", "versions": ["1.0.0", "2.0.0"]}

    def test_empty_document_is_valid(self):
        document = to_document({})

        validate_document(document)
        assert document["hasDuplicates"] is False
        assert document["packages"] == []

    def test_single_version_entry_fails_schema(self):
        document = to_document({"x": ["1.0.0"]})

        with pytest.raises(ReportSchemaError) as excinfo:
            validate_document(document)
        assert "packages/0/versions" in str(excinfo.value)
