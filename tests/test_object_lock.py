"""Tests for the object-form lock file extractor."""

from lockdup.classify import LockFormat
from lockdup.models import PackageRecord
from lockdup.parsers.object_lock import parse


class TestNpm:
    """Test package-lock.json extraction."""

    def test_packages_table(self):
        data = {
            "name": "app",
            "lockfileVersion": 3,
            "packages": {
                "": {"name": "app", "version": "1.0.0"},
                "node_modules/x": {"version": "1.0.0"},
                "node_modules/@types/node": {"version": "18.0.0"},
                "node_modules/y/node_modules/x": {"version": "2.0.0"},
                "node_modules/linked": {"resolved": "packages/linked", "link": True},
            },
        }

        assert parse(data) == [
            PackageRecord("x", "1.0.0"),
            PackageRecord("@types/node", "18.0.0"),
            PackageRecord("x", "2.0.0"),
        ]

    def test_v1_dependencies_tree(self):
        data = {
            "lockfileVersion": 1,
            "dependencies": {
                "lodash": {
                    "version": "4.17.21",
                    "dependencies": {"underscore": {"version": "1.13.0"}},
                },
                "underscore": {"version": "1.12.0"},
            },
        }

        assert parse(data) == [
            PackageRecord("lodash", "4.17.21"),
            PackageRecord("underscore", "1.13.0"),
            PackageRecord("underscore", "1.12.0"),
        ]


class TestBun:
    """Test bun.lock extraction."""

    def test_packages_table(self):
        data = {
            "lockfileVersion": 1,
            "workspaces": {"": {"name": "app", "dependencies": {"lodash": "^4"}}},
            "packages": {
                "lodash": ["lodash@4.17.21", "", {}, "sha512-a"],
                "old/lodash": ["lodash@3.10.1", "", {}, "sha512-b"],
                "broken": [],
            },
        }

        assert parse(data) == [
            PackageRecord("lodash", "4.17.21"),
            PackageRecord("lodash", "3.10.1"),
        ]


class TestComposite:
    """Test pnpm and yarn keys in object form."""

    def test_pnpm_object(self):
        data = {
            "lockfileVersion": "6.0",
            "packages": {
                "/foo@1.0.0": {"resolution": {"integrity": "sha512-a"}},
                "/foo@2.0.0(react@18.2.0)": {"resolution": {"integrity": "sha512-b"}},
            },
        }

        assert parse(data) == [
            PackageRecord("foo", "1.0.0"),
            PackageRecord("foo", "2.0.0"),
        ]

    def test_yarn_object_uses_resolved_versions(self):
        data = {
            "__metadata": {"version": 6},
            "foo@npm:^1.0.0, foo@npm:^1.1.0": {"version": "1.1.0"},
            "@scope/bar@npm:^2.0.0": {"version": "2.3.0"},
            "baz@^1.0.0": {},
        }

        assert parse(data) == [
            PackageRecord("foo", "1.1.0"),
            PackageRecord("@scope/bar", "2.3.0"),
            PackageRecord("baz", "^1.0.0"),
        ]

    def test_yarn_object_require_resolved(self):
        data = {"foo@^1.0.0": {"version": "1.0.0"}, "baz@^1.0.0": {}}

        assert parse(data, require_resolved=True) == [PackageRecord("foo", "1.0.0")]

    def test_explicit_format_overrides_detection(self):
        data = {"lockfileVersion": 3, "packages": {"": {}}}

        assert parse(data, LockFormat.UNKNOWN) == []
