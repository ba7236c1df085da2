"""Tests for writing package manager overrides."""

import json

import pytest
import yaml

from lockdup.overrides import OverridesError, add_overrides, pick_overrides

REPORT = {"foo": ["1.0.0", "2.0.0", "1.5.0"], "@scope/bar": ["3.0.0-rc.1", "2.9.0"]}


def _write_package_json(root, data):
    (root / "package.json").write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def _read_package_json(root):
    return json.loads((root / "package.json").read_text(encoding="utf-8"))


def test_pick_overrides():
    assert pick_overrides(REPORT) == {"foo": "2.0.0", "@scope/bar": "3.0.0-rc.1"}


def test_nothing_to_override(tmp_path):
    result = add_overrides(tmp_path, "package-lock.json", {})

    assert result.target is None
    assert not (tmp_path / "package.json").exists()


@pytest.mark.parametrize(
    "lockfile,path",
    [
        ("package-lock.json", ["overrides"]),
        ("bun.lock", ["overrides"]),
        ("yarn.lock", ["resolutions"]),
        ("pnpm-lock.yaml", ["pnpm", "overrides"]),
    ],
)
def test_package_json_sections(tmp_path, lockfile, path):
    _write_package_json(tmp_path, {"name": "app", "version": "1.0.0"})

    result = add_overrides(tmp_path, lockfile, REPORT)

    section = _read_package_json(tmp_path)
    for key in path:
        section = section[key]
    assert section == {"@scope/bar": "3.0.0-rc.1", "foo": "2.0.0"}
    assert list(section) == ["@scope/bar", "foo"]
    assert result.applied == {"foo": "2.0.0", "@scope/bar": "3.0.0-rc.1"}


def test_only_changed_entries_are_written(tmp_path):
    _write_package_json(
        tmp_path, {"name": "app", "overrides": {"foo": "2.0.0", "zzz": "1.0.0"}}
    )

    result = add_overrides(tmp_path, "package-lock.json", REPORT)

    assert result.applied == {"@scope/bar": "3.0.0-rc.1"}
    assert _read_package_json(tmp_path)["overrides"] == {
        "@scope/bar": "3.0.0-rc.1",
        "foo": "2.0.0",
        "zzz": "1.0.0",
    }


def test_up_to_date_file_is_untouched(tmp_path):
    original = '{\n    "overrides": {"foo": "2.0.0"}\n}\n'
    (tmp_path / "package.json").write_text(original, encoding="utf-8")

    result = add_overrides(tmp_path, "package-lock.json", {"foo": ["1.0.0", "2.0.0"]})

    assert result.applied == {}
    assert (tmp_path / "package.json").read_text(encoding="utf-8") == original


def test_indentation_is_preserved(tmp_path):
    (tmp_path / "package.json").write_text('{\n    "name": "app"\n}\n', encoding="utf-8")

    add_overrides(tmp_path, "package-lock.json", {"foo": ["1.0.0", "2.0.0"]})

    text = (tmp_path / "package.json").read_text(encoding="utf-8")
    assert '\n    "overrides": {\n        "foo": "2.0.0"\n    }' in text


def test_pnpm_workspace_renders_snippet(tmp_path):
    _write_package_json(tmp_path, {"name": "app"})
    workspace = tmp_path / "pnpm-workspace.yaml"
    workspace.write_text("packages:\n  - 'packages/*'\noverrides:\n  foo: 2.0.0\n")

    result = add_overrides(tmp_path, "pnpm-lock.yaml", REPORT)

    assert result.target == workspace
    assert result.applied == {}
    assert result.pending == {"@scope/bar": "3.0.0-rc.1"}
    assert yaml.safe_load(result.snippet) == {"overrides": {"@scope/bar": "3.0.0-rc.1"}}
    assert "pnpm" not in _read_package_json(tmp_path)


def test_missing_package_json(tmp_path):
    with pytest.raises(OverridesError):
        add_overrides(tmp_path, "yarn.lock", REPORT)


def test_section_must_be_object(tmp_path):
    _write_package_json(tmp_path, {"resolutions": ["foo"]})

    with pytest.raises(OverridesError):
        add_overrides(tmp_path, "yarn.lock", REPORT)
