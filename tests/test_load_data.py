"""Tests for the structured-data loaders."""

import json
from pathlib import Path

import pytest
import yaml

from cascadefs.errors import DataFormatError, UnsupportedFormatError
from cascadefs.load_data import load_data


def test_load_yaml(tmp_path: Path) -> None:
    """Verify YAML files load as mappings."""
    path = tmp_path / "x.yaml"
    path.write_text(yaml.dump({"a": 1, "b": {"c": 2}}))
    assert load_data(path) == {"a": 1, "b": {"c": 2}}


def test_load_json(tmp_path: Path) -> None:
    """Verify JSON files load as mappings."""
    path = tmp_path / "x.json"
    path.write_text(json.dumps({"a": [1, 2]}))
    assert load_data(path) == {"a": [1, 2]}


def test_empty_file_is_empty_mapping(tmp_path: Path) -> None:
    """Verify that empty files of either format yield an empty mapping."""
    (tmp_path / "e.yml").write_text("")
    (tmp_path / "e.json").write_text("  \n")
    assert load_data(tmp_path / "e.yml") == {}
    assert load_data(tmp_path / "e.json") == {}


def test_non_mapping_rejected(tmp_path: Path) -> None:
    """Verify that a top-level list is rejected."""
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(DataFormatError):
        load_data(path)


def test_unknown_suffix_rejected(tmp_path: Path) -> None:
    """Verify that files without a registered loader are rejected."""
    path = tmp_path / "x.py"
    path.write_text("x = 1\n")
    with pytest.raises(UnsupportedFormatError):
        load_data(path)
