"""Tests for cascading file lookups."""

from pathlib import Path

import pytest

from cascadefs.find_file import find_file, is_array_lookup
from cascadefs.resolution_key import ResolutionKey, extension_suffix
from conftest import write


@pytest.fixture
def three_roots(tmp_path: Path) -> list[Path]:
    """Three roots, highest precedence first."""
    result = []
    for name in ("app", "module", "system"):
        root = tmp_path / name
        root.mkdir()
        result.append(root)
    return result


def test_extension_suffix() -> None:
    """Verify default, empty and explicit extensions."""
    assert extension_suffix(None) == ".py"
    assert extension_suffix("") == ""
    assert extension_suffix("yaml") == ".yaml"
    assert extension_suffix(".json") == ".json"


def test_resolution_key() -> None:
    """Verify relative paths and cache keys for both modes."""
    key = ResolutionKey("views", "user/profile", "html")
    assert key.relative_path == "views/user/profile.html"
    assert key.cache_key() == "views/user/profile.html_path"
    array_key = ResolutionKey("config", "db", "", array=True)
    assert array_key.cache_key() == "config/db_array"


def test_merge_directories_force_array_mode() -> None:
    """Verify that config, i18n and messages always use array mode."""
    assert is_array_lookup("config", False)
    assert is_array_lookup("i18n", False)
    assert is_array_lookup("messages", False)
    assert not is_array_lookup("views", False)
    assert is_array_lookup("views", True)


def test_single_mode_first_root_wins(three_roots: list[Path]) -> None:
    """Verify that the first root containing the file is returned."""
    app, module, system = three_roots
    write(module, "views/home.py")
    write(system, "views/home.py")
    assert find_file(three_roots, "views", "home") == module / "views/home.py"

    write(app, "views/home.py")
    assert find_file(three_roots, "views", "home") == app / "views/home.py"


def test_single_mode_falls_through_to_later_root(three_roots: list[Path]) -> None:
    """Verify that a file only in a later root is still found."""
    _, _, system = three_roots
    write(system, "views/home.py")
    assert find_file(three_roots, "views", "home") == system / "views/home.py"


def test_single_mode_absent(three_roots: list[Path]) -> None:
    """Verify that a missing file yields None."""
    assert find_file(three_roots, "views", "missing") is None


def test_directories_do_not_match(three_roots: list[Path]) -> None:
    """Verify that a directory with the file's name is not a match."""
    app, _, _ = three_roots
    (app / "views" / "home.py").mkdir(parents=True)
    assert find_file(three_roots, "views", "home") is None


def test_extension_handling(three_roots: list[Path]) -> None:
    """Verify explicit and empty extensions."""
    app, _, _ = three_roots
    write(app, "views/page.html")
    write(app, "media/logo")
    assert find_file(three_roots, "views", "page", "html") == app / "views/page.html"
    assert find_file(three_roots, "media", "logo", "") == app / "media/logo"
    assert find_file(three_roots, "views", "page") is None


def test_array_mode_lowest_precedence_first(three_roots: list[Path]) -> None:
    """Verify that array mode lists matches in reverse root order."""
    app, module, system = three_roots
    write(app, "views/home.py")
    write(system, "views/home.py")
    found = find_file(three_roots, "views", "home", array=True)
    assert found == [system / "views/home.py", app / "views/home.py"]


def test_array_mode_empty(three_roots: list[Path]) -> None:
    """Verify that array mode returns an empty list when nothing matches."""
    assert find_file(three_roots, "views", "missing", array=True) == []


def test_config_lookup_is_always_array(three_roots: list[Path]) -> None:
    """Verify that config lookups return every match without the flag."""
    app, module, _ = three_roots
    write(app, "config/db.yaml")
    write(module, "config/db.yaml")
    found = find_file(three_roots, "config", "db", "yaml")
    assert found == [module / "config/db.yaml", app / "config/db.yaml"]
