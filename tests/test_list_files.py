"""Tests for recursive listing across roots."""

from pathlib import Path

from cascadefs.list_files import list_files
from conftest import write


def test_first_root_wins_for_duplicates(roots: tuple[Path, Path]) -> None:
    """Verify that a file in two roots maps to the first root's copy."""
    app, system = roots
    write(app, "views/a/b.py")
    write(system, "views/a/b.py")

    found = list_files("views", [app, system])
    assert found == {"views/a": {"views/a/b.py": (app / "views/a/b.py").resolve()}}


def test_directories_merge_across_roots(roots: tuple[Path, Path]) -> None:
    """Verify that subdirectory listings combine every root."""
    app, system = roots
    write(app, "classes/model/user.py")
    write(system, "classes/model/role.py")
    write(system, "classes/kernel.py")

    found = list_files("classes", [app, system])
    assert found == {
        "classes/kernel.py": (system / "classes/kernel.py").resolve(),
        "classes/model": {
            "classes/model/role.py": (system / "classes/model/role.py").resolve(),
            "classes/model/user.py": (app / "classes/model/user.py").resolve(),
        },
    }


def test_sorted_at_every_level(roots: tuple[Path, Path]) -> None:
    """Verify that keys are ordered lexicographically when sorting."""
    app, system = roots
    for name in ("c.py", "a.py", "b/z.py", "b/y.py"):
        write(system if name.startswith("a") else app, f"views/{name}")

    found = list_files("views", [app, system])
    assert list(found) == ["views/a.py", "views/b", "views/c.py"]
    assert list(found["views/b"]) == ["views/b/y.py", "views/b/z.py"]


def test_hidden_and_backup_files_skipped(roots: tuple[Path, Path]) -> None:
    """Verify that dotfiles, dot-directories and backups are ignored."""
    app, system = roots
    write(app, "views/.hidden")
    write(app, "views/page.py~")
    write(app, "views/.git/config")
    write(app, "views/page.py")

    assert list(list_files("views", [app, system])) == ["views/page.py"]


def test_extension_filter(roots: tuple[Path, Path]) -> None:
    """Verify filtering by one or several extensions."""
    app, system = roots
    write(app, "views/a.py")
    write(app, "views/b.html")
    write(app, "views/c.txt")
    write(app, "views/only_txt/d.txt")

    assert list(list_files("views", [app, system], ext="py")) == ["views/a.py"]
    assert list(list_files("views", [app, system], ext=[".py", "html"])) == [
        "views/a.py",
        "views/b.html",
    ]


def test_missing_directory(roots: tuple[Path, Path]) -> None:
    """Verify that a directory absent from all roots yields an empty listing."""
    assert list_files("nothing", list(roots)) == {}


def test_whole_roots_when_directory_is_none(roots: tuple[Path, Path]) -> None:
    """Verify listing from the top of every root."""
    app, system = roots
    write(app, "init.py")
    write(system, "views/a.py")

    found = list_files(None, [app, system])
    assert list(found) == ["init.py", "views"]
    assert list(found["views"]) == ["views/a.py"]


def test_earlier_file_beats_later_directory(roots: tuple[Path, Path]) -> None:
    """Verify that a file is not replaced by a later root's directory."""
    app, system = roots
    write(app, "views/x")
    write(system, "views/x/y.py")

    found = list_files("views", [app, system])
    assert found == {"views/x": (app / "views/x").resolve()}


def test_earlier_directory_beats_later_file(roots: tuple[Path, Path]) -> None:
    """Verify that a directory is not replaced by a later root's file."""
    app, system = roots
    write(app, "views/x/y.py")
    write(system, "views/x")

    found = list_files("views", [app, system])
    assert found == {"views/x": {"views/x/y.py": (app / "views/x/y.py").resolve()}}
