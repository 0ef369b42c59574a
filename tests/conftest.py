"""Shared fixtures for building cascading filesystem trees."""

import textwrap
from pathlib import Path

import pytest


def write(root: Path, rel: str, content: str = "") -> Path:
    """Create a file under 'root', making parent directories as needed."""
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


@pytest.fixture
def roots(tmp_path: Path) -> tuple[Path, Path]:
    """Empty application and system roots under a document root."""
    app = tmp_path / "application"
    system = tmp_path / "system"
    app.mkdir()
    system.mkdir()
    return app, system
