"""Structured-data loaders for config, message and i18n files."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from cascadefs.errors import DataFormatError, UnsupportedFormatError

DataLoader = Callable[[str], Any]


def _load_yaml(text: str) -> Any:
    return yaml.safe_load(text)


def _load_json(text: str) -> Any:
    return json.loads(text) if text.strip() else None


LOADERS: dict[str, DataLoader] = {
    ".yaml": _load_yaml,
    ".yml": _load_yaml,
    ".json": _load_json,
}


def load_data(path: str | Path) -> dict[str, Any]:
    """Load a data file and return its top-level mapping.

    The loader is chosen by file suffix. An empty file yields an empty mapping.
    """
    p = Path(path)
    loader = LOADERS.get(p.suffix.lower())
    if loader is None:
        raise UnsupportedFormatError(p)

    data = loader(p.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DataFormatError(p, type(data))
    return data
