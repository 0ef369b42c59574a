"""Recursive listing of a directory across all cascading roots."""

from collections.abc import Iterable, Sequence
from pathlib import Path

Listing = dict[str, "Path | Listing"]


def _is_skipped(name: str) -> bool:
    # Hidden files and UNIX backup files
    return name.startswith(".") or name.endswith("~")


def _normalize_extensions(ext: str | Iterable[str] | None) -> set[str] | None:
    if ext is None:
        return None
    if isinstance(ext, str):
        ext = [ext]
    return {f".{e.lstrip('.')}" for e in ext}


def list_files(
    directory: str | None,
    paths: Sequence[Path],
    ext: str | Iterable[str] | None = None,
    sort: bool = True,
) -> Listing:
    """List every file under 'directory' in all roots.

    Keys are paths relative to the roots. A file present in several roots maps
    to the copy in the first root; subdirectories map to nested listings that
    combine all roots. Empty subdirectories are left out.
    """
    return _list(directory, paths, _normalize_extensions(ext), sort)


def _list(
    directory: str | None,
    paths: Sequence[Path],
    extensions: set[str] | None,
    sort: bool,
) -> Listing:
    found: Listing = {}
    prefix = f"{directory}/" if directory is not None else ""

    for root in paths:
        base = root / directory if directory is not None else root
        if not base.is_dir():
            continue

        for entry in base.iterdir():
            if _is_skipped(entry.name):
                continue

            key = prefix + entry.name
            if entry.is_dir():
                sub_dir = _list(key, paths, extensions, sort)
                if not sub_dir:
                    continue
                # A file from an earlier root keeps its key
                existing = found.get(key)
                if existing is None:
                    found[key] = sub_dir
                elif isinstance(existing, dict):
                    for sub_key, value in sub_dir.items():
                        existing.setdefault(sub_key, value)
            elif extensions is None or entry.suffix in extensions:
                found.setdefault(key, entry.resolve())

    if sort:
        found = dict(sorted(found.items()))
    return found
