"""Lookup of files across the roots of the cascading filesystem."""

from collections.abc import Sequence
from pathlib import Path

from cascadefs.resolution_key import ResolutionKey

# Lookups in these directories always return every match, for merging
MERGE_DIRECTORIES = frozenset({"config", "i18n", "messages"})


def is_array_lookup(directory: str, array: bool) -> bool:
    """Return whether a lookup collects all matches instead of the first one."""
    return array or directory in MERGE_DIRECTORIES


def find_file(
    paths: Sequence[Path],
    directory: str,
    file: str,
    ext: str | None = None,
    array: bool = False,
) -> Path | None | list[Path]:
    """Find 'directory/file.ext' in the given roots.

    Single mode returns the match from the first root that has the file, or
    None. Array mode returns every match, lowest precedence root first, so
    that merging the files in order lets higher precedence roots win.
    """
    rel = ResolutionKey(directory, file, ext, array).relative_path

    if is_array_lookup(directory, array):
        return [root / rel for root in reversed(paths) if (root / rel).is_file()]

    for root in paths:
        candidate = root / rel
        if candidate.is_file():
            return candidate
    return None
