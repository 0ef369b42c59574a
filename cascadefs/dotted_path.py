"""Lookup of nested values by a delimited key path."""

from typing import Any


def get_path(
    data: dict[str, Any], path: str, default: Any = None, delimiter: str = "."
) -> Any:
    """Return the value at 'path' (e.g. "errors.required") or 'default'.

    A key that literally contains the delimiter is matched before splitting.
    """
    if path in data:
        return data[path]

    current: Any = data
    for part in path.strip(delimiter).split(delimiter):
        if isinstance(current, dict) and part in current:
            current = current[part]
        elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return default
    return current
