"""Recursive normalization of request-style input values."""

from typing import Any


def sanitize(value: Any) -> Any:
    """Normalize all newlines to LF inside strings, mappings and lists."""
    if isinstance(value, dict):
        return {key: sanitize(val) for key, val in value.items()}
    if isinstance(value, list):
        return [sanitize(val) for val in value]
    if isinstance(value, str) and "\r" in value:
        return value.replace("\r\n", "\n").replace("\r", "\n")
    return value
