"""Normalized keys for cached file resolutions."""

from dataclasses import dataclass

DEFAULT_EXTENSION = "py"


def extension_suffix(ext: str | None) -> str:
    """Turn an extension argument into a filename suffix.

    None selects the default extension, "" means no suffix at all.
    """
    if ext is None:
        return f".{DEFAULT_EXTENSION}"
    if not ext:
        return ""
    return f".{ext.lstrip('.')}"


@dataclass(frozen=True)
class ResolutionKey:
    """A file lookup: logical directory, file, extension and result mode."""

    directory: str
    file: str
    ext: str | None = None
    array: bool = False

    @property
    def relative_path(self) -> str:
        """Path of the file relative to any root, using '/' separators."""
        return f"{self.directory}/{self.file}{extension_suffix(self.ext)}"

    def cache_key(self) -> str:
        """Stable string key used by the resolution cache."""
        return self.relative_path + ("_array" if self.array else "_path")
