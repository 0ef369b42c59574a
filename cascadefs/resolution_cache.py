"""Process-lifetime memoization of cascading file lookups."""

import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cascadefs.find_file import find_file
from cascadefs.resolution_key import ResolutionKey

if TYPE_CHECKING:
    from cascadefs.cache_store import CacheStore
    from cascadefs.profiler import Profiler

logger = logging.getLogger(__name__)

CACHE_NAME = "cascadefs.find_file"

Resolution = Path | None | list[Path]


class ResolutionCache:
    """Memoizes find_file results by normalized lookup key.

    Entries are never invalidated within a process, even when the roots
    change. When a store is given, the whole map can be loaded at startup and
    written back at shutdown if new entries were added.
    """

    def __init__(
        self,
        store: "CacheStore | None" = None,
        profiler: "Profiler | None" = None,
    ) -> None:
        """Initialize an empty cache, optionally backed by a persistent store."""
        self.store = store
        self.profiler = profiler
        self.files: dict[str, Resolution] = {}
        self.dirty = False

    def find_file(
        self,
        paths: Sequence[Path],
        directory: str,
        file: str,
        ext: str | None = None,
        array: bool = False,
    ) -> Resolution:
        """Return the cached resolution, resolving and storing it on a miss."""
        key = ResolutionKey(directory, file, ext, array).cache_key()
        if key in self.files:
            return self.files[key]

        if self.profiler is None:
            found = find_file(paths, directory, file, ext, array)
        else:
            token = self.profiler.start("cascadefs", "find_file")
            try:
                found = find_file(paths, directory, file, ext, array)
            finally:
                self.profiler.stop(token)

        self.files[key] = found
        self.dirty = True
        return found

    def load(self) -> None:
        """Merge the persisted map into memory, if any.

        Entries already resolved in this process are kept and stay dirty.
        """
        if self.store is None:
            return
        started = time.perf_counter()
        raw = self.store.get(CACHE_NAME) or {}
        if not isinstance(raw, dict):
            logger.warning(
                "Ignoring persisted resolutions of type %s", type(raw).__name__
            )
            raw = {}
        decoded = {key: _decode(value) for key, value in raw.items()}
        self.dirty = any(
            key not in decoded or decoded[key] != value
            for key, value in self.files.items()
        )
        self.files = {**decoded, **self.files}
        logger.debug(
            "Loaded %d cached resolutions in %.3fs",
            len(self.files),
            time.perf_counter() - started,
        )

    def save(self, lifetime: int | None = None) -> bool:
        """Persist the map if it changed since the last load or save."""
        if self.store is None or not self.dirty:
            return False
        encoded = {key: _encode(value) for key, value in self.files.items()}
        if not self.store.set(CACHE_NAME, encoded, lifetime):
            logger.warning("Could not persist %d cached resolutions", len(encoded))
            return False
        self.dirty = False
        return True

    def clear(self) -> None:
        """Forget every in-memory entry without touching the store."""
        self.files = {}
        self.dirty = False


def _encode(value: Resolution) -> Any:
    if isinstance(value, list):
        return [str(p) for p in value]
    return str(value) if value is not None else None


def _decode(value: Any) -> Resolution:
    if isinstance(value, list):
        return [Path(p) for p in value]
    return Path(value) if value is not None else None
