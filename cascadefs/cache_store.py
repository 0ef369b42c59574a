"""Cache stores used to persist kernel state across process runs."""

import hashlib
import json
import logging
import time
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 1


class CacheStore(Protocol):
    """Minimal get/set/delete contract the kernel expects from a cache."""

    def get(self, name: str) -> Any | None: ...

    def set(self, name: str, value: Any, lifetime: int | None = None) -> bool: ...

    def delete(self, name: str) -> bool: ...


class MemoryCacheStore:
    """Process-local cache store, mostly useful for tests and single runs."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self.entries: dict[str, tuple[Any, float | None]] = {}

    def get(self, name: str) -> Any | None:
        """Return the stored value, or None if missing or expired."""
        entry = self.entries.get(name)
        if entry is None:
            return None
        value, expires = entry
        if expires is not None and expires <= time.time():
            del self.entries[name]
            return None
        return value

    def set(self, name: str, value: Any, lifetime: int | None = None) -> bool:
        """Store a value, optionally expiring after 'lifetime' seconds."""
        expires = time.time() + lifetime if lifetime else None
        self.entries[name] = (value, expires)
        return True

    def delete(self, name: str) -> bool:
        """Remove a value, returning whether it existed."""
        return self.entries.pop(name, None) is not None


class FileCacheStore:
    """Stores each cache entry as a JSON document under a directory."""

    def __init__(self, directory: str | Path) -> None:
        """Initialize the store rooted at 'directory'."""
        self.directory = Path(directory)

    def _file_for(self, name: str) -> Path:
        digest = hashlib.sha1(name.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}.json"

    def get(self, name: str) -> Any | None:
        """Load an entry from disk; unreadable or stale entries count as missing."""
        path = self._file_for(name)
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.exception("Error loading cache entry %s", name)
            return None

        if not isinstance(data, dict) or not isinstance(data.get("meta", {}), dict):
            logger.warning("Ignoring malformed cache entry %s", name)
            return None

        meta = data.get("meta", {})
        schema_ver = meta.get("schema_version", 0)
        if schema_ver != CURRENT_SCHEMA_VERSION:
            logger.warning(
                "Schema version mismatch (%s != %s). Ignoring cache entry %s.",
                schema_ver,
                CURRENT_SCHEMA_VERSION,
                name,
            )
            return None

        expires = meta.get("expires")
        if expires is not None and expires <= time.time():
            logger.info("Cache entry %s expired", name)
            path.unlink(missing_ok=True)
            return None

        return data.get("data")

    def set(self, name: str, value: Any, lifetime: int | None = None) -> bool:
        """Write an entry to disk, optionally expiring after 'lifetime' seconds."""
        meta = {
            "schema_version": CURRENT_SCHEMA_VERSION,
            "name": name,
            "expires": time.time() + lifetime if lifetime else None,
        }
        try:
            # Create directory if needed
            self.directory.mkdir(parents=True, exist_ok=True)
            self._file_for(name).write_text(
                json.dumps({"meta": meta, "data": value}, indent=2, sort_keys=True),
                encoding="utf-8",
            )
        except (OSError, TypeError):
            logger.exception("Error writing cache entry %s", name)
            return False
        return True

    def delete(self, name: str) -> bool:
        """Remove an entry from disk, returning whether it existed."""
        path = self._file_for(name)
        if not path.exists():
            return False
        path.unlink()
        return True
