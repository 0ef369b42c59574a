"""Module registration and discovery from the package manifest."""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cascadefs.errors import ManifestParseError, MissingManifestError

if TYPE_CHECKING:
    from cascadefs.cache_store import CacheStore
    from cascadefs.module_initializer import ModuleInitializer
    from cascadefs.path_registry import PathRegistry

logger = logging.getLogger(__name__)

MODULES_CACHE_NAME = "cascadefs.init_modules"
MANIFEST_NAME = "installed.json"
MODULE_FLAG = "cascadefs"
INIT_SCRIPT = "init.py"


class ModuleRegistrar:
    """Adds module roots to the registry and runs their init hooks."""

    def __init__(
        self,
        registry: "PathRegistry",
        initializer: "ModuleInitializer",
        vendor_dir: str | Path,
        store: "CacheStore | None" = None,
    ) -> None:
        """Initialize the registrar.

        'store' enables caching of the discovered modules between runs.
        """
        self.registry = registry
        self.initializer = initializer
        self.vendor_dir = Path(vendor_dir)
        self.store = store

    @property
    def manifest_path(self) -> Path:
        """Location of the installed-packages manifest."""
        return self.vendor_dir / MANIFEST_NAME

    def register_module(
        self, namespace: str, path: str | Path, *, prepend: bool = False
    ) -> Path:
        """Add a module root and run its init hook once."""
        root = self.registry.add(namespace, path, prepend=prepend)
        self.initializer.run(namespace, root / INIT_SCRIPT)
        return root

    def modules(self, modules: dict[str, str | Path] | None = None) -> dict[str, Path]:
        """Register 'modules' (namespace -> root) in order; return all modules."""
        for namespace, path in (modules or {}).items():
            self.register_module(namespace, path)
        return self.registry.modules()

    def discover_and_register_modules(self) -> dict[str, Path]:
        """Run the init scripts of every flagged package in the manifest.

        Returns the discovered package name -> init script map.
        """
        if self.store is not None:
            cached = self.store.get(MODULES_CACHE_NAME) or {}
            if cached:
                logger.debug("Using %d cached module init scripts", len(cached))
                discovered = {name: Path(init) for name, init in cached.items()}
                for name, init in discovered.items():
                    self.initializer.run(name, init)
                return discovered

        discovered = {}
        for package in self._read_manifest():
            if not _is_flagged(package):
                continue
            name = package["name"]
            init = self.vendor_dir / name / INIT_SCRIPT
            if init.exists():
                discovered[name] = init
                self.initializer.run(name, init)
            else:
                logger.debug("Module %s has no %s", name, INIT_SCRIPT)

        if self.store is not None:
            encoded = {name: str(init) for name, init in discovered.items()}
            self.store.set(MODULES_CACHE_NAME, encoded)
        return discovered

    def _read_manifest(self) -> list[dict[str, Any]]:
        path = self.manifest_path
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise MissingManifestError(path) from e

        try:
            installed = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestParseError(path, str(e)) from e

        # Newer manifests wrap the package list
        if isinstance(installed, dict):
            installed = installed.get("packages")
        if not isinstance(installed, list):
            raise ManifestParseError(path, "expected a list of packages")
        return [p for p in installed if isinstance(p, dict)]


def _is_flagged(package: dict[str, Any]) -> bool:
    extra = package.get("extra")
    return (
        isinstance(extra, dict)
        and extra.get(MODULE_FLAG) is True
        and isinstance(package.get("name"), str)
    )
