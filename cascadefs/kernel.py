"""The kernel context: runtime settings, the cascading filesystem and modules.

A Kernel owns all state that a request needs to locate files: the search
roots, the resolution cache, merged messages and module init bookkeeping.
Nothing lives in module globals, so a worker can serve many requests by
calling deinit() and init() between them, or by keeping one Kernel per
request.
"""

import atexit
import copy
import inspect
import logging
from collections.abc import Iterable
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cascadefs.cache_store import FileCacheStore, MemoryCacheStore
from cascadefs.deep_merge import deep_merge
from cascadefs.error_handler import install_handlers
from cascadefs.list_files import Listing, list_files
from cascadefs.load_data import load_data
from cascadefs.load_settings import DEFAULT_SETTINGS
from cascadefs.message_loader import MessageLoader
from cascadefs.module_initializer import InitHook, ModuleInitializer
from cascadefs.module_registrar import ModuleRegistrar
from cascadefs.path_registry import PathRegistry
from cascadefs.profiler import Profiler
from cascadefs.resolution_cache import Resolution, ResolutionCache
from cascadefs.sanitize import sanitize

if TYPE_CHECKING:
    from cascadefs.cache_store import CacheStore
    from cascadefs.error_handler import InstalledHandlers

logger = logging.getLogger(__name__)

VERSION = "1.0.0"
CODENAME = "waehring"


class Environment(IntEnum):
    """Common environment types."""

    PRODUCTION = 10
    STAGING = 20
    TESTING = 30
    DEVELOPMENT = 40


class Kernel:
    """Initializes the runtime and resolves files in the cascading filesystem."""

    def __init__(
        self,
        app_root: str | Path,
        system_root: str | Path,
        *,
        docroot: str | Path | None = None,
        store: "CacheStore | None" = None,
        environment: Environment = Environment.PRODUCTION,
    ) -> None:
        """Create an uninitialized kernel over the application and system roots.

        'docroot' defaults to the parent of the application root; the vendor
        directory and a relative cache directory are resolved against it.
        'store' is the cache used when caching is enabled.
        """
        self.docroot = Path(docroot) if docroot else Path(app_root).parent
        self.environment = environment
        self.store = store
        self.settings: dict[str, Any] = copy.deepcopy(DEFAULT_SETTINGS)

        self.caching = False
        self.profiling = False
        self.errors = True
        self.expose = False
        self.charset = "utf-8"
        self.base_url = "/"
        self.index_file = "index.py"

        self.registry = PathRegistry(app_root, system_root)
        self.profiler = Profiler()
        self.files = ResolutionCache()
        self.messages = MessageLoader(self.files, self.registry.paths)
        self.initializer = ModuleInitializer(self)
        self.registrar = ModuleRegistrar(
            self.registry, self.initializer, self.docroot / "vendor"
        )

        self._init = False
        self._handlers: "InstalledHandlers | None" = None

    @property
    def initialized(self) -> bool:
        """Whether init() has run without a matching deinit()."""
        return self._init

    # --- Lifecycle ---

    def init(
        self, settings: dict[str, Any] | None = None, *, discover_modules: bool = True
    ) -> None:
        """Initialize the environment. Calling it again has no effect.

        Applies settings, installs the error and shutdown handlers, loads the
        persisted file path cache when caching is on, then runs module discovery.
        Discovery errors propagate to the caller.
        """
        if self._init:
            return
        self._init = True

        self.settings = deep_merge(copy.deepcopy(DEFAULT_SETTINGS), settings or {})
        s = self.settings
        self.profiling = bool(s["profile"])
        self.errors = bool(s["errors"])
        self.expose = bool(s["expose"])
        self.caching = bool(s["caching"])
        self.charset = str(s["charset"]).lower()
        self.base_url = str(s["base_url"]).rstrip("/") + "/"
        self.index_file = str(s["index_file"]).strip("/")

        if self.errors:
            self._handlers = install_handlers()
        atexit.register(self.shutdown)

        store = self._cache_store() if self.caching else None
        self.files.store = store
        self.files.profiler = self.profiler if self.profiling else None
        self.messages.extension = str(s["data_extension"])
        self.registrar.vendor_dir = self._under_docroot(s["vendor_dir"])
        self.registrar.store = store

        # Loaded before init scripts can resolve anything
        if self.caching:
            self.files.load()

        if discover_modules:
            self.registrar.discover_and_register_modules()
        self.registrar.modules(s.get("modules"))

        logger.info("%s initialized (caching=%s)", self.version(), self.caching)

    def deinit(self) -> None:
        """Clean up the environment so init() can run again."""
        if not self._init:
            return

        if self._handlers is not None:
            self._handlers.restore()
            self._handlers = None
        atexit.unregister(self.shutdown)

        self.registry.reset()
        self.files.clear()
        self.files.store = None
        self.messages.clear()
        self.initializer.reset()

        self._init = False

    def shutdown(self) -> None:
        """Persist the file path cache if caching is on and it changed."""
        if not self._init:
            return
        if self.caching and self.files.dirty:
            self.files.save()

    # --- Cascading filesystem ---

    def paths(self) -> tuple[Path, ...]:
        """Return the active search roots, highest precedence first."""
        return self.registry.paths()

    def find_file(
        self, directory: str, file: str, ext: str | None = None, array: bool = False
    ) -> Resolution:
        """Find a file in the cascading filesystem.

        Returns the highest precedence match (or None), or a list of every
        match when 'array' is set or the directory holds mergeable data.
        """
        return self.files.find_file(self.registry.paths(), directory, file, ext, array)

    def list_files(
        self,
        directory: str | None = None,
        paths: Iterable[Path] | None = None,
        ext: str | Iterable[str] | None = None,
        sort: bool = True,
    ) -> Listing:
        """List all files under a directory across the roots."""
        roots = list(paths) if paths is not None else list(self.registry.paths())
        return list_files(directory, roots, ext, sort)

    def message(self, file: str, path: str | None = None, default: Any = None) -> Any:
        """Get merged messages of a file, or a single message by key path."""
        return self.messages.message(file, path, default)

    def load(self, file: str | Path) -> dict[str, Any]:
        """Load a data file found in the cascading filesystem."""
        return load_data(file)

    # --- Modules ---

    def register_module(
        self, namespace: str, path: str | Path, *, prepend: bool = False
    ) -> Path:
        """Add a module root and run its init hook once."""
        return self.registrar.register_module(namespace, path, prepend=prepend)

    def modules(self, modules: dict[str, str | Path] | None = None) -> dict[str, Path]:
        """Register modules (namespace -> root), returning all active modules."""
        return self.registrar.modules(modules)

    def on_module_init(self, module_id: str, hook: InitHook) -> None:
        """Register a callback that replaces a module's init script."""
        self.initializer.register(module_id, hook)

    # --- Helpers ---

    def cache(self, name: str, data: Any = None, lifetime: int | None = None) -> Any:
        """Read, write or (with lifetime 0) delete a value in the cache store."""
        store = self._cache_store()
        if lifetime == 0:
            return store.delete(name)
        if data is None:
            return store.get(name)
        return store.set(name, data, lifetime)

    def deprecated(self, since: str, replacement: str = "") -> None:
        """Log that the calling function is deprecated."""
        caller = inspect.stack()[1]
        owner = caller.frame.f_locals.get("self")
        if owner is not None:
            cls = type(owner).__name__
        else:
            cls = caller.frame.f_globals.get("__name__", "")
        msg = (
            f'Function "{caller.function}" inside class "{cls}" is deprecated since '
            f"version {since} and will be removed within the next major release."
        )
        if replacement:
            msg += f' Please consider replacing it with "{replacement}".'
        logger.warning(msg)

    @staticmethod
    def sanitize(value: Any) -> Any:
        """Normalize newlines in request input (strings, mappings, lists)."""
        return sanitize(value)

    @staticmethod
    def version() -> str:
        """Return the kernel version string."""
        return f"cascadefs {VERSION} ({CODENAME})"

    def _cache_store(self) -> "CacheStore":
        if self.store is None:
            cache_dir = self.settings.get("cache_dir")
            if cache_dir:
                self.store = FileCacheStore(self._under_docroot(cache_dir))
            else:
                logger.warning("No cache store configured, caching in memory only")
                self.store = MemoryCacheStore()
        return self.store

    def _under_docroot(self, path: str | Path) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self.docroot / p
