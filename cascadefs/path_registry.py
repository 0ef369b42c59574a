"""Ordered search roots of the cascading filesystem."""

import logging
from pathlib import Path

from cascadefs.errors import InvalidModuleError

logger = logging.getLogger(__name__)


class PathRegistry:
    """Holds the roots searched by every resolution, highest precedence first.

    The registry starts with the application and system roots. Module roots
    are appended (or prepended) as modules register; duplicates are kept.
    """

    def __init__(self, app_root: str | Path, system_root: str | Path) -> None:
        """Initialize the registry with its two default roots."""
        self.defaults: tuple[Path, Path] = (Path(app_root), Path(system_root))
        self._paths: list[Path] = list(self.defaults)
        self._modules: dict[str, Path] = {}

    def paths(self) -> tuple[Path, ...]:
        """Return a snapshot of the current roots."""
        return tuple(self._paths)

    def modules(self) -> dict[str, Path]:
        """Return the registered modules (namespace -> root)."""
        return dict(self._modules)

    def add(self, namespace: str, path: str | Path, *, prepend: bool = False) -> Path:
        """Add a module root under 'namespace'.

        Raises InvalidModuleError, leaving the registry untouched, when 'path'
        is not an existing directory.
        """
        root = Path(path)
        if not root.is_dir():
            raise InvalidModuleError(namespace, root)

        if prepend:
            self._paths.insert(0, root)
        else:
            self._paths.append(root)
        self._modules[namespace] = root
        logger.debug(
            "Registered module %s at %s (prepend=%s)", namespace, root, prepend
        )
        return root

    def reset(self) -> None:
        """Restore the two default roots and forget all modules."""
        self._paths = list(self.defaults)
        self._modules.clear()
