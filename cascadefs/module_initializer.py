"""One-time initialization hooks for modules."""

import logging
import runpy
from collections.abc import Callable
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

InitHook = Callable[[Any], None]


class ModuleInitializer:
    """Runs each module's init hook at most once.

    A hook is either a callback registered for the module id, or the module's
    init script, executed with the owning context exposed as ``kernel``.
    """

    def __init__(self, context: Any = None) -> None:
        """Initialize with the object handed to every hook."""
        self.context = context
        self.hooks: dict[str, InitHook] = {}
        self.executed: set[str] = set()
        self.scripts: set[Path] = set()

    def register(self, module_id: str, hook: InitHook) -> None:
        """Register a callback to run instead of the module's init script."""
        self.hooks[module_id] = hook

    def run(self, module_id: str, script: Path | None = None) -> bool:
        """Run the hook for 'module_id' unless it already ran.

        Returns True if something was executed.
        """
        if module_id in self.executed:
            return False

        hook = self.hooks.get(module_id)
        if hook is not None:
            self.executed.add(module_id)
            logger.debug("Running init callback for %s", module_id)
            hook(self.context)
            return True

        if script is None or not script.is_file():
            return False

        self.executed.add(module_id)
        # A script shared by several module ids still runs only once
        resolved = script.resolve()
        if resolved in self.scripts:
            return False
        self.scripts.add(resolved)
        logger.debug("Running init script %s for %s", script, module_id)
        runpy.run_path(
            str(script),
            init_globals={"kernel": self.context},
            run_name=f"cascadefs_init_{module_id}",
        )
        return True

    def reset(self) -> None:
        """Forget which hooks ran; registered callbacks are kept."""
        self.executed.clear()
        self.scripts.clear()
