"""Process-wide hooks converting warnings and uncaught errors for logging."""

import logging
import sys
import warnings
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from cascadefs.errors import ErrorException

logger = logging.getLogger(__name__)


def warning_to_exception(
    message: Warning | str,
    category: type[Warning],
    filename: str,
    lineno: int,
    file: Any = None,
    line: str | None = None,
) -> None:
    """Replacement for warnings.showwarning that raises ErrorException.

    Warnings silenced by the active filters never reach this hook.
    """
    raise ErrorException(str(message), category.__name__, filename, lineno)


def log_uncaught(
    exc_type: type[BaseException],
    exc: BaseException,
    tb: TracebackType | None,
) -> None:
    """Replacement for sys.excepthook that logs the error with its traceback."""
    if isinstance(exc, ErrorException):
        text = exc.text()
    else:
        text = f"{exc_type.__name__}: {exc}"
    logger.critical("Uncaught exception %s", text, exc_info=(exc_type, exc, tb))


@dataclass
class InstalledHandlers:
    """The hooks that were active before the kernel installed its own."""

    showwarning: Any
    excepthook: Any

    def restore(self) -> None:
        """Put the previous hooks back."""
        warnings.showwarning = self.showwarning
        sys.excepthook = self.excepthook


def install_handlers() -> InstalledHandlers:
    """Install the kernel hooks and return what they replaced."""
    previous = InstalledHandlers(warnings.showwarning, sys.excepthook)
    warnings.showwarning = warning_to_exception
    sys.excepthook = log_uncaught
    return previous
