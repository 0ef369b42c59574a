"""Exception types raised by the kernel."""

from pathlib import Path


class KernelError(Exception):
    """Base class for all kernel errors."""


class InvalidModuleError(KernelError):
    """Raised when a module is registered with a path that is not a directory."""

    def __init__(self, namespace: str, path: str | Path) -> None:
        """Record the offending module namespace and path."""
        self.namespace = namespace
        self.path = Path(path)
        super().__init__(
            f"Attempted to load an invalid or missing module '{namespace}' at '{path}'"
        )


class MissingManifestError(KernelError):
    """Raised when the package manifest cannot be read."""

    def __init__(self, path: str | Path) -> None:
        """Record the manifest location."""
        self.path = Path(path)
        super().__init__(
            f"Package manifest not readable at '{path}'. "
            "Install dependencies before initializing modules."
        )


class ManifestParseError(KernelError):
    """Raised when the package manifest is not valid JSON."""

    def __init__(self, path: str | Path, reason: str) -> None:
        """Record the manifest location and the parser message."""
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Malformed package manifest '{path}': {reason}")


class UnsupportedFormatError(KernelError):
    """Raised when no data loader is registered for a file suffix."""

    def __init__(self, path: str | Path) -> None:
        """Record the file that could not be loaded."""
        self.path = Path(path)
        super().__init__(f"No data loader for '{self.path.suffix}' ({path})")


class DataFormatError(KernelError):
    """Raised when a data file does not evaluate to a mapping."""

    def __init__(self, path: str | Path, got: type) -> None:
        """Record the file and the type found at its top level."""
        self.path = Path(path)
        super().__init__(f"Expected a mapping in '{path}', got {got.__name__}")


class ErrorException(KernelError):
    """Structured, loggable form of a runtime warning or error."""

    def __init__(
        self,
        message: str,
        code: str = "",
        file: str | None = None,
        line: int | None = None,
    ) -> None:
        """Capture the message together with where it was raised."""
        self.message = message
        self.code = code
        self.file = file
        self.line = line
        super().__init__(self.text())

    def text(self) -> str:
        """Return a single-line description suitable for logging."""
        location = f" [ {self.file}:{self.line} ]" if self.file else ""
        prefix = f"{self.code}: " if self.code else ""
        return f"{prefix}{self.message}{location}"
