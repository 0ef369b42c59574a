"""Loading of message files merged across the cascading filesystem."""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from cascadefs.deep_merge import deep_merge
from cascadefs.dotted_path import get_path
from cascadefs.load_data import load_data

if TYPE_CHECKING:
    from cascadefs.resolution_cache import ResolutionCache

logger = logging.getLogger(__name__)

MESSAGES_DIRECTORY = "messages"


class MessageLoader:
    """Combines every 'messages/<file>' found in the roots into one mapping.

    Files are merged lowest precedence first, so keys from higher precedence
    roots win at any depth. Combined results are kept for the process.
    """

    def __init__(
        self,
        cache: "ResolutionCache",
        paths: Callable[[], Sequence[Path]],
        extension: str = "yaml",
    ) -> None:
        """Initialize the loader.

        'paths' is called on every uncached load to get the current roots.
        """
        self.cache = cache
        self.paths = paths
        self.extension = extension
        self.messages: dict[str, dict[str, Any]] = {}

    def load_messages(self, file_id: str) -> dict[str, Any]:
        """Return the merged messages for 'file_id'."""
        if file_id in self.messages:
            return self.messages[file_id]

        files = self.cache.find_file(
            self.paths(), MESSAGES_DIRECTORY, file_id, self.extension, array=True
        )
        combined: dict[str, Any] = {}
        files = files or []
        for f in files:
            combined = deep_merge(combined, load_data(f))
        logger.debug("Loaded messages %s from %d file(s)", file_id, len(files))

        self.messages[file_id] = combined
        return combined

    def message(
        self, file_id: str, path: str | None = None, default: Any = None
    ) -> Any:
        """Return all messages of a file, or the one at a dotted key path."""
        messages = self.load_messages(file_id)
        if path is None:
            return messages
        return get_path(messages, path, default)

    def clear(self) -> None:
        """Forget all combined message files."""
        self.messages.clear()
