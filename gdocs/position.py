"""
Position tracking in Google Docs index space.

Docs addresses body content in UTF-16 code units starting at index 1, so a
character outside the Basic Multilingual Plane (most emoji) occupies two
positions. Python strings count code points, hence the explicit encoding.
"""

import logging

logger = logging.getLogger(__name__)

# First writable index of a document body
DOCUMENT_START_INDEX = 1


def utf16_length(text: str) -> int:
    """Length of `text` in UTF-16 code units."""
    # surrogatepass keeps lone surrogates countable instead of raising
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


class PositionTracker:
    """
    Monotonic cursor into the document being assembled.

    Example:
        >>> tracker = PositionTracker()
        >>> tracker.advance("Hi 👋")
        (1, 5)
        >>> tracker.index
        5
    """

    def __init__(self, start_index: int = DOCUMENT_START_INDEX) -> None:
        self._index = start_index

    @property
    def index(self) -> int:
        return self._index

    def advance(self, text: str) -> tuple[int, int] | None:
        """
        Move the cursor past `text`.

        Returns:
            The half-open (start, end) span `text` occupies, or None when the
            chunk is empty and the cursor did not move.
        """
        length = utf16_length(text)
        if length == 0:
            return None

        start = self._index
        self._index += length
        logger.debug(f"Advanced cursor {start} -> {self._index} over {text!r}")
        return start, self._index
