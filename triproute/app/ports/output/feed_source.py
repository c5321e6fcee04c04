from __future__ import annotations

from abc import ABC, abstractmethod


class IFeedSource(ABC):
    """Port for reading raw GTFS text files of a feed."""

    @abstractmethod
    async def fetch_text(
        self, feed_path: str, name: str, *, max_bytes: int | None = None
    ) -> str:
        """Return the file contents, at most `max_bytes` when given.

        A capped read that stops short of the end of the file returns only
        its complete lines, counted on the raw bytes before decoding.

        Raises FeedUnavailable when the file cannot be read.
        """
