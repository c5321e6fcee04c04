from __future__ import annotations

from triproute.app.ports.output import IFeedSource

from .http_feed_source import HttpFeedSource
from .local_feed_source import LocalFeedSource

__all__ = ["HttpFeedSource", "LocalFeedSource", "feed_source_for_root"]


def feed_source_for_root(feed_root: str | None) -> IFeedSource:
    """Pick the HTTP source for URL roots, the filesystem one otherwise."""

    if feed_root and feed_root.lower().startswith(("http://", "https://")):
        return HttpFeedSource(feed_root=feed_root)
    return LocalFeedSource(base_path=feed_root)
