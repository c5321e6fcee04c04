from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import httpx

from triproute.app.ports.output import IFeedSource
from triproute.domain.algorithms.gtfs_tables import drop_partial_last_line
from triproute.domain.exceptions import FeedUnavailable

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpFeedSource(IFeedSource):
    """Fetches GTFS text files over HTTP from `{feed_root}/{feed_path}/{name}`.

    Env vars:
      - FEED_ROOT: base URL of the feed tree (e.g. https://cdn.example.com/gtfs)
      - FEED_TIMEOUT_S: request timeout (default 30)

    Partial reads use a Range header. Servers that ignore it and answer 200
    with the full body are truncated client-side. A cut body is trimmed back
    to its last complete line before decoding.
    """

    feed_root: str | None = None
    timeout_s: float = 30.0
    transport: httpx.AsyncBaseTransport | None = None

    def __post_init__(self) -> None:
        if self.feed_root is None:
            self.feed_root = os.getenv("FEED_ROOT")
        if os.getenv("FEED_TIMEOUT_S"):
            self.timeout_s = float(os.environ["FEED_TIMEOUT_S"])

    def _url(self, feed_path: str, name: str) -> str:
        if not self.feed_root:
            raise FeedUnavailable("FEED_ROOT is not configured")
        return f"{self.feed_root.rstrip('/')}/{feed_path.strip('/')}/{name}"

    async def fetch_text(
        self, feed_path: str, name: str, *, max_bytes: int | None = None
    ) -> str:
        url = self._url(feed_path, name)
        headers: dict[str, str] = {}
        if max_bytes is not None:
            headers["Range"] = f"bytes=0-{max(0, int(max_bytes) - 1)}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s, transport=self.transport
            ) as client:
                resp = await client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise FeedUnavailable(f"{url}: {type(exc).__name__}: {exc}") from exc

        if resp.status_code not in (200, 206):
            raise FeedUnavailable(f"{url}: HTTP {resp.status_code}")

        content = resp.content
        if max_bytes is not None:
            limit = max(0, int(max_bytes))
            cut = len(content) > limit or (
                resp.status_code == 206 and len(content) >= limit
            )
            if len(content) > limit:
                logger.debug(
                    "Server ignored Range header, truncating",
                    extra={"url": url, "bytes": len(content)},
                )
                content = content[:limit]
            if cut:
                content = drop_partial_last_line(content)

        return content.decode("utf-8-sig", errors="replace")
