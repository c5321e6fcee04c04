from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path

from triproute.app.ports.output import IFeedSource
from triproute.domain.algorithms.gtfs_tables import drop_partial_last_line
from triproute.domain.exceptions import FeedUnavailable


@dataclass(slots=True)
class LocalFeedSource(IFeedSource):
    """Reads GTFS text files from `{base_path}/{feed_path}/{name}`.

    Env vars:
      - FEED_ROOT: directory containing one sub-directory per feed (default data/gtfs)

    A read capped by `max_bytes` ends on the last complete line of the prefix.
    """

    base_path: str | Path | None = None

    def _base(self) -> Path:
        value = self.base_path or os.getenv("FEED_ROOT") or "data/gtfs"
        return Path(value)

    def _read(self, path: Path, max_bytes: int | None) -> str:
        with path.open("rb") as fp:
            if max_bytes is None:
                raw = fp.read()
            else:
                limit = max(0, int(max_bytes))
                raw = fp.read(limit + 1)
                if len(raw) > limit:
                    raw = drop_partial_last_line(raw[:limit])
        return raw.decode("utf-8-sig", errors="replace")

    async def fetch_text(
        self, feed_path: str, name: str, *, max_bytes: int | None = None
    ) -> str:
        path = self._base() / feed_path / name
        try:
            return await asyncio.to_thread(self._read, path, max_bytes)
        except OSError as exc:
            raise FeedUnavailable(f"{path}: {exc}") from exc
