from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field

DEFAULT_CITY_FEEDS: dict[str, str] = {
    "București": "BUCHAREST-REGION",
    "Bucharest": "BUCHAREST-REGION",
    "Brașov": "mdb-2143-202512160153",
    "Braşov": "mdb-2143-202512160153",
    "Brasov": "mdb-2143-202512160153",
}


def fold_city_name(name: str) -> str:
    """Lower-case and strip diacritics ('Brașov' and 'Braşov' -> 'brasov')."""

    decomposed = unicodedata.normalize("NFKD", name.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def parse_city_feeds(raw: str | None) -> dict[str, str]:
    """Parse 'City=feed;Other City=feed2' into a mapping."""

    out: dict[str, str] = {}
    for part in (raw or "").split(";"):
        if "=" not in part:
            continue
        city, feed = part.split("=", 1)
        city, feed = city.strip(), feed.strip()
        if city and feed:
            out[city] = feed
    return out


@dataclass(slots=True)
class CityFeedDirectory:
    """Static city display name -> feed path table."""

    mapping: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CITY_FEEDS))

    def feed_path_for_city(self, city_name: str | None) -> str | None:
        if not city_name:
            return None

        if city_name in self.mapping:
            return self.mapping[city_name]

        lowered = city_name.strip().lower()
        for key, value in self.mapping.items():
            if key.lower() == lowered:
                return value

        folded = fold_city_name(city_name)
        for key, value in self.mapping.items():
            if fold_city_name(key) == folded:
                return value

        return None
