from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable


class IFeedCache(ABC):
    """Port for memoising parsed feed tables.

    Loader exceptions propagate and nothing is stored for the key.
    """

    @abstractmethod
    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        raise NotImplementedError

    @abstractmethod
    def invalidate(self, key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def size(self) -> int:
        raise NotImplementedError
