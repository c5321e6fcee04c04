from .memory_feed_cache import MemoryFeedCache

__all__ = ["MemoryFeedCache"]
