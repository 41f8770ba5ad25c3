from sqlsink.utils.placeholders import DEFAULT_PLACEHOLDER_PREFIX, PlaceholderCache
from sqlsink.utils.pool import BufferPool

__all__ = ["BufferPool", "PlaceholderCache", "DEFAULT_PLACEHOLDER_PREFIX"]
