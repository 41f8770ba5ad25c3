DEFAULT_PLACEHOLDER_PREFIX = "$"


class PlaceholderCache:
    """
    Precomputed positional placeholder lists indexed by arity.

    ``cache[n]`` holds ``n`` comma-joined markers numbered from 1, e.g.
    ``$1,$2,$3`` for ``n == 3``. Index 0 is the empty string. The cache is
    built once so INSERT statements don't rebuild the list on every record.
    """

    def __init__(self, size: int, prefix: str = DEFAULT_PLACEHOLDER_PREFIX):
        """
        Initialize the PlaceholderCache.

        Args:
            size: Largest arity served, usually the size of the column mapping.
            prefix: Marker prefix understood by the driver (``$``, ``:p``, ...).
        """
        if size < 0:
            raise ValueError(f"size must be >= 0, got {size}")
        self.size = size
        self.prefix = prefix
        self._entries = [""]
        for i in range(1, size + 1):
            marker = f"{prefix}{i}"
            if i == 1:
                self._entries.append(marker)
            else:
                self._entries.append(f"{self._entries[i - 1]},{marker}")

    def __getitem__(self, arity: int) -> str:
        if not 0 <= arity <= self.size:
            raise IndexError(
                f"No placeholders for arity {arity} (supported: 0..{self.size})"
            )
        return self._entries[arity]

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"<PlaceholderCache size={self.size} prefix={self.prefix!r}>"


__all__ = ["PlaceholderCache", "DEFAULT_PLACEHOLDER_PREFIX"]
