import contextlib
import io
import threading
import typing


class BufferPool:
    """
    Thread-safe pool of reusable text buffers.

    Buffers are reset when acquired and must be released by the caller
    once their content has been copied out. Acquiring from an empty pool
    allocates a new buffer.
    """

    def __init__(self, max_idle: int = 16):
        """
        Initialize the BufferPool.

        Args:
            max_idle: Maximum number of released buffers kept for reuse.
                Extra buffers are discarded on release.
        """
        self.max_idle = max_idle
        self._free: list[io.StringIO] = []
        self._lock = threading.Lock()

    def acquire(self) -> io.StringIO:
        with self._lock:
            buf = self._free.pop() if self._free else None
        if buf is None:
            return io.StringIO()
        buf.seek(0)
        buf.truncate(0)
        return buf

    def release(self, buf: io.StringIO) -> None:
        with self._lock:
            if len(self._free) < self.max_idle:
                self._free.append(buf)

    @contextlib.contextmanager
    def borrow(self) -> typing.Iterator[io.StringIO]:
        """Acquire a buffer for the duration of a ``with`` block."""
        buf = self.acquire()
        try:
            yield buf
        finally:
            self.release(buf)

    @property
    def idle(self) -> int:
        with self._lock:
            return len(self._free)

    def __repr__(self) -> str:
        return f"<BufferPool idle={self.idle} max_idle={self.max_idle}>"


__all__ = ["BufferPool"]
