import logging
import sys
import threading
from datetime import datetime

from sqlsink.structs import SinkStatus


def get_logger(name: str = "sqlsink") -> logging.Logger:
    """
    Get a configured logger for sqlsink.

    Args:
        name: Name of the logger to retrieve.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


class SinkReport:
    """
    Live progress tracker and final summary for a sink execution.

    The counters are updated by the Sink driving loop as events are
    received, encoded and written.
    """

    def __init__(self) -> None:
        self.status = SinkStatus.PENDING
        self.total_received = 0
        self.encoded_count = 0
        self.dropped_count = 0
        self.written_count = 0
        self.discarded_count = 0
        self.batch_count = 0
        self.retry_count = 0
        self.exception: Exception | None = None
        self.start_time: datetime | None = None
        self.end_time: datetime | None = None
        self._finished_event = threading.Event()

    @property
    def duration(self) -> float:
        """Total execution time in seconds."""
        start = self.start_time
        if not start:
            return 0.0
        end = self.end_time or datetime.now()
        return (end - start).total_seconds()

    @property
    def items_per_second(self) -> float:
        """Write speed (records per second)."""
        duration = self.duration
        if duration == 0:
            return 0.0
        return self.written_count / duration

    @property
    def is_finished(self) -> bool:
        return self._finished_event.is_set()

    @property
    def has_error(self) -> bool:
        return self.exception is not None

    @property
    def is_aborted(self) -> bool:
        return self.status == SinkStatus.ABORTED

    def wait(self, timeout: float | None = None) -> bool:
        """
        Wait for the sink to finish.

        Args:
            timeout: Optional timeout in seconds.
        Returns:
            True if the sink finished, False if it timed out.
        """
        return self._finished_event.wait(timeout)

    def abort(self) -> None:
        self.status = SinkStatus.ABORTED
        self.end_time = datetime.now()
        self._finished_event.set()

    def _mark_running(self) -> None:
        self.status = SinkStatus.RUNNING
        self.start_time = datetime.now()

    def _mark_completed(self) -> None:
        self.status = SinkStatus.COMPLETED
        self.end_time = datetime.now()
        self._finished_event.set()

    def _mark_failed(self, exception: Exception) -> None:
        self.status = SinkStatus.FAILED
        self.exception = exception
        self.end_time = datetime.now()
        self._finished_event.set()

    def __repr__(self) -> str:
        return (
            f"<SinkReport status={self.status.value} "
            f"received={self.total_received} "
            f"written={self.written_count} "
            f"dropped={self.dropped_count} "
            f"discarded={self.discarded_count} "
            f"batches={self.batch_count} "
            f"duration={self.duration:.2f}s>"
        )


__all__ = ["SinkReport", "get_logger"]
