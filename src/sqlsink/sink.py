import logging
import threading

from sqlsink.buffer import RecordBuffer
from sqlsink.config import SinkConfig
from sqlsink.exceptions import BatchWriteError, ConfigError
from sqlsink.input_adapter.base import BaseInputAdapter
from sqlsink.output_adapter.base import BaseOutputAdapter
from sqlsink.report import SinkReport, get_logger
from sqlsink.structs import EncodedRecord, SizeEstimator, approximate_size


class Sink:
    """
    Drives events from an input adapter into an output adapter.

    Events are encoded one by one, buffered until a batch boundary and
    written batch by batch. Whatever the output adapter does not consume
    is put back at the front of the buffer and written with the next batch,
    so only records the database rejects on their own are lost.
    """

    def __init__(
        self,
        input_adapter: BaseInputAdapter,
        output_adapter: BaseOutputAdapter,
        config: SinkConfig | None = None,
        logger: logging.Logger | None = None,
        size_estimator: SizeEstimator = approximate_size,
    ) -> None:
        """
        Initialize a new Sink.

        Args:
            input_adapter: Source of events.
            output_adapter: Destination; initialized but not yet started.
            config: Batching and retry settings. Defaults to the output
                adapter's own configuration.
            logger: Optional custom logger.
            size_estimator: Policy used to estimate record sizes for the
                ``max_batch_bytes`` limit.
        """
        if config is None:
            config = getattr(output_adapter, "config", None)
        if config is None:
            raise ConfigError("Sink requires a configuration")

        self.input_adapter = input_adapter
        self.output_adapter = output_adapter
        self.config = config
        self.logger = logger or get_logger()
        self.input_adapter.set_logger(self.logger)

        self._buffer = RecordBuffer(
            config.batch_size,
            max_size=config.max_batch_bytes,
            size_estimator=size_estimator,
        )
        self._report = SinkReport()
        self._thread: threading.Thread | None = None

    @property
    def report(self) -> SinkReport:
        """Get the current progress report of the sink."""
        return self._report

    @property
    def pending(self) -> int:
        """Number of encoded records not yet written."""
        return len(self._buffer)

    def run(self) -> SinkReport:
        """
        Run the sink in the calling thread until the input is exhausted.

        Raises:
            Exception: Whatever stopped the run, also kept in the report.
        """
        self._report._mark_running()
        self._execute()
        if self._report.exception is not None:
            raise self._report.exception
        return self._report

    def start(self, wait: bool = False) -> SinkReport:
        """
        Start the sink in a separate thread.

        Args:
            wait: If True, blocks until the sink finishes.
        """
        if self._thread and self._thread.is_alive():
            raise RuntimeError("Sink is already running")

        self._report._mark_running()
        self._thread = threading.Thread(target=self._execute, daemon=False)
        self._thread.start()

        if wait:
            self.wait()
        return self._report

    def wait(self, timeout: float | None = None) -> bool:
        """
        Wait for the sink to finish.

        Args:
            timeout: Optional timeout in seconds.
        Returns:
            True if the sink finished, False if it timed out.
        """
        return self._report.wait(timeout)

    def shutdown(self, timeout: float = 5.0) -> None:
        """
        Request the sink to stop and wait for its thread to finish.

        Args:
            timeout: Maximum time to wait for the thread to join.
        """
        self._report.abort()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                self.logger.warning("Sink thread did not finish cleanly within timeout")

    def _execute(self) -> None:
        report = self._report
        try:
            with self.input_adapter, self.output_adapter:
                for event in self.input_adapter:
                    if report.is_aborted:
                        break
                    report.total_received += 1

                    record = self.output_adapter.encode(event)
                    if record is None:
                        report.dropped_count += 1
                        continue
                    report.encoded_count += 1

                    if self._buffer.add(record):
                        self._flush(drain=False)

                self._flush(drain=True)
        except Exception as e:
            self.logger.error(f"Sink execution failed: {e}")
            report._mark_failed(e)
            return

        if report.is_aborted:
            if self.pending:
                self.logger.warning(
                    f"Sink aborted with {self.pending} record(s) left unwritten"
                )
            return
        report._mark_completed()
        self.logger.info(f"Sink finished: {report}")

    def _flush(self, drain: bool) -> None:
        while (
            self._buffer
            and (drain or self._buffer.is_full)
            and not self._report.is_aborted
        ):
            batch = self._buffer.take()
            consumed = self._write(batch)
            self._buffer.requeue(batch[consumed:])

    def _write(self, batch: list[EncodedRecord]) -> int:
        failures = 0
        while True:
            discarded_before = self.output_adapter.discarded_count
            try:
                consumed = self.output_adapter.write(batch)
            except BatchWriteError as e:
                failures += 1
                if failures > self.config.max_retries:
                    self.logger.error(
                        f"Giving up on batch of {len(batch)} record(s) "
                        f"after {failures} failed attempt(s)"
                    )
                    self._buffer.requeue(batch)
                    raise
                self._report.retry_count += 1
                self.logger.warning(
                    f"Batch write failed ({e}), retrying in "
                    f"{self.config.retry_interval}s "
                    f"[{failures}/{self.config.max_retries}]"
                )
                if self._report.wait(self.config.retry_interval):
                    return 0
                continue

            discarded = self.output_adapter.discarded_count - discarded_before
            self._report.batch_count += 1
            self._report.discarded_count += discarded
            self._report.written_count += consumed - discarded
            return consumed

    def __enter__(self) -> "Sink":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if not self._report.is_finished:
            self.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=10.0)
            if self._thread.is_alive():
                self.logger.warning("Sink thread still running after context exit")

    def __repr__(self) -> str:
        return f"<Sink input={self.input_adapter} output={self.output_adapter}>"


__all__ = ["Sink"]
