import logging
import threading
import typing
from dataclasses import dataclass

from sqlsink.drivers.base import BaseDriver, BaseTransaction
from sqlsink.exceptions import BeginError, CommitError, RollbackError
from sqlsink.report import get_logger
from sqlsink.structs import EncodedRecord
from sqlsink.utils.placeholders import PlaceholderCache


@dataclass
class WriterStats:
    """Counters accumulated by a BatchWriter over its lifetime."""

    transactions: int = 0
    commits: int = 0
    rollbacks: int = 0
    committed: int = 0
    discarded: int = 0


class BatchWriter:
    """
    Writes batches of encoded records, one transaction per batch.

    Each record becomes its own parameterized INSERT. When a record fails,
    the transaction is rolled back and only the records that preceded the
    failure are attempted again, so every call makes progress:

    - failure at index ``i > 0``: retry ``batch[:i]`` and report its result;
      ``batch[i:]`` is left to the caller.
    - failure at index 0: the record is discarded and reported as consumed,
      so a record the database always rejects cannot block the pipeline.

    Begin, rollback and commit failures raise a ``BatchWriteError`` and
    consume nothing.
    """

    def __init__(
        self,
        driver: BaseDriver,
        table: str,
        placeholders: PlaceholderCache,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the BatchWriter.

        Args:
            driver: Connected SQL driver.
            table: Destination table name.
            placeholders: Placeholder lists sized to the widest record.
            logger: Optional custom logger.
        """
        self.driver = driver
        self.table = table
        self.placeholders = placeholders
        self.logger = logger or get_logger()
        self.stats = WriterStats()
        self._lock = threading.Lock()

    def statement(self, record: EncodedRecord) -> str:
        return (
            f"INSERT INTO {self.table}({record.columns}) "
            f"VALUES({self.placeholders[record.arity]})"
        )

    def write(self, batch: typing.Sequence[EncodedRecord]) -> int:
        """
        Write a batch and return how many records were consumed.

        The caller is responsible for submitting ``batch[consumed:]`` again.

        Raises:
            BeginError: The transaction could not be started.
            RollbackError: Rolling back after a failed insert failed.
            CommitError: The transaction could not be committed.
        """
        with self._lock:
            return self._write(batch)

    def _write(self, batch: typing.Sequence[EncodedRecord]) -> int:
        end = len(batch)
        while end > 0:
            try:
                tx = self.driver.begin()
            except Exception as e:
                self.logger.error(f"Failed to begin transaction: {e}")
                raise BeginError(str(e), batch_size=len(batch)) from e
            self.stats.transactions += 1

            failed_at = self._insert(tx, batch, end)
            if failed_at is None:
                try:
                    tx.commit()
                except Exception as e:
                    self.logger.error(f"Failed to commit {end} record(s): {e}")
                    raise CommitError(str(e), batch_size=len(batch)) from e
                self.stats.commits += 1
                self.stats.committed += end
                return end

            try:
                tx.rollback()
            except Exception as e:
                self.logger.error(f"Failed to roll back transaction: {e}")
                raise RollbackError(str(e), batch_size=len(batch)) from e
            self.stats.rollbacks += 1

            if failed_at == 0:
                self.stats.discarded += 1
                self.logger.warning(
                    f"Discarding record rejected as first of its batch: "
                    f"columns={batch[0].columns}"
                )
                return 1

            self.logger.debug(
                f"Retrying {failed_at} record(s) preceding the failed insert"
            )
            end = failed_at
        return 0

    def _insert(
        self,
        tx: BaseTransaction,
        batch: typing.Sequence[EncodedRecord],
        end: int,
    ) -> int | None:
        for i in range(end):
            record = batch[i]
            try:
                tx.execute(self.statement(record), record.values)
            except Exception as e:
                self.logger.error(
                    f"Failed to insert record {i} into {self.table}: {e}"
                )
                return i
        return None

    def __repr__(self) -> str:
        return f"<BatchWriter table={self.table} driver={self.driver}>"


__all__ = ["BatchWriter", "WriterStats"]
