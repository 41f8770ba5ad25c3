import collections
import typing

from sqlsink.structs import EncodedRecord, SizeEstimator, approximate_size


class RecordBuffer:
    """
    FIFO of encoded records waiting to be written.

    A batch boundary is reached when the buffer holds ``max_records``
    records or when their estimated size reaches ``max_size``. Records the
    writer did not consume are put back at the front with ``requeue`` so
    they are written before anything received later.
    """

    def __init__(
        self,
        max_records: int,
        max_size: int | None = None,
        size_estimator: SizeEstimator = approximate_size,
    ):
        """
        Initialize the RecordBuffer.

        Args:
            max_records: Maximum number of records per batch.
            max_size: Optional bound on the estimated size of a batch.
            size_estimator: Policy used to estimate a record's size.
        """
        if max_records <= 0:
            raise ValueError(f"max_records must be > 0, got {max_records}")
        self.max_records = max_records
        self.max_size = max_size
        self.size_estimator = size_estimator
        self._records: collections.deque[tuple[EncodedRecord, int]] = (
            collections.deque()
        )
        self._size = 0

    @property
    def size(self) -> int:
        return self._size

    @property
    def is_full(self) -> bool:
        if len(self._records) >= self.max_records:
            return True
        return self.max_size is not None and self._size >= self.max_size

    def add(self, record: EncodedRecord) -> bool:
        """Append a record and report whether a batch boundary was reached."""
        size = record.size(self.size_estimator)
        self._records.append((record, size))
        self._size += size
        return self.is_full

    def take(self) -> list[EncodedRecord]:
        """
        Remove and return the next batch.

        The batch respects both limits but always holds at least one record
        when the buffer isn't empty.
        """
        batch: list[EncodedRecord] = []
        batch_size = 0
        while self._records and len(batch) < self.max_records:
            record, size = self._records[0]
            if (
                batch
                and self.max_size is not None
                and batch_size + size > self.max_size
            ):
                break
            self._records.popleft()
            self._size -= size
            batch.append(record)
            batch_size += size
        return batch

    def requeue(self, records: typing.Sequence[EncodedRecord]) -> None:
        for record in reversed(records):
            size = record.size(self.size_estimator)
            self._records.appendleft((record, size))
            self._size += size

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return (
            f"<RecordBuffer records={len(self._records)} size={self._size} "
            f"max_records={self.max_records} max_size={self.max_size}>"
        )


__all__ = ["RecordBuffer"]
