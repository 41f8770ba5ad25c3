import enum
import typing
from dataclasses import dataclass, field
from datetime import datetime, timezone


class SinkStatus(enum.Enum):
    """
    Lifecycle status of a Sink execution.

    - PENDING: Execution hasn't started yet.
    - RUNNING: Actively pulling events and writing batches.
    - COMPLETED: Finished successfully (all source events consumed).
    - FAILED: Stopped because of an unrecoverable error.
    - ABORTED: Stopped manually by the user.
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Event:
    """
    One unit of input flowing through the pipeline.

    Events are produced upstream and are read-only to the sink.
    """

    tag: str
    time: datetime
    record: typing.Mapping[str, typing.Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: typing.Mapping[str, typing.Any]) -> "Event":
        """
        Build an Event from a plain dictionary.

        Args:
            data: Mapping with ``tag``, ``record`` and an optional ``time``.
                A missing time defaults to the current UTC time.
        """
        return cls(
            tag=data.get("tag", ""),
            time=data.get("time") or datetime.now(timezone.utc),
            record=data.get("record") or {},
        )


#: Policy used to estimate the size of an encoded record for batching.
SizeEstimator = typing.Callable[["EncodedRecord"], int]


def approximate_size(record: "EncodedRecord") -> int:
    # Character count of the column list plus the number of values.
    return len(record.columns) + len(record.values)


@dataclass
class EncodedRecord:
    """
    Column list and positionally aligned values produced from one event.

    ``columns`` only names the columns that were resolved from the event,
    so the arity can vary from one record to the next.
    """

    columns: str
    values: list[typing.Any] = field(default_factory=list)

    @property
    def arity(self) -> int:
        return len(self.values)

    def size(self, estimator: SizeEstimator = approximate_size) -> int:
        """Estimated size used for batch accounting, not byte accurate."""
        return estimator(self)


__all__ = [
    "SinkStatus",
    "Event",
    "EncodedRecord",
    "SizeEstimator",
    "approximate_size",
]
