import abc
import typing

from sqlsink.structs import EncodedRecord, Event

if typing.TYPE_CHECKING:
    from sqlsink.config import SinkConfig


class BaseOutputAdapter(abc.ABC):
    """
    Abstract base class for output plugins.

    The host drives the lifecycle: ``init`` once with the configuration,
    ``start`` to acquire resources, then ``encode`` per event and ``write``
    per batch, and finally ``close``.
    """

    @abc.abstractmethod
    def init(self, config: "SinkConfig") -> None:
        """Prepare the adapter from its configuration. No I/O happens here."""
        raise NotImplementedError

    @abc.abstractmethod
    def start(self) -> None:
        """Acquire external resources, e.g. open the database connection."""
        raise NotImplementedError

    @abc.abstractmethod
    def encode(self, event: Event) -> EncodedRecord | None:
        """
        Convert one event into a record.

        Returns None when the event yields nothing to write.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def write(self, batch: typing.Sequence[EncodedRecord]) -> int:
        """
        Persist a batch and return the number of consumed records.

        Records from index ``consumed`` on must be submitted again by the host.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def close(self) -> None:
        """Release external resources. Errors are propagated as-is."""
        raise NotImplementedError

    @property
    def discarded_count(self) -> int:
        """Records dropped by ``write`` without being persisted."""
        return 0

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
