from sqlsink.buffer import RecordBuffer
from sqlsink.config import SinkConfig
from sqlsink.drivers import BaseDriver, BaseTransaction, SQLAlchemyDriver
from sqlsink.encoder import Encoder, MappingTable
from sqlsink.exceptions import (
    AdapterNotStartedError,
    BatchWriteError,
    BeginError,
    CommitError,
    ConfigError,
    DriverNotConnectedError,
    RollbackError,
    SinkError,
)
from sqlsink.input_adapter import (
    BaseInputAdapter,
    IterableInputAdapter,
    QueueInputAdapter,
)
from sqlsink.output_adapter import BaseOutputAdapter, SQLOutputAdapter
from sqlsink.report import SinkReport, get_logger
from sqlsink.sink import Sink
from sqlsink.structs import EncodedRecord, Event, SinkStatus, approximate_size
from sqlsink.utils import BufferPool, PlaceholderCache
from sqlsink.writer import BatchWriter, WriterStats

__all__ = [
    "Sink",
    "SinkConfig",
    "SinkReport",
    "SinkStatus",
    "Event",
    "EncodedRecord",
    "approximate_size",
    "get_logger",
    "Encoder",
    "MappingTable",
    "BufferPool",
    "PlaceholderCache",
    "BatchWriter",
    "WriterStats",
    "RecordBuffer",
    # Drivers
    "BaseDriver",
    "BaseTransaction",
    "SQLAlchemyDriver",
    # Adapters
    "BaseInputAdapter",
    "IterableInputAdapter",
    "QueueInputAdapter",
    "BaseOutputAdapter",
    "SQLOutputAdapter",
    # Errors
    "SinkError",
    "ConfigError",
    "AdapterNotStartedError",
    "DriverNotConnectedError",
    "BatchWriteError",
    "BeginError",
    "RollbackError",
    "CommitError",
]
