import logging
import typing

from sqlsink.config import SinkConfig
from sqlsink.drivers.base import BaseDriver
from sqlsink.drivers.sqlalchemy import SQLAlchemyDriver
from sqlsink.encoder import Encoder, MappingTable
from sqlsink.exceptions import AdapterNotStartedError
from sqlsink.output_adapter.base import BaseOutputAdapter
from sqlsink.report import get_logger
from sqlsink.structs import EncodedRecord, Event
from sqlsink.utils.placeholders import PlaceholderCache
from sqlsink.utils.pool import BufferPool
from sqlsink.writer import BatchWriter, WriterStats


class SQLOutputAdapter(BaseOutputAdapter):
    """
    Writes events into a SQL table via batched, transactional inserts.

    Events are projected with an Encoder built from the column mapping and
    written by a BatchWriter, one transaction per batch.
    """

    def __init__(
        self,
        config: SinkConfig | None = None,
        driver: BaseDriver | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the SQLOutputAdapter.

        Args:
            config: Sink configuration. When given, ``init`` is called right away.
            driver: SQL driver. Defaults to a SQLAlchemyDriver for ``config.uri``.
            logger: Optional custom logger.
        """
        self.logger = logger or get_logger()
        self.driver = driver
        self.config: SinkConfig | None = None
        self.encoder: Encoder | None = None
        self.placeholders: PlaceholderCache | None = None
        self._writer: BatchWriter | None = None
        if config is not None:
            self.init(config)

    def init(self, config: SinkConfig) -> None:
        self.config = config
        if self.driver is None:
            self.driver = SQLAlchemyDriver(config.uri)
        mapping = MappingTable(config.mapping)
        self.encoder = Encoder(mapping, pool=BufferPool())
        self.placeholders = PlaceholderCache(
            len(mapping), prefix=self.driver.placeholder_prefix
        )

    def start(self) -> None:
        if self.config is None or self.driver is None or self.placeholders is None:
            raise AdapterNotStartedError("Adapter must be initialized before start()")
        self.driver.connect()
        self._writer = BatchWriter(
            self.driver,
            self.config.table,
            self.placeholders,
            logger=self.logger,
        )
        self.logger.info(f"SQL output started: table={self.config.table}")

    @property
    def writer(self) -> BatchWriter:
        if self._writer is None:
            raise AdapterNotStartedError(
                "Adapter must be started before writing.\n"
                "Use 'with adapter:' or call adapter.start()"
            )
        return self._writer

    @property
    def stats(self) -> WriterStats | None:
        return self._writer.stats if self._writer is not None else None

    @property
    def discarded_count(self) -> int:
        stats = self.stats
        return stats.discarded if stats is not None else 0

    def encode(self, event: Event) -> EncodedRecord | None:
        if self.encoder is None:
            raise AdapterNotStartedError("Adapter must be initialized before encode()")
        return self.encoder.encode(event)

    def write(self, batch: typing.Sequence[EncodedRecord]) -> int:
        return self.writer.write(batch)

    def close(self) -> None:
        self._writer = None
        if self.driver is not None:
            self.driver.close()

    def __repr__(self) -> str:
        table = self.config.table if self.config else None
        return f"<SQLOutputAdapter table={table} driver={self.driver}>"


__all__ = ["SQLOutputAdapter"]
