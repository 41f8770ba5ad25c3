import typing

from sqlalchemy import create_engine, make_url, text
from sqlalchemy.engine import Connection, Engine, RootTransaction

from sqlsink.drivers.base import BaseDriver, BaseTransaction
from sqlsink.exceptions import DriverNotConnectedError

PARAM_NAME_PREFIX = "p"


class SQLAlchemyTransaction(BaseTransaction):
    def __init__(self, connection: Connection, transaction: RootTransaction):
        self.connection = connection
        self.transaction = transaction

    def execute(self, statement: str, values: typing.Sequence[typing.Any]) -> None:
        params = {f"{PARAM_NAME_PREFIX}{i}": v for i, v in enumerate(values, start=1)}
        self.connection.execute(text(statement), params)

    def commit(self) -> None:
        try:
            self.transaction.commit()
        finally:
            self.connection.close()

    def rollback(self) -> None:
        try:
            self.transaction.rollback()
        finally:
            self.connection.close()


class SQLAlchemyDriver(BaseDriver):
    """
    Driver backed by a SQLAlchemy engine.

    Statements are run through ``sqlalchemy.text`` with bind parameters
    named ``p1..pn``, so any database SQLAlchemy supports can be targeted
    from a single URI.
    """

    placeholder_prefix = f":{PARAM_NAME_PREFIX}"

    def __init__(self, uri: str, **engine_options: typing.Any):
        """
        Initialize the SQLAlchemyDriver.

        Args:
            uri: SQLAlchemy database URL, e.g. ``postgresql://user@host/db``.
            **engine_options: Extra keyword arguments for ``create_engine``.
        """
        self.uri = uri
        self.engine_options = engine_options
        self._engine: Engine | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise DriverNotConnectedError(
                "Driver is not connected. Call connect() before use."
            )
        return self._engine

    def connect(self) -> None:
        if self._engine is None:
            self._engine = create_engine(self.uri, **self.engine_options)

    def begin(self) -> SQLAlchemyTransaction:
        connection = self.engine.connect()
        try:
            transaction = connection.begin()
        except Exception:
            connection.close()
            raise
        return SQLAlchemyTransaction(connection, transaction)

    def close(self) -> None:
        if self._engine is not None:
            engine, self._engine = self._engine, None
            engine.dispose()

    def __repr__(self) -> str:
        url = make_url(self.uri).render_as_string(hide_password=True)
        return f"<SQLAlchemyDriver url={url}>"


__all__ = ["SQLAlchemyDriver", "SQLAlchemyTransaction"]
