import typing
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine, text

from sqlsink.drivers.base import BaseDriver, BaseTransaction
from sqlsink.structs import EncodedRecord, Event


class FakeTransaction(BaseTransaction):
    def __init__(self, driver: "FakeDriver"):
        self.driver = driver
        self.pending: list[tuple] = []

    def execute(self, statement: str, values: typing.Sequence[typing.Any]) -> None:
        self.driver.executed.append((statement, list(values)))
        if any(v in self.driver.reject for v in values):
            raise RuntimeError(f"constraint violation: {list(values)}")
        self.pending.append(tuple(values))

    def commit(self) -> None:
        if self.driver.fail_commit:
            raise RuntimeError("commit failed")
        self.driver.rows.extend(self.pending)
        self.driver.commits += 1

    def rollback(self) -> None:
        self.driver.rollbacks += 1
        if self.driver.fail_rollback:
            raise RuntimeError("rollback failed")


class FakeDriver(BaseDriver):
    """In-memory driver that rejects any record holding a value in ``reject``."""

    def __init__(
        self,
        reject: typing.Iterable[typing.Any] = (),
        fail_begin: int = 0,
        fail_commit: bool = False,
        fail_rollback: bool = False,
    ):
        self.reject = set(reject)
        self.fail_begin = fail_begin
        self.fail_commit = fail_commit
        self.fail_rollback = fail_rollback
        self.executed: list[tuple[str, list]] = []
        self.rows: list[tuple] = []
        self.begins = 0
        self.commits = 0
        self.rollbacks = 0
        self.connected = False
        self.closed = False

    def connect(self) -> None:
        self.connected = True

    def begin(self) -> FakeTransaction:
        if self.fail_begin:
            self.fail_begin -= 1
            raise ConnectionError("connection refused")
        self.begins += 1
        return FakeTransaction(self)

    def close(self) -> None:
        self.closed = True


def make_event(tag: str = "app.access", **record: typing.Any) -> Event:
    return Event(
        tag=tag,
        time=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        record=record,
    )


def make_records(*values: typing.Any) -> list[EncodedRecord]:
    return [EncodedRecord(columns="value", values=[v]) for v in values]


@pytest.fixture
def fake_driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture
def sqlite_uri(tmp_path) -> str:
    uri = f"sqlite:///{tmp_path / 'sink.db'}"
    engine = create_engine(uri)
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                CREATE TABLE events (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    tag TEXT,
                    host TEXT,
                    status INTEGER CHECK (status >= 0),
                    message TEXT
                )
                """
            )
        )
    engine.dispose()
    return uri


ROWS_QUERY = "SELECT tag, host, status, message FROM events ORDER BY id"


def fetch_rows(uri: str, query: str = ROWS_QUERY) -> list[tuple]:
    engine = create_engine(uri)
    try:
        with engine.connect() as conn:
            return [tuple(row) for row in conn.execute(text(query))]
    finally:
        engine.dispose()
