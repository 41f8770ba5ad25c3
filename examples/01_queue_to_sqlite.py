import os
import queue
import time

from sqlalchemy import create_engine, text

from sqlsink import (
    Event,
    QueueInputAdapter,
    Sink,
    SinkConfig,
    SQLOutputAdapter,
)

DB_PATH = os.path.abspath("examples/output_data/access_log.db")


def setup_output_db(uri: str) -> None:
    engine = create_engine(uri)
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE IF EXISTS access_log"))
        conn.execute(
            text("""
            CREATE TABLE access_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                tag TEXT NOT NULL,
                path TEXT,
                status INTEGER CHECK (status BETWEEN 100 AND 599)
            )
        """)
        )
    engine.dispose()


def main():
    os.makedirs(os.path.dirname(DB_PATH), exist_ok=True)
    uri = f"sqlite:///{DB_PATH}"
    setup_output_db(uri)

    config = SinkConfig(
        uri=uri,
        table="access_log",
        mapping={"tag": "@tag", "path": "request_path", "status": "code"},
        batch_size=50,
    )
    events = queue.Queue()
    sink = Sink(QueueInputAdapter(events), SQLOutputAdapter(config))
    report = sink.start()

    for i in range(1_000):
        # Every 97th event carries a status the table rejects
        code = 999 if i % 97 == 0 else 200
        events.put(
            Event.from_dict(
                {
                    "tag": "nginx.access",
                    "record": {"request_path": f"/items/{i}", "code": code},
                }
            )
        )
    events.put(None)

    while not report.is_finished:
        print(f"Written: {report.written_count} | Discarded: {report.discarded_count}")
        time.sleep(0.2)

    print("\nSink Finished!")
    print(report)


if __name__ == "__main__":
    main()
