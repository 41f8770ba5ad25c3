import os
from datetime import datetime, timezone

from sqlalchemy import create_engine, text

from sqlsink import IterableInputAdapter, Sink, SinkConfig, SQLOutputAdapter

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "sink.toml")


def main():
    os.makedirs("examples/output_data", exist_ok=True)
    config = SinkConfig.from_toml(CONFIG_PATH)

    engine = create_engine(config.uri)
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE IF NOT EXISTS app_log "
                "(tag TEXT, logged_at TEXT, level TEXT, message TEXT)"
            )
        )
    engine.dispose()

    now = datetime.now(timezone.utc).isoformat()
    events = [
        {"tag": "app.web", "time": now, "record": {"level": "info", "msg": "up"}},
        {"tag": "app.web", "time": now, "record": {"level": "warn"}},
        {"tag": "app.db", "time": now, "record": {"msg": "slow query"}},
    ]

    report = Sink(IterableInputAdapter(events), SQLOutputAdapter(config)).run()
    print(report)


if __name__ == "__main__":
    main()
