import pytest
from pydantic import ValidationError

from sqlsink.config import SinkConfig
from sqlsink.exceptions import ConfigError


def test_config_defaults():
    config = SinkConfig(
        uri="sqlite:///events.db", table="events", mapping={"tag": "@tag"}
    )

    assert config.batch_size == 500
    assert config.max_batch_bytes is None
    assert config.retry_interval == 1.0
    assert config.max_retries == 3


@pytest.mark.parametrize(
    "overrides",
    [
        {"mapping": {}},
        {"table": " "},
        {"batch_size": 0},
        {"max_retries": -1},
        {"mapping": {"host": ""}},
        {"unknown": True},
    ],
)
def test_invalid_config_raises_config_error(overrides):
    data = {"uri": "sqlite://", "table": "events", "mapping": {"tag": "@tag"}}
    data.update(overrides)

    with pytest.raises(ConfigError):
        SinkConfig.from_mapping(data)


def test_from_toml_sink_table_keeps_mapping_order(tmp_path):
    path = tmp_path / "sink.toml"
    path.write_text(
        "[sink]\n"
        'uri = "postgresql://fluent@localhost/logs"\n'
        'table = "access_log"\n'
        "batch_size = 100\n"
        "\n"
        "[sink.mapping]\n"
        'time = "@timestamp"\n'
        'tag = "@tag"\n'
        'path = "request_path"\n'
        'code = "status"\n'
    )

    config = SinkConfig.from_toml(path)

    assert config.table == "access_log"
    assert config.batch_size == 100
    assert list(config.mapping) == ["time", "tag", "path", "code"]
    assert config.mapping["path"] == "request_path"


def test_from_toml_top_level(tmp_path):
    path = tmp_path / "sink.toml"
    path.write_text(
        'uri = "sqlite:///events.db"\n'
        'table = "events"\n'
        "[mapping]\n"
        'tag = "_tag"\n'
    )

    config = SinkConfig.from_toml(path)

    assert config.mapping == {"tag": "_tag"}


def test_from_toml_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        SinkConfig.from_toml(tmp_path / "missing.toml")


def test_from_toml_invalid_document(tmp_path):
    path = tmp_path / "sink.toml"
    path.write_text("uri = \n")

    with pytest.raises(ConfigError):
        SinkConfig.from_toml(path)


def test_environment_fills_missing_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("SQLSINK_BATCH_SIZE", "42")
    monkeypatch.setenv("SQLSINK_RETRY_INTERVAL", "0.25")
    path = tmp_path / "sink.toml"
    path.write_text(
        "[sink]\n"
        'uri = "sqlite:///events.db"\n'
        'table = "events"\n'
        "retry_interval = 2.0\n"
        "[sink.mapping]\n"
        'tag = "@tag"\n'
    )

    config = SinkConfig.from_toml(path)

    assert config.batch_size == 42
    assert config.retry_interval == 2.0


def test_config_is_frozen():
    config = SinkConfig(uri="sqlite://", table="events", mapping={"tag": "@tag"})

    with pytest.raises(ValidationError):
        config.batch_size = 10
