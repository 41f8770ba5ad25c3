import pathlib
import typing

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource

from sqlsink.exceptions import ConfigError


class SinkConfig(BaseSettings):
    """
    Configuration of the SQL output adapter and its driving loop.

    ``mapping`` maps destination columns to source selectors and keeps the
    declaration order of the configuration file. Settings missing from the
    constructor or the file can be provided as ``SQLSINK_*`` environment
    variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="SQLSINK_",
        extra="forbid",
        frozen=True,
    )

    uri: str
    table: str
    mapping: dict[str, str]
    batch_size: int = Field(default=500, gt=0)
    max_batch_bytes: int | None = Field(default=None, gt=0)
    retry_interval: float = Field(default=1.0, ge=0)
    max_retries: int = Field(default=3, ge=0)

    @field_validator("uri", "table")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("mapping")
    @classmethod
    def _mapping_not_empty(cls, value: dict[str, str]) -> dict[str, str]:
        if not value:
            raise ValueError("at least one column must be mapped")
        for column, selector in value.items():
            if not column or not selector:
                raise ValueError("column names and selectors must not be empty")
        return value

    @classmethod
    def from_mapping(cls, data: typing.Mapping[str, typing.Any]) -> "SinkConfig":
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid sink configuration: {e}") from e

    @classmethod
    def from_toml(cls, path: str | pathlib.Path) -> "SinkConfig":
        """
        Load the configuration from a TOML file.

        Settings are read from a ``[sink]`` table when present, otherwise
        from the top level of the document.
        """
        path = pathlib.Path(path)
        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")
        try:
            data = TomlConfigSettingsSource(cls, toml_file=path).toml_data
        except (OSError, ValueError) as e:
            raise ConfigError(f"Cannot read configuration {path}: {e}") from e
        return cls.from_mapping(data.get("sink", data))


__all__ = ["SinkConfig"]
