"""Configuration classes and YAML loading for temporary files."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import Field, field_validator

from .validation import SchemaModel, ValidationError, parse_model

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yml"
CONFIG_SECTION = "temporary_file"


class BaseConfig:
    TEMP_ROOT: Path | None = None  # platform temp directory
    TEMP_PREFIX = "tmp"
    TEMP_SUFFIX = ""
    ENCODING = "utf-8"
    LOG_LEVEL = "INFO"


class TestingConfig(BaseConfig):
    TESTING = True
    LOG_LEVEL = "DEBUG"


class TempFileSettings(SchemaModel):
    """Where and how backing files are created."""

    directory: Path | None = None
    prefix: str = BaseConfig.TEMP_PREFIX
    suffix: str = BaseConfig.TEMP_SUFFIX
    encoding: str = Field(default=BaseConfig.ENCODING, min_length=1)

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            "".encode(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value}") from exc
        return value

    @classmethod
    def from_config(cls, config: type[BaseConfig] = BaseConfig) -> "TempFileSettings":
        return cls(
            directory=config.TEMP_ROOT,
            prefix=config.TEMP_PREFIX,
            suffix=config.TEMP_SUFFIX,
            encoding=config.ENCODING,
        )


def _load_yaml_config(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_settings(
    path: str | Path | None = None, config: type[BaseConfig] = BaseConfig
) -> TempFileSettings:
    """Merge the ``temporary_file`` YAML section over the class defaults."""

    yaml_config = _load_yaml_config(Path(path) if path is not None else CONFIG_PATH)
    section: Any = yaml_config.get(CONFIG_SECTION) or {}
    if not isinstance(section, Mapping):
        raise ValidationError(f"'{CONFIG_SECTION}' section must be a mapping")
    defaults = TempFileSettings.from_config(config).model_dump()
    return parse_model(TempFileSettings, {**defaults, **section})


@lru_cache(maxsize=1)
def default_settings() -> TempFileSettings:
    return load_settings()


__all__ = [
    "BaseConfig",
    "TestingConfig",
    "TempFileSettings",
    "CONFIG_PATH",
    "load_settings",
    "default_settings",
]
