from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_VALUE_ENV = "HEATMATRIX_DEFAULT_VALUE"


class HeatMapConfig(BaseModel):
    default_value: int = 0
    strict_axis: bool = False


class OutputsConfig(BaseModel):
    tables_format: Literal["csv", "parquet", "json"] = "csv"


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    heatmap: HeatMapConfig = Field(default_factory=HeatMapConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Path | None = None) -> AppConfig:
    data: dict = {}
    if path is not None:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)

    env_default = os.getenv(DEFAULT_VALUE_ENV)
    if env_default and "default_value" not in (data.get("heatmap") or {}):
        try:
            config.heatmap.default_value = int(env_default)
        except ValueError as exc:
            raise ValueError(f"{DEFAULT_VALUE_ENV} must be an integer, got {env_default!r}") from exc
    return config
