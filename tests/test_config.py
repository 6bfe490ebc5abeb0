from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from heatmatrix.config import DEFAULT_VALUE_ENV, load_config


def test_load_config_defaults_without_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(DEFAULT_VALUE_ENV, raising=False)
    cfg = load_config()

    assert cfg.heatmap.default_value == 0
    assert cfg.heatmap.strict_axis is False
    assert cfg.outputs.tables_format == "csv"
    assert cfg.logging.level == "INFO"


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_config(config_path).heatmap.default_value == 0


def test_load_config_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(DEFAULT_VALUE_ENV, "7")
    config_data = {
        "heatmap": {"default_value": -1, "strict_axis": True},
        "outputs": {"tables_format": "json"},
        "logging": {"level": "DEBUG"},
    }
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(config_data), encoding="utf-8")

    cfg = load_config(config_path)

    assert cfg.heatmap.default_value == -1
    assert cfg.heatmap.strict_axis is True
    assert cfg.outputs.tables_format == "json"
    assert cfg.logging.level == "DEBUG"


def test_load_config_uses_env_default_value(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"heatmap": {"strict_axis": True}}), encoding="utf-8")

    monkeypatch.setenv(DEFAULT_VALUE_ENV, "7")
    assert load_config(config_path).heatmap.default_value == 7

    monkeypatch.setenv(DEFAULT_VALUE_ENV, "seven")
    with pytest.raises(ValueError, match=DEFAULT_VALUE_ENV):
        load_config(config_path)


def test_load_config_rejects_unknown_sections(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"buckets": {"width": 10}}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_config(config_path)
