from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from heatmatrix.heatmap import RowPayload
from heatmatrix.pipeline.read_heatmap import build_row_ids


@dataclass(frozen=True)
class HeatMapRequest:
    expected_ids: list[str]
    rows: dict[str, RowPayload] = field(default_factory=dict)
    source_path: str | None = None


def parse_request(payload: Mapping[str, Any], *, source_path: Path | None = None) -> HeatMapRequest:
    raw_rows = payload.get("rows") or {}
    if not isinstance(raw_rows, Mapping):
        raise ValueError("request field 'rows' must be a mapping of row id to row data")
    rows: dict[str, RowPayload] = {}
    for row_id, raw_data in raw_rows.items():
        if not isinstance(raw_data, (str, Mapping)):
            raise ValueError(
                f"row {row_id!r} must be a data table string or a mapping, "
                f"got {type(raw_data).__name__}"
            )
        rows[str(row_id)] = raw_data

    if payload.get("expected_ids") is not None:
        expected_ids = [str(row_id) for row_id in payload["expected_ids"]]
    elif payload.get("time_buckets") is not None:
        entity_id = payload.get("entity_id")
        if not isinstance(entity_id, str) or not entity_id.strip():
            raise ValueError("request field 'entity_id' is required with 'time_buckets'")
        expected_ids = build_row_ids(payload["time_buckets"], entity_id.strip())
    else:
        raise ValueError("request must define either 'expected_ids' or 'time_buckets'")

    return HeatMapRequest(
        expected_ids=expected_ids,
        rows=rows,
        source_path=str(source_path) if source_path is not None else None,
    )


def load_request(path: Path) -> HeatMapRequest:
    """Load a heat map request from a YAML or JSON document."""
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"request file must contain a mapping: {path}")
    return parse_request(payload, source_path=path)
