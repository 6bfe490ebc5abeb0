from __future__ import annotations

from pathlib import Path

from heatmatrix.config import AppConfig
from heatmatrix.heatmap import HeatMap
from heatmatrix.io.read import HeatMapRequest
from heatmatrix.io.write import write_summary, write_table
from heatmatrix.pipeline.read_heatmap import read_heat_map


def run_all(request: HeatMapRequest, out_dir: Path, config: AppConfig) -> tuple[HeatMap, Path]:
    heat_map = read_heat_map(
        request.expected_ids,
        request.rows,
        config.heatmap.default_value,
        strict_axis=config.heatmap.strict_axis,
    )
    out_dir.mkdir(parents=True, exist_ok=True)
    fmt = config.outputs.tables_format
    table_path = write_table(heat_map.to_frame(), out_dir / f"heatmap.{fmt}", fmt=fmt)
    write_summary(heat_map.to_dict(), out_dir / "summary.json")
    return heat_map, table_path
