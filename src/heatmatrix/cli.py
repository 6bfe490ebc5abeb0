from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer
import yaml

from heatmatrix.config import AppConfig, load_config
from heatmatrix.errors import HeatMapError
from heatmatrix.heatmap import HeatMap
from heatmatrix.io.read import load_request
from heatmatrix.logging import configure_logging
from heatmatrix.pipeline.run_all import run_all

app = typer.Typer(no_args_is_help=True, add_completion=False)


class TableFormat(str, Enum):
    csv = "csv"
    parquet = "parquet"
    json = "json"


def _load_app_config(config_path: Path | None) -> AppConfig:
    return load_config(config_path)


@app.command()
def build(
    request: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    default_value: int | None = typer.Option(
        None, help="Count used for buckets a row has no data for."
    ),
    strict_axis: bool | None = typer.Option(
        None,
        "--strict-axis/--no-strict-axis",
        help="Fail when a row's bucket keys disagree with the first row's.",
    ),
    table_format: TableFormat | None = typer.Option(
        None, "--format", help="Override outputs.tables_format."
    ),
) -> None:
    """Densify the rows of a request file into a heat map table."""
    try:
        cfg = _load_app_config(config)
    except (ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    configure_logging(cfg.logging.level)
    if default_value is not None:
        cfg.heatmap.default_value = default_value
    if strict_axis is not None:
        cfg.heatmap.strict_axis = strict_axis
    if table_format is not None:
        cfg.outputs.tables_format = table_format.value

    try:
        heat_request = load_request(request)
        heat_map, table_path = run_all(request=heat_request, out_dir=out, config=cfg)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--request") from exc
    typer.echo(
        f"Heat map complete. Buckets: {heat_map.bucket_count}, "
        f"columns: {len(heat_map.columns)}. Table: {table_path}"
    )


@app.command()
def buckets(
    request: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
) -> None:
    """Print the bucket axis derived from the first row of a request file."""
    try:
        heat_request = load_request(request)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--request") from exc
    first_row = next(iter(heat_request.rows.items()), None)
    if first_row is None:
        raise typer.BadParameter("request has no rows to derive buckets from", param_hint="--request")

    heat_map = HeatMap()
    try:
        heat_map.build_column(first_row[0], first_row[1], 0)
    except HeatMapError as exc:
        raise typer.BadParameter(str(exc), param_hint="--request") from exc
    for bucket in heat_map.buckets or []:
        typer.echo(bucket.label)
