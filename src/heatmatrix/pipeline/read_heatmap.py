from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from heatmatrix.heatmap import HeatMap, RowPayload

LOGGER = logging.getLogger(__name__)

ROW_ID_SEPARATOR = "_"


def build_row_ids(time_buckets: Iterable[int | str], entity_id: str) -> list[str]:
    """Storage row ids for one entity, one per time bucket, in the given order."""
    return [f"{time_bucket}{ROW_ID_SEPARATOR}{entity_id}" for time_bucket in time_buckets]


def read_heat_map(
    expected_ids: Sequence[str],
    rows: Mapping[str, RowPayload] | Iterable[tuple[str, RowPayload]],
    default_value: int,
    *,
    strict_axis: bool = False,
) -> HeatMap:
    """Build a complete heat map from the rows storage returned.

    Rows are densified in the order given, then every id in ``expected_ids``
    without a row gets an all-default column.
    """
    items = rows.items() if isinstance(rows, Mapping) else rows
    heat_map = HeatMap(strict_axis=strict_axis)
    fetched = 0
    for row_id, raw_data in items:
        heat_map.build_column(row_id, raw_data, default_value)
        fetched += 1

    filled = heat_map.fix_missing_columns(expected_ids, default_value)
    LOGGER.info(
        "Heat map built: %d rows fetched, %d filled, %d buckets",
        fetched,
        filled,
        heat_map.bucket_count,
    )
    return heat_map
