from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import numpy as np
import pandas as pd

from heatmatrix.buckets import Bucket, build_bucket_axis, parse_bucket_key
from heatmatrix.datatable import DataTable, as_data_table
from heatmatrix.errors import BucketAxisMismatch, UninitializedAxis

LOGGER = logging.getLogger(__name__)

RowPayload = DataTable | str | Mapping[Any, Any]


@dataclass(frozen=True)
class Column:
    id: str
    values: tuple[int, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "values": list(self.values)}


class HeatMap:
    """Value distribution of many rows over one shared bucket axis.

    The axis is taken from the first row passed to ``build_column`` and stays
    fixed afterwards. Every row is expected to carry the same key set; later
    rows are only looked up against the first row's keys. Not thread-safe.
    """

    def __init__(self, strict_axis: bool = False) -> None:
        self.strict_axis = strict_axis
        self._axis_keys: list[str] | None = None
        self._buckets: list[Bucket] | None = None
        self._columns: list[Column] = []

    @property
    def has_axis(self) -> bool:
        return self._buckets is not None

    @property
    def buckets(self) -> list[Bucket] | None:
        return None if self._buckets is None else list(self._buckets)

    @property
    def axis_keys(self) -> list[str] | None:
        return None if self._axis_keys is None else list(self._axis_keys)

    @property
    def columns(self) -> list[Column]:
        return list(self._columns)

    @property
    def bucket_count(self) -> int:
        return 0 if self._buckets is None else len(self._buckets)

    def build_column(self, row_id: str, raw_data: RowPayload, default_value: int) -> Column:
        """Densify one storage row into a column aligned to the bucket axis.

        The first call derives the axis from this row's keys. Axis keys absent
        from the row get ``default_value``; row keys that are not on the axis
        are ignored.
        """
        if not isinstance(row_id, str) or not row_id:
            raise ValueError("row_id must be a non-empty string")
        table = as_data_table(raw_data)

        if self._axis_keys is None:
            axis_keys, buckets = build_bucket_axis(table.sorted_keys(key=parse_bucket_key))
            self._axis_keys = axis_keys
            self._buckets = buckets
            LOGGER.debug("Bucket axis created from row %s with %d buckets", row_id, len(buckets))
        elif self.strict_axis:
            self._check_row_against_axis(row_id, table)

        column = Column(
            id=row_id,
            values=tuple(
                table.get(key) if table.has_key(key) else int(default_value)
                for key in self._axis_keys
            ),
        )
        self._columns.append(column)
        return column

    def _check_row_against_axis(self, row_id: str, table: DataTable) -> None:
        if not len(table):
            return
        row_max = max(parse_bucket_key(key) for key in table.keys())
        axis_max = self._buckets[-1].min if self._buckets else None
        if axis_max is None or row_max > axis_max:
            raise BucketAxisMismatch(row_id=row_id, row_max=row_max, axis_max=axis_max)

    def fix_missing_columns(self, expected_ids: Sequence[str], default_value: int) -> int:
        """Insert an all-default column for every expected id with no column.

        A missing id at position ``i`` of ``expected_ids`` is inserted at index
        ``i`` of the column list. Presence is checked anywhere in the list, so
        when existing columns are not in ``expected_ids`` order the final order
        can differ from it. Returns the number of inserted columns.
        """
        if self._buckets is None:
            warnings.warn(
                "fix_missing_columns called before the bucket axis was built; "
                "filler columns will be empty",
                UninitializedAxis,
                stacklevel=2,
            )

        filler = tuple(int(default_value) for _ in range(self.bucket_count))
        inserted = 0
        for index, expected_id in enumerate(expected_ids):
            if any(column.id == expected_id for column in self._columns):
                continue
            self._columns.insert(index, Column(id=expected_id, values=filler))
            inserted += 1
            LOGGER.debug("Inserted filler column %s at index %d", expected_id, index)
        return inserted

    def to_dict(self) -> dict[str, Any]:
        return {
            "buckets": [bucket.to_dict() for bucket in self._buckets or []],
            "values": [column.to_dict() for column in self._columns],
        }

    def to_matrix(self) -> np.ndarray:
        """Counts shaped ``(bucket_count, column_count)``."""
        rows = np.array([column.values for column in self._columns], dtype=np.int64)
        return rows.reshape(len(self._columns), self.bucket_count).T

    def to_frame(self) -> pd.DataFrame:
        labels = [bucket.label for bucket in self._buckets or []]
        return pd.DataFrame(
            self.to_matrix(),
            index=pd.Index(labels, name="bucket"),
            columns=[column.id for column in self._columns],
        )
