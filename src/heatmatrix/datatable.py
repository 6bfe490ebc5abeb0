from __future__ import annotations

from typing import Any, Callable, Mapping

from heatmatrix.errors import HeatMapError

ROW_SEPARATOR = "|"
KV_SEPARATOR = ","


class DataTable:
    """Sparse key -> count table decoded from a storage row.

    Storage writes tables as ``key,value|key,value``. Keys are kept as the
    strings storage returned; callers decide how to order them.
    """

    def __init__(self, data: Mapping[str, int] | None = None) -> None:
        self._data: dict[str, int] = dict(data or {})

    @classmethod
    def parse(cls, text: str) -> DataTable:
        data: dict[str, int] = {}
        if not text:
            return cls(data)
        for segment in text.split(ROW_SEPARATOR):
            key, separator, raw_value = segment.rpartition(KV_SEPARATOR)
            if not separator or not key:
                raise HeatMapError(f"malformed data table segment: {segment!r}")
            try:
                data[key] = int(raw_value)
            except ValueError as exc:
                raise HeatMapError(
                    f"data table value for key {key!r} is not an integer: {raw_value!r}"
                ) from exc
        return cls(data)

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> DataTable:
        data: dict[str, int] = {}
        for key, value in mapping.items():
            try:
                data[str(key)] = int(value)
            except (TypeError, ValueError) as exc:
                raise HeatMapError(
                    f"data table value for key {key!r} is not an integer: {value!r}"
                ) from exc
        return cls(data)

    def sorted_keys(self, key: Callable[[str], Any] | None = None) -> list[str]:
        return sorted(self._data, key=key)

    def has_key(self, key: str) -> bool:
        return key in self._data

    def get(self, key: str) -> int:
        return self._data[key]

    def keys(self) -> list[str]:
        return list(self._data)

    def to_storage_data(self) -> str:
        return ROW_SEPARATOR.join(
            f"{key}{KV_SEPARATOR}{value}" for key, value in self._data.items()
        )

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataTable):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"DataTable({self._data!r})"


def as_data_table(raw: DataTable | str | Mapping[Any, Any]) -> DataTable:
    if isinstance(raw, DataTable):
        return raw
    if isinstance(raw, str):
        return DataTable.parse(raw)
    if isinstance(raw, Mapping):
        return DataTable.from_mapping(raw)
    raise HeatMapError(f"unsupported row payload type: {type(raw).__name__}")
