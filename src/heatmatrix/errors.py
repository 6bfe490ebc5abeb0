from __future__ import annotations


class HeatMapError(ValueError):
    """Base class for fatal input errors raised while building a heat map."""


class InvalidBucketKey(HeatMapError):
    def __init__(self, key: object, reason: str = "is not a base-10 integer") -> None:
        self.key = key
        super().__init__(f"bucket key {key!r} {reason}")


class BucketAxisMismatch(HeatMapError):
    def __init__(self, row_id: str, row_max: int, axis_max: int | None) -> None:
        self.row_id = row_id
        self.row_max = row_max
        self.axis_max = axis_max
        axis_end = "is empty" if axis_max is None else f"ends at {axis_max}"
        super().__init__(
            f"row {row_id!r} has bucket key {row_max} beyond the bucket axis, which {axis_end}"
        )


class UninitializedAxis(UserWarning):
    """Gap filling ran before any column created the bucket axis."""
