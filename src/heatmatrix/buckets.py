from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from heatmatrix.errors import InvalidBucketKey

_INTEGER_KEY = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Bucket:
    """Half-open value range ``[min, max)``; ``max=None`` means unbounded."""

    min: int
    max: int | None = None

    def __post_init__(self) -> None:
        if self.max is not None and self.max <= self.min:
            raise ValueError(f"bucket max must be greater than min, got [{self.min}, {self.max})")

    @property
    def is_unbounded(self) -> bool:
        return self.max is None

    @property
    def label(self) -> str:
        upper = "+inf" if self.max is None else str(self.max)
        return f"[{self.min}, {upper})"

    def contains(self, value: int) -> bool:
        if value < self.min:
            return False
        return self.max is None or value < self.max

    def to_dict(self) -> dict[str, int | None]:
        return {"min": self.min, "max": self.max}


def parse_bucket_key(key: object) -> int:
    if not isinstance(key, str) or not _INTEGER_KEY.fullmatch(key):
        raise InvalidBucketKey(key)
    return int(key)


def sort_bucket_keys(keys: Iterable[str]) -> list[str]:
    parsed = [(parse_bucket_key(key), key) for key in keys]
    parsed.sort(key=lambda item: item[0])
    return [key for _, key in parsed]


def build_bucket_axis(keys: Iterable[str]) -> tuple[list[str], list[Bucket]]:
    """Derive the bucket axis from one row's keys.

    Returns the numerically sorted keys alongside one bucket per key: each
    bucket runs up to the next key and the last one is unbounded.
    """
    sorted_keys = sort_bucket_keys(keys)
    bounds = [parse_bucket_key(key) for key in sorted_keys]
    for index in range(1, len(bounds)):
        if bounds[index] == bounds[index - 1]:
            raise InvalidBucketKey(
                sorted_keys[index], reason=f"repeats bucket boundary {bounds[index]}"
            )
    buckets = [
        Bucket(min=lower, max=upper)
        for lower, upper in zip(bounds, bounds[1:] + [None])
    ]
    return sorted_keys, buckets
