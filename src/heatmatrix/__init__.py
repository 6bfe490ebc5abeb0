from importlib.metadata import PackageNotFoundError, version

from heatmatrix.buckets import Bucket
from heatmatrix.errors import BucketAxisMismatch, HeatMapError, InvalidBucketKey, UninitializedAxis
from heatmatrix.heatmap import Column, HeatMap

try:
    __version__ = version("heatmatrix")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "Bucket",
    "BucketAxisMismatch",
    "Column",
    "HeatMap",
    "HeatMapError",
    "InvalidBucketKey",
    "UninitializedAxis",
    "__version__",
]
