"""Point cloud reduction operations."""

from __future__ import annotations

from .errors import InvalidStrideError
from .models import PointCloud


def decimate(cloud: PointCloud, stride: int) -> PointCloud:
    """
    Apply regular stride subsampling to point cloud.

    Parameters
    ----------
    cloud : PointCloud
        Input point cloud.
    stride : int
        Stride factor (keep every Nth point, starting with the first).

    Returns
    -------
    PointCloud
        Subsampled point cloud in original order.
    """
    if stride < 1:
        raise InvalidStrideError(f"Decimation stride must be at least 1, got {stride}")
    if stride == 1:
        return cloud

    return cloud[::stride]
