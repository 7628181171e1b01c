"""Point cloud preview rendering."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from ..core.models import ColorMode, PointCloud

logger = logging.getLogger(__name__)

try:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ModuleNotFoundError:
    HAS_MATPLOTLIB = False


def check_matplotlib() -> None:
    """Raise error if matplotlib is not available."""
    if not HAS_MATPLOTLIB:
        raise RuntimeError("matplotlib is required for plotting but is not installed.")


def plot_point_cloud(
    path: Path,
    cloud: PointCloud,
    mode: ColorMode = ColorMode.RAW,
    title: str = "Volume Scan",
    max_points: int = 1_000_000,
    alpha: float = 0.5,
    marker_size: float = 1.0,
    dpi: int = 200,
) -> None:
    """
    Save 3D scatter plot of point cloud.

    Parameters
    ----------
    path : Path
        Output PNG path.
    cloud : PointCloud
        Point cloud to plot.
    mode : ColorMode
        Color channel to render.
    title : str
        Plot title.
    max_points : int
        Maximum points to plot (subsampled if larger).
    alpha : float
        Marker opacity (0-1).
    marker_size : float
        Marker size.
    dpi : int
        Output resolution.
    """
    check_matplotlib()

    plot_stride = max(1, int(np.ceil(cloud.size / max_points)))
    if plot_stride > 1:
        cloud = cloud[::plot_stride]
        logger.info("Plot subsample: %d points (stride=%d)", cloud.size, plot_stride)

    scatter_colors = cloud.colors_for(mode).astype(np.float32) / 255.0

    fig = plt.figure(figsize=(8, 6))
    ax = fig.add_subplot(111, projection="3d")

    # Render frame is (x, height, z); matplotlib wants height on its z axis.
    ax.scatter(cloud.x, cloud.z, cloud.y, c=scatter_colors, s=marker_size, alpha=alpha)
    ax.set_xlabel("X")
    ax.set_ylabel("Z")
    ax.set_zlabel("Height")
    ax.set_title(title)

    plt.tight_layout()
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi)
    plt.close(fig)
