"""DBSCAN clustering for derived point clouds."""

from __future__ import annotations

import colorsys
import logging
import math
from typing import List, Optional, Tuple

import numpy as np
from sklearn.neighbors import BallTree

from ..config import ClusteringConfig
from ..core.models import ClusterAssignment, PointCloud, RgbColor

logger = logging.getLogger(__name__)

UNCLUSTERED_COLOR: RgbColor = (255, 255, 255)
GOLDEN_RATIO = (1.0 + math.sqrt(5.0)) / 2.0


def dbscan(
    coords: np.ndarray,
    epsilon: float,
    min_points: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Density-based spatial clustering.

    A point is a core point when at least ``min_points`` other points lie
    within ``epsilon`` of it (Euclidean, inclusive). Core points that are
    neighbors share a cluster; non-core points within ``epsilon`` of a core
    point join the first cluster that reaches them. Everything else is noise.

    Neighborhoods come from a ball tree, so the radius queries cost about
    O(n log n) for sparse data and degrade to O(n^2) when every point is
    within ``epsilon`` of every other.

    Parameters
    ----------
    coords : np.ndarray
        Nx3 coordinate array.
    epsilon : float
        Neighborhood radius.
    min_points : int
        Minimum number of other points in a core point's neighborhood.

    Returns
    -------
    tuple
        (labels, core) arrays. Labels are cluster ids in discovery order
        (-1 for noise); ``core`` marks core points.
    """
    n = coords.shape[0]
    labels = np.full(n, -1, dtype=np.int32)
    core = np.zeros(n, dtype=bool)
    if n == 0:
        return labels, core

    tree = BallTree(coords)
    neighbors = tree.query_radius(coords, r=epsilon)

    # Each neighborhood includes the point itself.
    counts = np.array([len(neigh) - 1 for neigh in neighbors], dtype=np.int64)
    core = counts >= min_points

    visited = np.zeros(n, dtype=bool)
    cluster_id = 0
    for i in range(n):
        if visited[i] or not core[i]:
            continue
        visited[i] = True
        labels[i] = cluster_id
        seeds = list(neighbors[i])

        while seeds:
            pt = seeds.pop()
            if labels[pt] == -1:
                labels[pt] = cluster_id
            if not visited[pt] and core[pt]:
                visited[pt] = True
                seeds.extend(neighbors[pt])

        cluster_id += 1

    return labels, core


def cluster(
    cloud: PointCloud,
    epsilon: float,
    min_points: int,
) -> List[ClusterAssignment]:
    """
    Cluster a point cloud and return one assignment per point, in input order.

    Cluster ids carry no meaning beyond a single call.
    """
    labels, core = dbscan(cloud.to_coords(), epsilon, min_points)
    return [
        ClusterAssignment.noise() if label < 0 else ClusterAssignment(int(label), bool(is_core))
        for label, is_core in zip(labels, core)
    ]


def cluster_hue(index: int) -> RgbColor:
    """Return a saturated color for the ``index``-th cluster (golden-ratio hue walk)."""
    hue = (index * GOLDEN_RATIO) % 1.0
    r, g, b = colorsys.hls_to_rgb(hue, 0.5, 1.0)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def labels_to_colors(labels: np.ndarray) -> np.ndarray:
    """
    Convert cluster labels to colors.

    Parameters
    ----------
    labels : np.ndarray
        Cluster labels (-1 for noise).

    Returns
    -------
    np.ndarray
        Nx3 RGB array; noise is :data:`UNCLUSTERED_COLOR`.
    """
    colors = np.empty((labels.size, 3), dtype=np.uint8)
    colors[:] = UNCLUSTERED_COLOR
    for lbl in np.unique(labels[labels >= 0]):
        colors[labels == lbl] = cluster_hue(int(lbl))
    return colors


def cluster_point_cloud(
    cloud: PointCloud,
    config: Optional[ClusteringConfig] = None,
) -> PointCloud:
    """
    Run DBSCAN on a point cloud and attach labels (and cluster colors).

    Parameters
    ----------
    cloud : PointCloud
        Input point cloud.
    config : ClusteringConfig, optional
        Clustering configuration.

    Returns
    -------
    PointCloud
        The same cloud with ``labels`` set and, if ``config.recolor``,
        the ``cluster`` color channel filled.
    """
    if config is None:
        config = ClusteringConfig()

    labels, _ = dbscan(cloud.to_coords(), config.epsilon, config.min_points)
    cloud.labels = labels
    if config.recolor:
        cloud.cluster = labels_to_colors(labels)

    noise = int(np.count_nonzero(labels < 0))
    logger.info(
        "Found %d clusters with %d remaining unclustered points",
        cloud.cluster_count,
        noise,
    )
    return cloud
