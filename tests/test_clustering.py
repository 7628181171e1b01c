"""Tests for DBSCAN clustering."""

import numpy as np

from nexrad_cloud.config import ClusteringConfig
from nexrad_cloud.core.models import PointCloud
from nexrad_cloud.processors.clustering import (
    UNCLUSTERED_COLOR,
    cluster,
    cluster_hue,
    cluster_point_cloud,
    dbscan,
)


def cloud_from(coords: np.ndarray) -> PointCloud:
    coords = np.asarray(coords, dtype=np.float32)
    return PointCloud(
        x=coords[:, 0],
        y=coords[:, 1],
        z=coords[:, 2],
        strength=np.full(coords.shape[0], 30.0, dtype=np.float32),
    )


def blobs() -> np.ndarray:
    rng = np.random.default_rng(0)
    a = rng.uniform(-0.005, 0.005, size=(8, 3))
    b = rng.uniform(-0.005, 0.005, size=(8, 3)) + 1.0
    outlier = np.array([[5.0, 5.0, 5.0]])
    return np.vstack([a, b, outlier])


def test_dbscan_two_blobs():
    """Test two separated blobs and one outlier."""
    labels, core = dbscan(blobs(), epsilon=0.05, min_points=5)

    assert len(set(labels[:8])) == 1
    assert len(set(labels[8:16])) == 1
    assert labels[0] != labels[8]
    assert labels[16] == -1
    assert core[:16].all()
    assert not core[16]


def test_dbscan_border_and_noise():
    """Test non-core points join a core neighbor's cluster or become noise."""
    coords = np.array(
        [
            [0.0, 0.0, 0.0],     # core: five others within 0.05
            [0.04, 0.0, 0.0],    # border
            [-0.04, 0.0, 0.0],
            [0.0, 0.04, 0.0],
            [0.0, -0.04, 0.0],
            [0.0, 0.0, 0.04],
            [0.08, 0.0, 0.0],    # only near the border point
        ]
    )

    labels, core = dbscan(coords, epsilon=0.05, min_points=5)

    assert core.tolist() == [True, False, False, False, False, False, False]
    assert labels[:6].tolist() == [0] * 6
    assert labels[6] == -1


def test_min_points_counts_other_points():
    """Test a point needs min_points others, not including itself."""
    coords = np.zeros((5, 3))

    labels, core = dbscan(coords, epsilon=0.01, min_points=5)
    assert not core.any()
    assert (labels == -1).all()

    labels, core = dbscan(coords, epsilon=0.01, min_points=4)
    assert core.all()
    assert (labels == 0).all()


def test_cluster_assignments_cover_input():
    """Test every point gets exactly one assignment and dense points are never noise."""
    rng = np.random.default_rng(7)
    coords = rng.uniform(0, 0.3, size=(300, 3))
    cloud = cloud_from(coords)
    coords = cloud.to_coords().astype(np.float64)

    assignments = cluster(cloud, epsilon=0.05, min_points=5)

    assert len(assignments) == cloud.size
    counts = np.array(
        [(np.linalg.norm(coords - p, axis=1) <= 0.05).sum() - 1 for p in coords]
    )
    for assignment, count in zip(assignments, counts):
        if count >= 5:
            assert not assignment.is_noise
            assert assignment.core


def test_cluster_empty():
    """Test empty input returns no assignments."""
    assert cluster(PointCloud.empty(), 0.05, 5) == []


def test_cluster_point_cloud_recolors():
    """Test cluster colors are distinct from noise color."""
    cloud = cluster_point_cloud(cloud_from(blobs()), ClusteringConfig(epsilon=0.05, min_points=5))

    assert cloud.cluster_count == 2
    assert tuple(cloud.cluster[16]) == UNCLUSTERED_COLOR
    assert tuple(cloud.cluster[0]) != UNCLUSTERED_COLOR
    assert tuple(cloud.cluster[0]) != tuple(cloud.cluster[8])


def test_cluster_point_cloud_without_recolor():
    """Test labels without recoloring."""
    cloud = cluster_point_cloud(
        cloud_from(blobs()), ClusteringConfig(epsilon=0.05, min_points=5, recolor=False)
    )

    assert cloud.labels is not None
    assert cloud.cluster is None


def test_cluster_hues_differ():
    """Test consecutive cluster hues are distinct and never the noise color."""
    hues = [cluster_hue(i) for i in range(20)]

    assert len(set(hues)) == 20
    assert UNCLUSTERED_COLOR not in hues
