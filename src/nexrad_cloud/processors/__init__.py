"""Processing stages applied to derived point clouds."""

from .coloring import classify_color, classify_colors, color_points
from .clustering import dbscan, cluster, cluster_point_cloud, labels_to_colors

__all__ = [
    "classify_color",
    "classify_colors",
    "color_points",
    "dbscan",
    "cluster",
    "cluster_point_cloud",
    "labels_to_colors",
]
