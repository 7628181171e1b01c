"""Visualization functions for point clouds."""

from .plotting import plot_point_cloud

__all__ = [
    "plot_point_cloud",
]
