"""Weather-radar volume scans to colored, clustered 3D point clouds."""

__version__ = "0.1.0"
