"""Core data model, gate scaling, projection and reduction functions."""

from .models import (
    BELOW_THRESHOLD,
    MOMENT_FOLDED,
    RadialRecord,
    VolumeScan,
    ColoredPoint,
    ColorMode,
    ClusterAssignment,
    PointCloud,
)
from .errors import (
    PipelineError,
    InputError,
    NoCandidatesError,
    ScanIdentifierError,
    UnsupportedWordSizeError,
    InvalidStrideError,
    UpstreamError,
    ReentrancyError,
)
from .loaders import load_volume_csv, dump_volume_csv
from .selection import scan_time, select_nearest_scan
from .scaling import scale_gate, scale_gates
from .geometry import snap_azimuth, polar_to_render, derive_points
from .transforms import decimate

__all__ = [
    "BELOW_THRESHOLD",
    "MOMENT_FOLDED",
    "RadialRecord",
    "VolumeScan",
    "ColoredPoint",
    "ColorMode",
    "ClusterAssignment",
    "PointCloud",
    "PipelineError",
    "InputError",
    "NoCandidatesError",
    "ScanIdentifierError",
    "UnsupportedWordSizeError",
    "InvalidStrideError",
    "UpstreamError",
    "ReentrancyError",
    "load_volume_csv",
    "dump_volume_csv",
    "scan_time",
    "select_nearest_scan",
    "scale_gate",
    "scale_gates",
    "snap_azimuth",
    "polar_to_render",
    "derive_points",
    "decimate",
]
