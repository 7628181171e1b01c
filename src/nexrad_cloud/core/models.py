"""Containers for decoded volume scans and derived point clouds."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

import numpy as np

# Gate sentinels. Compare with ``==`` only; both sit above any real reflectivity.
BELOW_THRESHOLD = np.float32(999.0)
MOMENT_FOLDED = np.float32(998.0)

RgbColor = Tuple[int, int, int]


@dataclass
class RadialRecord:
    """One beam of reflectivity gates at a single azimuth."""

    azimuth: float
    azimuth_spacing: float
    gate_count: int
    first_gate_range: float
    gate_interval: float
    gates: np.ndarray
    word_size: int = 8
    scale: float = 0.0
    offset: float = 0.0


@dataclass
class VolumeScan:
    """A decoded volume scan: elevation angle (degrees) to its radials."""

    elevation_sweeps: Dict[float, List[RadialRecord]] = field(default_factory=dict)

    @property
    def radial_count(self) -> int:
        """Return total number of radials across all sweeps."""
        return sum(len(radials) for radials in self.elevation_sweeps.values())


class ColorMode(str, Enum):
    """Color channels a point cloud can be rendered with."""

    RAW = "raw"
    CLUSTER = "cluster"


class ColoredPoint(NamedTuple):
    """A single read-only point taken from a :class:`PointCloud`."""

    pos: Tuple[float, float, float]
    strength: float
    raw: RgbColor


@dataclass(frozen=True)
class ClusterAssignment:
    """Cluster membership of one point; ``cluster_id`` is None for noise."""

    cluster_id: Optional[int]
    core: bool = False

    @property
    def is_noise(self) -> bool:
        return self.cluster_id is None

    @classmethod
    def noise(cls) -> "ClusterAssignment":
        return cls(cluster_id=None, core=False)


@dataclass
class PointCloud:
    """
    Container for derived 3D points.

    Coordinates are in the render frame, ordered (x, z, y) relative to the
    radar's flat-earth plane so that ``y`` is height above the radar.
    """

    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    strength: np.ndarray
    raw: Optional[np.ndarray] = None
    cluster: Optional[np.ndarray] = None
    labels: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        if self.raw is None:
            self.raw = np.zeros((self.x.size, 3), dtype=np.uint8)

    @classmethod
    def empty(cls) -> "PointCloud":
        """Return a point cloud with no points."""
        none = np.empty(0, dtype=np.float32)
        return cls(x=none, y=none.copy(), z=none.copy(), strength=none.copy())

    @property
    def size(self) -> int:
        """Return number of points."""
        return self.x.size

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, key: Union[int, slice, np.ndarray]):
        if isinstance(key, (int, np.integer)):
            r, g, b = (int(c) for c in self.raw[key])
            return ColoredPoint(
                pos=(float(self.x[key]), float(self.y[key]), float(self.z[key])),
                strength=float(self.strength[key]),
                raw=(r, g, b),
            )
        return PointCloud(
            x=self.x[key],
            y=self.y[key],
            z=self.z[key],
            strength=self.strength[key],
            raw=self.raw[key],
            cluster=self.cluster[key] if self.cluster is not None else None,
            labels=self.labels[key] if self.labels is not None else None,
        )

    def to_coords(self) -> np.ndarray:
        """Return coordinates as Nx3 array."""
        return np.column_stack((self.x, self.y, self.z))

    def colors_for(self, mode: ColorMode) -> np.ndarray:
        """Return the Nx3 color channel for ``mode``, falling back to raw."""
        if mode is ColorMode.CLUSTER and self.cluster is not None:
            return self.cluster
        return self.raw

    @property
    def cluster_count(self) -> int:
        """Return number of distinct clusters, or 0 if clustering was not run."""
        if self.labels is None:
            return 0
        return int(np.unique(self.labels[self.labels >= 0]).size)
