"""Projection of radar gates into the render frame."""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from ..config import ProjectionConfig
from .models import BELOW_THRESHOLD, MOMENT_FOLDED, PointCloud, RadialRecord, VolumeScan
from .scaling import scale_gates

logger = logging.getLogger(__name__)


def snap_azimuth(azimuth_deg: float, spacing_deg: float) -> float:
    """
    Rotate a radial azimuth into the render frame and snap it to a beam slot.

    The azimuth is rotated by -90 degrees and wrapped into [0, 360). It is then
    floored to a whole degree and advanced by one spacing unit whenever
    ``floor(angle + spacing) > floor(angle)``.

    Parameters
    ----------
    azimuth_deg : float
        Azimuth angle as recorded by the radar, in degrees.
    spacing_deg : float
        Azimuth spacing of the radial, in degrees.

    Returns
    -------
    float
        Snapped render-frame azimuth in degrees.
    """
    angle = (azimuth_deg - 90.0) % 360.0
    snapped = float(math.floor(angle))
    if math.floor(angle + spacing_deg) > snapped:
        snapped += spacing_deg
    return snapped


def radial_gates(radial: RadialRecord) -> np.ndarray:
    """Return the radial's raw gate words, zero-padded or cut to its gate count."""
    raw = np.zeros(radial.gate_count, dtype=np.uint16)
    data = np.asarray(radial.gates, dtype=np.uint16)[: radial.gate_count]
    raw[: data.size] = data
    return raw


def gate_ranges(radial: RadialRecord) -> np.ndarray:
    """Return per-gate range in meters, accumulated from the gate interval."""
    steps = np.full(radial.gate_count, radial.gate_interval, dtype=np.float32)
    return np.cumsum(steps, dtype=np.float32)


def polar_to_render(
    elevation_deg: float,
    azimuth_deg: float,
    ranges_m: np.ndarray,
    render_ratio: float,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Convert (elevation, azimuth, range) to render-frame coordinates.

    Parameters
    ----------
    elevation_deg : float
        Sweep elevation angle in degrees.
    azimuth_deg : float
        Snapped render-frame azimuth in degrees.
    ranges_m : np.ndarray
        Gate ranges in meters.
    render_ratio : float
        Render units per meter.

    Returns
    -------
    tuple
        (x, y, z) arrays where ``y`` is height, i.e. the horizontal
        (cos, sin) pair is presented as (x, z).
    """
    scaled = np.asarray(ranges_m, dtype=np.float32) * np.float32(render_ratio)
    azimuth = np.float32(azimuth_deg * (math.pi / 180.0))
    elevation = np.float32(elevation_deg * (math.pi / 180.0))

    horizontal_x = np.cos(azimuth) * scaled
    horizontal_y = np.sin(azimuth) * scaled
    height = np.sin(elevation) * scaled
    return horizontal_x, height, horizontal_y


def project_radial(
    elevation_deg: float,
    radial: RadialRecord,
    inclusion_threshold: float,
    render_ratio: float,
    include_folded: bool = False,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Project the gates of one radial that pass the inclusion threshold.

    Returns
    -------
    tuple
        (x, y, z, strength) arrays for the kept gates, in gate order.
    """
    values = scale_gates(radial_gates(radial), radial.word_size, radial.scale, radial.offset)
    ranges = gate_ranges(radial)

    mask = (values != BELOW_THRESHOLD) & (values > np.float32(inclusion_threshold))
    if not include_folded:
        mask &= values != MOMENT_FOLDED

    azimuth = snap_azimuth(radial.azimuth, radial.azimuth_spacing)
    x, y, z = polar_to_render(elevation_deg, azimuth, ranges[mask], render_ratio)
    return x, y, z, values[mask]


def derive_points(
    scan: VolumeScan,
    inclusion_threshold: float,
    config: Optional[ProjectionConfig] = None,
) -> PointCloud:
    """
    Derive render-frame points from every gate of a volume scan.

    A gate becomes a point when its scaled value is not ``BELOW_THRESHOLD``
    and exceeds ``inclusion_threshold``. Folded gates are dropped unless
    ``config.include_folded`` is set. Points are uncolored.

    Parameters
    ----------
    scan : VolumeScan
        Decoded volume scan.
    inclusion_threshold : float
        Minimum scaled value (exclusive) for a gate to be kept.
    config : ProjectionConfig, optional
        Projection configuration.

    Returns
    -------
    PointCloud
        Points in sweep, radial, gate order.
    """
    if config is None:
        config = ProjectionConfig()

    xs: List[np.ndarray] = []
    ys: List[np.ndarray] = []
    zs: List[np.ndarray] = []
    strengths: List[np.ndarray] = []

    for elevation, radials in scan.elevation_sweeps.items():
        logger.debug("Projecting sweep %.2f deg with %d radials", elevation, len(radials))
        for radial in radials:
            x, y, z, strength = project_radial(
                elevation,
                radial,
                inclusion_threshold,
                config.render_ratio_to_m,
                include_folded=config.include_folded,
            )
            xs.append(x)
            ys.append(y)
            zs.append(z)
            strengths.append(strength)

    if not xs:
        return PointCloud.empty()

    return PointCloud(
        x=np.concatenate(xs).astype(np.float32),
        y=np.concatenate(ys).astype(np.float32),
        z=np.concatenate(zs).astype(np.float32),
        strength=np.concatenate(strengths).astype(np.float32),
    )
