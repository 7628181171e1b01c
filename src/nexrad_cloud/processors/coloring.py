"""Reflectivity color classification."""

from __future__ import annotations

import logging

import numpy as np

from ..core.models import BELOW_THRESHOLD, PointCloud, RgbColor

logger = logging.getLogger(__name__)

BLACK: RgbColor = (0x00, 0x00, 0x00)
WHITE: RgbColor = (0xFF, 0xFF, 0xFF)

# Lower bound (inclusive) of each 5 dBZ bin and its color; upper bound is the next entry.
REFLECTIVITY_BINS = (
    (5.0, (0x40, 0xE8, 0xE3)),   # teal
    (10.0, (0x26, 0xA4, 0xFA)),  # blue
    (15.0, (0x00, 0x30, 0xED)),  # dark blue
    (20.0, (0x49, 0xFB, 0x3E)),  # green
    (25.0, (0x36, 0xC2, 0x2E)),  # medium green
    (30.0, (0x27, 0x8C, 0x1E)),  # dark green
    (35.0, (0xFE, 0xF5, 0x43)),  # yellow
    (40.0, (0xEB, 0xB4, 0x33)),  # amber
    (45.0, (0xF6, 0x95, 0x2E)),  # orange
    (50.0, (0xF8, 0x0A, 0x26)),  # red
    (55.0, (0xCB, 0x05, 0x16)),  # dark red
    (60.0, (0xA9, 0x08, 0x13)),  # maroon
    (65.0, (0xEE, 0x34, 0xFA)),  # magenta
)
WHITE_FROM = 70.0

_EDGES = np.array([edge for edge, _ in REFLECTIVITY_BINS] + [WHITE_FROM], dtype=np.float64)
_PALETTE = np.array(
    [BLACK] + [color for _, color in REFLECTIVITY_BINS] + [WHITE], dtype=np.uint8
)


def classify_color(value: float) -> RgbColor:
    """
    Map a scaled reflectivity value to its bin color.

    Values below 5 and the below-threshold sentinel are black, values of 70
    and above are white. NaN falls through to white.
    """
    if value == BELOW_THRESHOLD:
        return BLACK
    idx = int(np.searchsorted(_EDGES, float(value), side="right"))
    r, g, b = _PALETTE[idx]
    return int(r), int(g), int(b)


def classify_colors(values: np.ndarray) -> np.ndarray:
    """
    Vectorized :func:`classify_color`.

    Parameters
    ----------
    values : np.ndarray
        Scaled reflectivity values.

    Returns
    -------
    np.ndarray
        Nx3 uint8 RGB array.
    """
    values = np.asarray(values)
    if values.dtype.kind != "f":
        values = values.astype(np.float64)
    idx = np.searchsorted(_EDGES, values, side="right")
    idx[values == BELOW_THRESHOLD] = 0
    return _PALETTE[idx]


def color_points(cloud: PointCloud) -> PointCloud:
    """Fill the raw color channel of ``cloud`` from its strengths."""
    cloud.raw = classify_colors(cloud.strength)
    return cloud
