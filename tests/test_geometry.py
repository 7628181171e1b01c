"""Tests for gate projection."""

import math

import numpy as np
import pytest

from nexrad_cloud.config import ProjectionConfig
from nexrad_cloud.core.errors import UnsupportedWordSizeError
from nexrad_cloud.core.geometry import (
    derive_points,
    gate_ranges,
    polar_to_render,
    snap_azimuth,
)
from nexrad_cloud.core.models import MOMENT_FOLDED, VolumeScan

from conftest import make_radial


RATIO = ProjectionConfig(render_ratio_to_m=0.00001)


@pytest.mark.parametrize(
    "azimuth,spacing,expected",
    [
        (90.0, 1.0, 1.0),
        (90.0, 0.5, 0.0),
        (90.7, 0.5, 0.5),
        (45.2, 1.0, 316.0),
        (0.0, 1.0, 271.0),
    ],
)
def test_snap_azimuth(azimuth: float, spacing: float, expected: float):
    """Test rotation, wrap and beam-slot snapping."""
    assert snap_azimuth(azimuth, spacing) == expected


def test_gate_ranges_start_at_interval():
    """Test ranges accumulate from the first interval."""
    ranges = gate_ranges(make_radial([2, 2, 2, 2], interval=250.0))

    np.testing.assert_array_equal(ranges, [250.0, 500.0, 750.0, 1000.0])


def test_polar_to_render_axes():
    """Test horizontal plane is (x, z) and height is y."""
    x, y, z = polar_to_render(30.0, 90.0, np.array([1000.0]), 0.001)

    np.testing.assert_allclose(x, [0.0], atol=1e-6)
    np.testing.assert_allclose(z, [1.0], atol=1e-6)
    np.testing.assert_allclose(y, [0.5], atol=1e-6)


def test_polar_to_render_deterministic():
    """Test identical inputs give bit-identical output."""
    ranges = np.linspace(1000, 230000, 97, dtype=np.float32)

    first = polar_to_render(2.4, 133.5, ranges, 0.00001)
    second = polar_to_render(2.4, 133.5, ranges.copy(), 0.00001)

    for a, b in zip(first, second):
        assert a.tobytes() == b.tobytes()


def test_single_gate_scenario(single_gate_scan: VolumeScan):
    """Test raw [0, 1, 5] at scale 2 yields only the third gate."""
    cloud = derive_points(single_gate_scan, 0.0, RATIO)

    assert cloud.size == 1
    assert cloud.strength[0] == 2.5

    scaled = 3000.0 * 0.00001
    az = math.radians(1.0)
    np.testing.assert_allclose(cloud.x[0], math.cos(az) * scaled, rtol=1e-5)
    np.testing.assert_allclose(cloud.z[0], math.sin(az) * scaled, rtol=1e-5)
    np.testing.assert_allclose(cloud.y[0], math.sin(math.radians(0.5)) * scaled, rtol=1e-5)


def test_include_folded(single_gate_scan: VolumeScan):
    """Test folded gates are kept when requested."""
    config = ProjectionConfig(render_ratio_to_m=0.00001, include_folded=True)

    cloud = derive_points(single_gate_scan, 0.0, config)

    assert cloud.size == 2
    assert cloud.strength[0] == MOMENT_FOLDED


def test_inclusion_threshold_is_exclusive():
    """Test gates equal to the threshold are dropped."""
    scan = VolumeScan(elevation_sweeps={0.5: [make_radial([10, 11, 12])]})

    cloud = derive_points(scan, 5.0, RATIO)

    np.testing.assert_array_equal(cloud.strength, [5.5, 6.0])


def test_derive_points_order(busy_scan: VolumeScan):
    """Test points follow sweep, radial, gate order."""
    cloud = derive_points(busy_scan, 0.0, RATIO)

    np.testing.assert_array_equal(cloud.strength, [10, 20, 30, 40, 50, 60, 70, 80])


def test_derive_points_empty_scan():
    """Test an empty scan gives an empty cloud."""
    cloud = derive_points(VolumeScan(), 0.0, RATIO)

    assert cloud.size == 0
    assert cloud.raw.shape == (0, 3)


def test_gate_buffer_padded_to_gate_count():
    """Test a short gate buffer reads as below-threshold gates."""
    radial = make_radial([20])
    radial.gate_count = 4

    cloud = derive_points(VolumeScan(elevation_sweeps={0.5: [radial]}), 0.0, RATIO)

    assert cloud.size == 1


def test_word_size_mismatch_raises():
    """Test unsupported word size aborts projection."""
    scan = VolumeScan(elevation_sweeps={0.5: [make_radial([20], word_size=16)]})

    with pytest.raises(UnsupportedWordSizeError):
        derive_points(scan, 0.0, RATIO)
