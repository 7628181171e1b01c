"""Pytest fixtures for volume-scan pipeline tests."""

from datetime import date
from pathlib import Path

import numpy as np
import pytest

from nexrad_cloud.core.loaders import dump_volume_csv
from nexrad_cloud.core.models import RadialRecord, VolumeScan


SITE = "KDMX"
DAY = date(2023, 4, 6)
EARLY_SCAN = "KDMX20230406_000312_V06"
LATE_SCAN = "KDMX20230406_120000_V06"


def make_radial(
    gates,
    azimuth: float = 90.0,
    spacing: float = 1.0,
    interval: float = 1000.0,
    scale: float = 2.0,
    offset: float = 0.0,
    word_size: int = 8,
) -> RadialRecord:
    gates = np.asarray(gates, dtype=np.uint16)
    return RadialRecord(
        azimuth=azimuth,
        azimuth_spacing=spacing,
        gate_count=gates.size,
        first_gate_range=interval,
        gate_interval=interval,
        gates=gates,
        word_size=word_size,
        scale=scale,
        offset=offset,
    )


@pytest.fixture
def single_gate_scan() -> VolumeScan:
    """One 0.5 degree sweep, one radial at 90 degrees, raw gates [0, 1, 5]."""
    return VolumeScan(elevation_sweeps={0.5: [make_radial([0, 1, 5])]})


@pytest.fixture
def busy_scan() -> VolumeScan:
    """Two sweeps with strong returns on every gate."""
    return VolumeScan(
        elevation_sweeps={
            0.5: [make_radial([20, 40, 60]), make_radial([80, 100, 120], azimuth=180.0)],
            1.5: [make_radial([140, 160], azimuth=270.0)],
        }
    )


@pytest.fixture
def archive_dir(tmp_path: Path, single_gate_scan: VolumeScan, busy_scan: VolumeScan) -> Path:
    """Local archive with an early (sparse) and a late (busy) scan for one site/day."""
    root = tmp_path / "archive"
    folder = root / f"{DAY:%Y/%m/%d}" / SITE
    folder.mkdir(parents=True)
    (folder / EARLY_SCAN).write_bytes(dump_volume_csv(single_gate_scan))
    (folder / LATE_SCAN).write_bytes(dump_volume_csv(busy_scan))
    return root
