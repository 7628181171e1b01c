"""Loader for tabular radial dumps of a volume scan."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd

from .models import RadialRecord, VolumeScan

RADIAL_COLUMNS = [
    "Elevation",
    "Azimuth",
    "AzimuthSpacing",
    "FirstGateRange",
    "GateInterval",
    "GateCount",
    "WordSize",
    "Scale",
    "Offset",
]


def load_volume_csv(source: Union[Path, bytes]) -> VolumeScan:
    """
    Load a volume scan from a radial CSV dump.

    Each row is one radial: the :data:`RADIAL_COLUMNS` header fields followed
    by ``Gate_0`` .. ``Gate_N`` raw gate words. Missing gate cells read as 0.

    Parameters
    ----------
    source : Path or bytes
        CSV file path or raw CSV bytes.

    Returns
    -------
    VolumeScan
        Radials grouped by elevation angle in file order.
    """
    buffer = io.BytesIO(source) if isinstance(source, bytes) else source
    df = pd.read_csv(buffer, engine="c")
    if df.empty:
        raise ValueError("Radial CSV is empty")

    missing = [c for c in RADIAL_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Radial CSV missing columns: {missing}")

    gate_cols = [c for c in df.columns if c.startswith("Gate_")]
    gate_data = df[gate_cols].fillna(0).to_numpy(np.uint16)

    scan = VolumeScan()
    for row, gates in zip(df.itertuples(index=False), gate_data):
        radial = RadialRecord(
            azimuth=float(row.Azimuth),
            azimuth_spacing=float(row.AzimuthSpacing),
            gate_count=int(row.GateCount),
            first_gate_range=float(row.FirstGateRange),
            gate_interval=float(row.GateInterval),
            gates=gates,
            word_size=int(row.WordSize),
            scale=float(row.Scale),
            offset=float(row.Offset),
        )
        scan.elevation_sweeps.setdefault(float(row.Elevation), []).append(radial)

    return scan


def dump_volume_csv(scan: VolumeScan) -> bytes:
    """Serialize a volume scan to the radial CSV layout read by :func:`load_volume_csv`."""
    width = max(
        (radial.gate_count for radials in scan.elevation_sweeps.values() for radial in radials),
        default=0,
    )
    rows = []
    for elevation, radials in scan.elevation_sweeps.items():
        for radial in radials:
            gates = np.zeros(width, dtype=np.uint16)
            data = np.asarray(radial.gates, dtype=np.uint16)[:width]
            gates[: data.size] = data
            rows.append(
                [
                    elevation,
                    radial.azimuth,
                    radial.azimuth_spacing,
                    radial.first_gate_range,
                    radial.gate_interval,
                    radial.gate_count,
                    radial.word_size,
                    radial.scale,
                    radial.offset,
                    *gates.tolist(),
                ]
            )

    df = pd.DataFrame(rows, columns=RADIAL_COLUMNS + [f"Gate_{i}" for i in range(width)])
    return df.to_csv(index=False).encode("utf-8")
