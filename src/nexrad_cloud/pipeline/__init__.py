"""Background fetch-and-process job and its shared state."""

from .state import ProcessingStatistics, SharedState, StateSnapshot
from .sources import (
    ScanSource,
    ScanDecoder,
    DirectoryScanSource,
    CsvVolumeDecoder,
    load_scan_bytes,
)
from .orchestrator import fetch_scan_data, process_scan, run_pipeline, submit_pipeline

__all__ = [
    "ProcessingStatistics",
    "SharedState",
    "StateSnapshot",
    "ScanSource",
    "ScanDecoder",
    "DirectoryScanSource",
    "CsvVolumeDecoder",
    "load_scan_bytes",
    "fetch_scan_data",
    "process_scan",
    "run_pipeline",
    "submit_pipeline",
]
