"""Fetch-and-process job: scan selection through clustering into shared state."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Executor, Future
from typing import Optional, Tuple

from ..config import PipelineConfig, PipelineRequest
from ..core.geometry import derive_points
from ..core.models import PointCloud, VolumeScan
from ..core.selection import select_nearest_scan
from ..core.transforms import decimate
from ..processors.clustering import cluster_point_cloud
from ..processors.coloring import color_points
from .sources import ScanDecoder, ScanSource, load_scan_bytes
from .state import ProcessingStatistics, SharedState

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def fetch_scan_data(
    request: PipelineRequest,
    source: ScanSource,
    decoder: ScanDecoder,
    config: PipelineConfig,
    stats: ProcessingStatistics,
) -> VolumeScan:
    """List scans for the request's site and day, then load and decode the nearest one."""
    load_start = time.perf_counter()

    identifiers = source.list_scans(request.site, request.date)
    identifier = select_nearest_scan(identifiers, request.time)
    raw = load_scan_bytes(identifier, source, config.cache.directory)

    stats.load_ms = _elapsed_ms(load_start)

    decode_start = time.perf_counter()
    scan = decoder.decode(raw)
    stats.decode_ms = _elapsed_ms(decode_start)
    logger.info("Decoded file has %d elevation scans", len(scan.elevation_sweeps))

    return scan


def process_scan(
    scan: VolumeScan,
    config: PipelineConfig,
    stats: ProcessingStatistics,
) -> PointCloud:
    """Derive, color, decimate and (optionally) cluster the points of a decoded scan."""
    pointing_start = time.perf_counter()
    points = derive_points(scan, config.projection.inclusion_threshold, config.projection)
    stats.pointing_ms = _elapsed_ms(pointing_start)

    coloring_start = time.perf_counter()
    color_points(points)
    stats.coloring_ms = _elapsed_ms(coloring_start)

    sampling_start = time.perf_counter()
    points = decimate(points, config.sampling.stride)
    stats.sampling_ms = _elapsed_ms(sampling_start)
    logger.info("Scan contains %d points", points.size)

    if config.clustering.enabled:
        clustering_start = time.perf_counter()
        points = cluster_point_cloud(points, config.clustering)
        stats.clustering_ms = _elapsed_ms(clustering_start)

    stats.point_count = points.size
    return points


def _execute(
    request: PipelineRequest,
    state: SharedState,
    source: ScanSource,
    decoder: ScanDecoder,
    config: PipelineConfig,
) -> Tuple[PointCloud, ProcessingStatistics]:
    # Caller has already moved ``state`` into processing.
    try:
        resolved = request.resolve(config)
        stats = ProcessingStatistics()
        scan = fetch_scan_data(request, source, decoder, resolved, stats)
        points = process_scan(scan, resolved, stats)
    except BaseException as exc:
        state.fail(exc)
        raise

    state.complete(points, stats)
    logger.info("Done fetch/processing in %d ms", stats.total_ms)
    return points, stats


def run_pipeline(
    request: PipelineRequest,
    state: SharedState,
    source: ScanSource,
    decoder: ScanDecoder,
    config: Optional[PipelineConfig] = None,
) -> Tuple[PointCloud, ProcessingStatistics]:
    """
    Run one fetch-and-process job in the calling thread.

    Raises :class:`~nexrad_cloud.core.errors.ReentrancyError` before touching
    anything if ``state`` is already processing. Any other failure releases
    the processing flag, keeps the previous results and is re-raised.

    Returns
    -------
    tuple
        (points, statistics) as installed into ``state``.
    """
    if config is None:
        config = PipelineConfig()

    state.begin()
    return _execute(request, state, source, decoder, config)


def _log_failure(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("Fetch/processing failed", exc_info=exc)


def submit_pipeline(
    request: PipelineRequest,
    state: SharedState,
    source: ScanSource,
    decoder: ScanDecoder,
    executor: Executor,
    config: Optional[PipelineConfig] = None,
) -> Future:
    """
    Submit a fetch-and-process job to ``executor`` without waiting for it.

    The re-entrancy check happens here, synchronously: a second submission
    while ``state`` is processing raises
    :class:`~nexrad_cloud.core.errors.ReentrancyError` and nothing is queued.
    Callers poll ``state.snapshot()`` for results.
    """
    if config is None:
        config = PipelineConfig()

    state.begin()
    try:
        future = executor.submit(_execute, request, state, source, decoder, config)
    except BaseException as exc:
        state.fail(exc)
        raise

    future.add_done_callback(_log_failure)
    return future
