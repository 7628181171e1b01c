"""Main CLI entry point for the volume-scan pipeline."""

from __future__ import annotations

import logging
import time as time_module
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import click

from .. import __version__
from ..config import PipelineConfig, PipelineRequest

LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def _parse_time(value: str):
    for fmt in ("%H:%M:%S", "%H%M%S", "%H:%M"):
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise click.BadParameter(f"Not a time of day: {value!r}")


@click.group()
@click.option(
    "-c", "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to YAML config file.",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity.")
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: int) -> None:
    """Radar volume scan to point cloud pipeline."""
    ctx.ensure_object(dict)

    if config:
        ctx.obj["config"] = PipelineConfig.from_yaml(config)
    else:
        ctx.obj["config"] = PipelineConfig()

    ctx.obj["verbose"] = verbose
    logging.basicConfig(
        level=LOG_LEVELS[min(verbose, len(LOG_LEVELS) - 1)],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("nearest")
@click.argument("identifiers", nargs=-1, required=True)
@click.option("--time", "-t", "target", required=True, help="Target time of day (HH:MM:SS).")
def nearest(identifiers: Tuple[str, ...], target: str) -> None:
    """Select the scan identifier nearest a time of day."""
    from ..core.errors import InputError
    from ..core.selection import select_nearest_scan

    try:
        selected = select_nearest_scan(list(identifiers), _parse_time(target))
    except InputError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(selected)


@cli.command("classify")
@click.argument("value", type=float)
def classify(value: float) -> None:
    """Print the reflectivity bin color for a scaled value."""
    from ..processors.coloring import classify_color

    r, g, b = classify_color(value)
    click.echo(f"#{r:02x}{g:02x}{b:02x}")


@cli.command("process")
@click.argument("root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--site", "-s", required=True, help="Radar site id, e.g. KDMX.")
@click.option(
    "--date", "-d", "day",
    required=True,
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Scan date (YYYY-MM-DD).",
)
@click.option("--time", "-t", "target", required=True, help="Target time of day (HH:MM:SS).")
@click.option("--stride", type=int, help="Keep every Nth point.")
@click.option("--cluster/--no-cluster", default=None, help="Run DBSCAN clustering.")
@click.option("--cache-dir", type=click.Path(file_okay=False, path_type=Path), help="Raw file cache.")
@click.option("--plot", "plot_path", type=click.Path(path_type=Path), help="Write a PNG preview.")
@click.option("--poll-interval", type=float, default=0.05, help="State poll interval in seconds.")
@click.pass_context
def process(
    ctx: click.Context,
    root: Path,
    site: str,
    day: datetime,
    target: str,
    stride: Optional[int],
    cluster: Optional[bool],
    cache_dir: Optional[Path],
    plot_path: Optional[Path],
    poll_interval: float,
) -> None:
    """Fetch the scan nearest a time and derive its point cloud."""
    from ..core.models import ColorMode
    from ..pipeline import CsvVolumeDecoder, DirectoryScanSource, SharedState, submit_pipeline

    config: PipelineConfig = ctx.obj["config"].model_copy(deep=True)
    if cache_dir is not None:
        config.cache.directory = cache_dir

    request = PipelineRequest(
        site=site,
        date=day.date(),
        time=_parse_time(target),
        stride=stride,
        cluster=cluster,
    )

    state = SharedState()
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="fetch-process") as executor:
        future = submit_pipeline(
            request,
            state,
            DirectoryScanSource(root),
            CsvVolumeDecoder(),
            executor,
            config,
        )
        while not future.done() and state.snapshot().processing:
            time_module.sleep(poll_interval)

    snapshot = state.snapshot()
    if snapshot.points is None:
        raise click.ClickException(snapshot.last_error or str(future.exception()))

    points = snapshot.points
    stats = snapshot.statistics
    click.echo(f"Points: {points.size:,}")
    if points.labels is not None:
        click.echo(f"Clusters: {points.cluster_count}")
    click.echo(
        f"Timings (ms): load={stats.load_ms} decode={stats.decode_ms} "
        f"pointing={stats.pointing_ms} coloring={stats.coloring_ms} "
        f"sampling={stats.sampling_ms} clustering={stats.clustering_ms}"
    )

    if plot_path is not None:
        from ..visualization.plotting import plot_point_cloud

        mode = ColorMode.CLUSTER if points.cluster is not None else ColorMode.RAW
        plot_point_cloud(plot_path, points, mode=mode, title=f"{site} {day:%Y-%m-%d} {target}")
        click.echo(f"Plot saved: {plot_path}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
