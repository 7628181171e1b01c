"""Scan listing, fetching and decoding collaborators."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from ..core.errors import UpstreamError
from ..core.loaders import load_volume_csv
from ..core.models import VolumeScan

logger = logging.getLogger(__name__)


class ScanSource(Protocol):
    """Lists and fetches raw volume-scan files."""

    def list_scans(self, site: str, day: date) -> Sequence[str]:
        ...

    def fetch_scan(self, identifier: str) -> bytes:
        ...


class ScanDecoder(Protocol):
    """Turns raw volume-scan bytes into a :class:`VolumeScan`."""

    def decode(self, raw: bytes) -> VolumeScan:
        ...


def archive_prefix(site: str, day: date) -> str:
    """Return the ``YYYY/MM/DD/SITE`` prefix used by the Level II archive."""
    return f"{day:%Y/%m/%d}/{site}"


class DirectoryScanSource:
    """
    Scan source backed by a local directory laid out like the Level II archive.

    Files live at ``root/YYYY/MM/DD/SITE/<identifier>``.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self._paths: Dict[str, Path] = {}

    def list_scans(self, site: str, day: date) -> List[str]:
        folder = self.root / archive_prefix(site, day)
        if not folder.is_dir():
            logger.info("No scans under %s", folder)
            return []

        identifiers = []
        for path in sorted(folder.iterdir()):
            if path.is_file():
                self._paths[path.name] = path
                identifiers.append(path.name)
        return identifiers

    def fetch_scan(self, identifier: str) -> bytes:
        path = self._paths.get(identifier)
        if path is None:
            path = next(
                (p for p in self.root.rglob("*") if p.is_file() and p.name == identifier),
                None,
            )
        if path is None:
            raise UpstreamError(f"Unknown scan identifier: {identifier}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise UpstreamError(f"Failed to fetch {identifier}") from exc


class CsvVolumeDecoder:
    """Decoder for radial CSV dumps (see :func:`load_volume_csv`)."""

    def decode(self, raw: bytes) -> VolumeScan:
        try:
            return load_volume_csv(raw)
        except ValueError as exc:
            raise UpstreamError(f"Failed to decode volume scan: {exc}") from exc


def load_scan_bytes(
    identifier: str,
    source: ScanSource,
    cache_dir: Optional[Path] = None,
) -> bytes:
    """
    Return raw bytes for ``identifier``, using ``cache_dir`` when possible.

    The cache is advisory: an unreadable entry is fetched again and a failed
    write is only logged.

    Parameters
    ----------
    identifier : str
        Scan identifier.
    source : ScanSource
        Where to fetch the scan on a cache miss.
    cache_dir : Path, optional
        Cache directory. Caching is disabled when None.

    Returns
    -------
    bytes
        Raw scan file contents.
    """
    if cache_dir is None:
        return source.fetch_scan(identifier)

    cache_path = Path(cache_dir) / identifier
    if cache_path.is_file():
        try:
            data = cache_path.read_bytes()
            logger.info("File already exists on disk, skipping download: %s", cache_path)
            return data
        except OSError as exc:
            logger.warning("Cached scan %s unreadable, fetching again: %s", cache_path, exc)

    logger.info("Downloading %s", identifier)
    data = source.fetch_scan(identifier)

    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_bytes(data)
    except OSError as exc:
        logger.warning("Could not write scan cache %s: %s", cache_path, exc)

    return data
