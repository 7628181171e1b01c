"""Choosing the volume scan closest to a requested time of day."""

from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Sequence

from .errors import NoCandidatesError, ScanIdentifierError

logger = logging.getLogger(__name__)


def scan_time(identifier: str) -> time:
    """
    Extract the capture time embedded in a scan identifier.

    Identifiers look like ``KDMX20230406_000312_V06``; the second
    ``_``-separated field is the capture time as ``HHMMSS``.

    Parameters
    ----------
    identifier : str
        Scan identifier.

    Returns
    -------
    datetime.time
        Capture time of day.
    """
    parts = identifier.split("_")
    if len(parts) < 2:
        raise ScanIdentifierError(f"Scan identifier has no time field: {identifier!r}")

    try:
        return datetime.strptime(parts[1], "%H%M%S").time()
    except ValueError as exc:
        raise ScanIdentifierError(
            f"Scan identifier time is not HHMMSS: {identifier!r}"
        ) from exc


def _seconds(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def select_nearest_scan(identifiers: Sequence[str], target: time) -> str:
    """
    Return the identifier whose capture time is nearest ``target``.

    Nearness is the signed difference ``target - capture``; the candidate
    with the smallest signed difference wins and the first one wins ties.
    This is not an absolute-distance match: a capture after the target
    always beats one before it.

    Parameters
    ----------
    identifiers : sequence of str
        Candidate scan identifiers.
    target : datetime.time
        Requested time of day.

    Returns
    -------
    str
        One of ``identifiers``.
    """
    if not identifiers:
        raise NoCandidatesError("No scans available to select from")

    # Every identifier is parsed up front so a malformed one always fails.
    target_s = _seconds(target)
    diffs = [target_s - _seconds(scan_time(ident)) for ident in identifiers]

    best = 0
    for idx, diff in enumerate(diffs):
        if diff < diffs[best]:
            best = idx

    nearest = identifiers[best]
    logger.info("Nearest scan to %s: %s", target.isoformat(), nearest)
    return nearest
