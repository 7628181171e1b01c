"""Rescaling raw gate words into physical reflectivity."""

from __future__ import annotations

import numpy as np

from .errors import UnsupportedWordSizeError
from .models import BELOW_THRESHOLD, MOMENT_FOLDED

SUPPORTED_WORD_SIZE = 8


def scale_gate(raw: int, scale: float, offset: float) -> float:
    """Scale a single raw gate word; see :func:`scale_gates`."""
    if raw == 0:
        return float(BELOW_THRESHOLD)
    if raw == 1:
        return float(MOMENT_FOLDED)
    if scale == 0.0:
        return float(raw)
    return float((np.float32(raw) - np.float32(offset)) / np.float32(scale))


def scale_gates(
    raw: np.ndarray,
    word_size: int,
    scale: float,
    offset: float,
) -> np.ndarray:
    """
    Convert raw gate words to scaled reflectivity values.

    Parameters
    ----------
    raw : np.ndarray
        Raw unsigned gate words.
    word_size : int
        Bits per gate word. Only 8 is supported.
    scale : float
        Moment scale. A scale of 0 passes raw values through unscaled.
    offset : float
        Moment offset.

    Returns
    -------
    np.ndarray
        float32 values of the same length. Raw 0 becomes ``BELOW_THRESHOLD``
        and raw 1 becomes ``MOMENT_FOLDED``.
    """
    if word_size != SUPPORTED_WORD_SIZE:
        raise UnsupportedWordSizeError(
            f"Gate word size {word_size} is not supported (expected {SUPPORTED_WORD_SIZE})"
        )

    words = np.asarray(raw, dtype=np.uint16)
    values = words.astype(np.float32)

    if scale != 0.0:
        values = (values - np.float32(offset)) / np.float32(scale)

    values = np.where(words == 0, BELOW_THRESHOLD, values)
    values = np.where(words == 1, MOMENT_FOLDED, values)
    return values.astype(np.float32)
