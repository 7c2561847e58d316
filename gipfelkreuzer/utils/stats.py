"""Statistical utilities for Gipfelkreuzer.

Provides percentile computation and width summaries for peak collections.
"""

from __future__ import annotations

from typing import Dict, Iterable, Sequence

import numpy as np

WIDTH_PERCENTILES = (5.0, 50.0, 95.0)


def _to_width_array(widths: Iterable[int]) -> np.ndarray:
    # Widths can reach 2**64, which does not fit an int64 array.
    return np.fromiter((float(width) for width in widths), dtype=float)


def compute_percentiles(widths: Iterable[int], percentiles: Sequence[float]) -> np.ndarray:
    """Compute percentiles of interval widths.

    Parameters
    ----------
    widths : Iterable[int]
        Inclusive interval widths.
    percentiles : Sequence[float]
        Percentiles to compute (0-100).

    Returns
    -------
    np.ndarray
        Linearly interpolated percentile values, NaN for every percentile
        if no widths are given.
    """
    arr = _to_width_array(widths)
    if arr.size == 0:
        return np.full(len(percentiles), np.nan)
    return np.percentile(arr, percentiles)


def width_summary(
    widths: Iterable[int],
    *,
    prefix: str = "width",
    percentiles: Sequence[float] = WIDTH_PERCENTILES,
) -> Dict[str, float]:
    """Summarize a collection of interval widths.

    Parameters
    ----------
    widths : Iterable[int]
        Interval widths.
    prefix : str
        Prefix of the returned keys.
    percentiles : Sequence[float]
        Percentiles to report.

    Returns
    -------
    Dict[str, float]
        ``{prefix}_mean`` and ``{prefix}_p{percentile}`` values, NaN when
        no widths are given.
    """
    arr = _to_width_array(widths)
    summary = {f"{prefix}_mean": float(arr.mean()) if arr.size else float("nan")}
    for pct, value in zip(percentiles, compute_percentiles(arr, percentiles)):
        summary[f"{prefix}_p{pct:g}"] = float(value)
    return summary
