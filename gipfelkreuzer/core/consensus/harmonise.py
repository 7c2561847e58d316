"""Consensus peaks from summit-harmonised peak regions.

Every raw peak is replaced by a window of fixed radius around its summit.
Overlapping or adjacent windows are binned, bins with too little support are
dropped and each remaining bin becomes one consensus peak.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from ..peaks.binning import bin_peaks
from ..peaks.record import (
    MAX_COORDINATE,
    MIN_COORDINATE,
    PeakDataError,
    PeakRecord,
    midpoint,
)

logger = logging.getLogger(__name__)


def harmonise_peak(peak: PeakRecord, radius: int) -> PeakRecord:
    """Set the peak region to ``[summit - radius, summit + radius]``.

    The region is clamped to the coordinate space instead of wrapping.

    Parameters
    ----------
    peak : PeakRecord
        Peak to harmonise
    radius : int
        Distance of start and end from the summit

    Returns
    -------
    PeakRecord
        New peak with the same ID and summit
    """
    summit = peak.summit
    return PeakRecord(
        id=peak.id,
        start=max(summit - radius, MIN_COORDINATE),
        end=min(summit + radius, MAX_COORDINATE),
        summit=summit,
    )


def harmonised_consensus(
    peaks: Iterable[PeakRecord],
    radius: int,
    min_peaks_per_consensus: int,
) -> List[PeakRecord]:
    """Create consensus peaks from harmonised peak regions.

    Parameters
    ----------
    peaks : Iterable[PeakRecord]
        Raw peaks of a single chromosome
    radius : int
        Distance from the summit defining the harmonised peak region
    min_peaks_per_consensus : int
        Minimum number of raw peaks in a bin to form a consensus peak

    Returns
    -------
    List[PeakRecord]
        One consensus peak per supported bin, IDs numbered consecutively

    Raises
    ------
    PeakDataError
        If a consensus peak cannot be created from a bin
    """
    if radius < 0:
        raise ValueError(f"The harmonising radius must not be negative, got {radius}")

    harmonised = [harmonise_peak(peak, radius) for peak in peaks]
    bins = [
        peak_bin
        for peak_bin in bin_peaks(harmonised)
        if len(peak_bin) >= min_peaks_per_consensus
    ]
    logger.debug(
        "Harmonised %d peaks with radius %d into %d supported bins",
        len(harmonised),
        radius,
        len(bins),
    )

    consensus_peaks: List[PeakRecord] = []
    for bin_index, peak_bin in enumerate(bins):
        try:
            consensus_peaks.append(
                PeakRecord(
                    id=bin_index,
                    start=peak_bin.start,
                    end=peak_bin.end,
                    summit=midpoint(peak_bin.start, peak_bin.end),
                )
            )
        except PeakDataError as err:
            raise type(err)(
                f"Failed to create a harmonised consensus peak from peak bin "
                f"{bin_index} [{peak_bin.start}, {peak_bin.end}]: {err}"
            ) from err
    return consensus_peaks
