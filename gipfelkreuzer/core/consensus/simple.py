"""Simple merging of overlapping and adjacent peaks."""

from __future__ import annotations

from typing import Iterable, List

from ..peaks.binning import bin_peaks
from ..peaks.record import PeakDataError, PeakRecord, midpoint


def simple_consensus(peaks: Iterable[PeakRecord]) -> List[PeakRecord]:
    """Merge every bin of overlapping or adjacent peaks into one peak.

    The consensus peak spans the whole bin, its summit is the bin midpoint
    and its ID is the index of the bin.
    """
    merged_peaks: List[PeakRecord] = []
    for bin_index, peak_bin in enumerate(bin_peaks(peaks)):
        try:
            merged_peaks.append(
                PeakRecord(
                    id=bin_index,
                    start=peak_bin.start,
                    end=peak_bin.end,
                    summit=midpoint(peak_bin.start, peak_bin.end),
                )
            )
        except PeakDataError as err:
            raise type(err)(
                f"Failed to create a simple merge consensus peak from peak bin "
                f"{bin_index} [{peak_bin.start}, {peak_bin.end}]: {err}"
            ) from err
    return merged_peaks
