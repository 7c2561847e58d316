"""Binning of overlapping and adjacent peaks.

Peaks are sorted by start coordinate and swept once. Each peak either extends
the current bin (if it overlaps the bin or touches it) or opens a new bin.
Since peaks arrive sorted by start, a peak can never reach back into a bin
that was already closed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .record import PeakRecord

logger = logging.getLogger(__name__)


def is_continuous_range(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Return True if the two ranges overlap or are directly adjacent.

    Parameters
    ----------
    a_start, a_end : int
        Inclusive bounds of range A
    b_start, b_end : int
        Inclusive bounds of range B

    Raises
    ------
    AssertionError
        If either range has its start after its end
    """
    assert a_start <= a_end and b_start <= b_end, (
        f"Invalid ranges while comparing for continuity: "
        f"A[{a_start}, {a_end}], B[{b_start}, {b_end}]"
    )
    return b_start <= a_end + 1 and b_end + 1 >= a_start


@dataclass
class PeakBin:
    """A bin of overlapping or adjacent peaks.

    Attributes
    ----------
    start : int
        Smallest start coordinate of all member peaks
    end : int
        Largest end coordinate of all member peaks
    peaks : List[PeakRecord]
        Member peaks in insertion order
    """

    start: int
    end: int
    peaks: List[PeakRecord] = field(default_factory=list)

    @classmethod
    def from_peak(cls, peak: PeakRecord) -> "PeakBin":
        """Create a new bin seeded with a single peak."""
        return cls(start=peak.start, end=peak.end, peaks=[peak])

    def __len__(self) -> int:
        return len(self.peaks)

    def length(self) -> int:
        """Return the inclusive length of the bin extent."""
        return self.end - self.start + 1

    def insert(self, peak: PeakRecord) -> None:
        """Add a peak and widen the bin extent if required."""
        if peak.start < self.start:
            self.start = peak.start
        if peak.end > self.end:
            self.end = peak.end
        self.peaks.append(peak)

    def try_insert(self, peak: PeakRecord) -> Optional[PeakRecord]:
        """Insert the peak if it overlaps or touches the bin.

        Returns
        -------
        PeakRecord or None
            None if the peak was inserted, otherwise the unchanged peak
        """
        if is_continuous_range(self.start, self.end, peak.start, peak.end):
            self.insert(peak)
            return None
        return peak


def bin_peaks(peaks: Iterable[PeakRecord]) -> List[PeakBin]:
    """Group peaks into bins of overlapping or adjacent peaks.

    Parameters
    ----------
    peaks : Iterable[PeakRecord]
        Peaks of a single chromosome, in any order

    Returns
    -------
    List[PeakBin]
        Bins ordered by start coordinate. Every peak is part of exactly one
        bin and consecutive bins are separated by at least one base.
    """
    sorted_peaks = sorted(peaks, key=lambda peak: peak.start)
    logger.debug("Binning %d peaks", len(sorted_peaks))

    bins: List[PeakBin] = []
    for peak in sorted_peaks:
        if bins and bins[-1].try_insert(peak) is None:
            continue
        logger.debug("Opening bin %d at peak %s", len(bins), peak)
        bins.append(PeakBin.from_peak(peak))

    logger.debug("Created %d bins", len(bins))
    return bins
