"""Peak records and binning of overlapping peaks.

Example Usage
-------------
>>> from gipfelkreuzer.core.peaks import PeakRecord, bin_peaks
>>> peaks = [PeakRecord(0, 10, 20, 15), PeakRecord(1, 21, 30, 25)]
>>> [(b.start, b.end) for b in bin_peaks(peaks)]
[(10, 30)]
"""

from .record import (
    MAX_COORDINATE,
    MIN_COORDINATE,
    InvalidInterval,
    PeakDataError,
    PeakRecord,
    SummitOutOfRange,
    midpoint,
)
from .binning import PeakBin, bin_peaks, is_continuous_range

__all__ = [
    # Records
    "MAX_COORDINATE",
    "MIN_COORDINATE",
    "PeakRecord",
    "midpoint",
    # Errors
    "PeakDataError",
    "InvalidInterval",
    "SummitOutOfRange",
    # Binning
    "PeakBin",
    "bin_peaks",
    "is_continuous_range",
]
