"""Aggregation of raw peaks into a consensus peak.

An aggregator keeps every raw peak it absorbed. Its consensus peak is the
median start, median end and median summit of these raw peaks, and keeps the
ID of the peak the aggregator was seeded with.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..peaks.record import PeakRecord


def median(values: Iterable[int]) -> int:
    """Return the integer median of the values.

    For an even number of values the two central values are averaged and
    the result is truncated.

    Raises
    ------
    ValueError
        If no values are given
    """
    ordered = sorted(values)
    if not ordered:
        raise ValueError("The median of an empty collection cannot be calculated.")
    n = len(ordered)
    mid = (n + 1) // 2 - 1
    if n % 2 == 0:
        return (ordered[mid] + ordered[mid + 1]) // 2
    return ordered[mid]


class ConsensusAggregator:
    """Raw peaks merged into one consensus peak by summit proximity.

    Parameters
    ----------
    peaks : List[PeakRecord]
        Raw peaks, the first one being the seed defining the consensus ID
    """

    def __init__(self, peaks: List[PeakRecord]):
        if not peaks:
            raise ValueError("An aggregator requires at least one peak.")
        self._peaks = list(peaks)
        self._consensus = peaks[0]
        if len(self._peaks) > 1:
            self._update_consensus()

    @classmethod
    def from_peak(cls, peak: PeakRecord) -> "ConsensusAggregator":
        """Create an aggregator containing a single raw peak."""
        return cls([peak])

    def __repr__(self) -> str:
        return (
            f"ConsensusAggregator(consensus={self._consensus!r}, "
            f"n_peaks={len(self._peaks)})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConsensusAggregator):
            return NotImplemented
        return self._peaks == other._peaks and self._consensus == other._consensus

    @property
    def id(self) -> int:
        return self._consensus.id

    @property
    def summit(self) -> int:
        return self._consensus.summit

    @property
    def consensus(self) -> PeakRecord:
        return self._consensus

    @property
    def peaks(self) -> List[PeakRecord]:
        return list(self._peaks)

    @property
    def number_aggregated_peaks(self) -> int:
        return len(self._peaks)

    def length(self) -> int:
        """Return the length of the current consensus peak."""
        return self._consensus.length()

    def try_aggregate(
        self, other: "ConsensusAggregator"
    ) -> Optional["ConsensusAggregator"]:
        """Absorb another aggregator if its summit lies within this consensus.

        Parameters
        ----------
        other : ConsensusAggregator
            Aggregator to merge

        Returns
        -------
        ConsensusAggregator or None
            None if merged (the consensus is recomputed), otherwise ``other``
        """
        if self._consensus.start <= other.summit <= self._consensus.end:
            self._peaks.extend(other._peaks)
            self._update_consensus()
            return None
        return other

    def to_peak(self) -> PeakRecord:
        """Return the consensus peak."""
        return self._consensus

    def _update_consensus(self) -> None:
        # Medians of valid peaks always form a valid peak, the constructor
        # still checks it.
        self._consensus = PeakRecord(
            id=self._consensus.id,
            start=median(peak.start for peak in self._peaks),
            end=median(peak.end for peak in self._peaks),
            summit=median(peak.summit for peak in self._peaks),
        )
