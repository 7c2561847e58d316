"""The Gipfelkreuzer consensus peak algorithm.

Within a bin, the shortest peak seeds a consensus peak. Every other peak whose
summit falls into the current consensus region is merged, and the consensus
region is recomputed after each merge. Peaks that do not match are retained
and seed the next consensus peak of the same pass. The resulting consensus
peaks are fed into further passes until their number stops changing or the
iteration limit is reached.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from ..peaks.binning import PeakBin, bin_peaks
from ..peaks.record import PeakRecord
from .aggregator import ConsensusAggregator

logger = logging.getLogger(__name__)


def reduce_aggregators(
    candidates: List[ConsensusAggregator],
) -> List[ConsensusAggregator]:
    """Run a single merging pass over the candidates.

    Parameters
    ----------
    candidates : List[ConsensusAggregator]
        Aggregators to merge. They are consumed by this call.

    Returns
    -------
    List[ConsensusAggregator]
        One aggregator per cluster found in this pass
    """
    # Shortest first, stable for equal lengths.
    remaining = sorted(candidates, key=lambda candidate: candidate.length())
    reduced: List[ConsensusAggregator] = []

    while remaining:
        aggregator = remaining[0]
        retained: List[ConsensusAggregator] = []
        for candidate in remaining[1:]:
            unmerged = aggregator.try_aggregate(candidate)
            if unmerged is not None:
                retained.append(unmerged)
        reduced.append(aggregator)
        remaining = retained

    return reduced


def bin_to_consensus_peaks(
    peak_bin: PeakBin,
    max_iterations: int,
    min_peaks_per_consensus: int,
) -> List[PeakRecord]:
    """Convert a bin into its consensus peaks.

    Parameters
    ----------
    peak_bin : PeakBin
        Bin of overlapping or adjacent raw peaks
    max_iterations : int
        Maximum number of merging passes after the initial one
    min_peaks_per_consensus : int
        Minimum number of raw peaks a consensus peak must be built from

    Returns
    -------
    List[PeakRecord]
        Consensus peaks of the bin
    """
    consensus = reduce_aggregators(
        [ConsensusAggregator.from_peak(peak) for peak in peak_bin.peaks]
    )
    n_passes = 1
    for _ in range(max_iterations):
        previous_count = len(consensus)
        consensus = reduce_aggregators(consensus)
        n_passes += 1
        if len(consensus) == previous_count:
            break

    logger.debug(
        "Bin [%d, %d]: %d peaks -> %d consensus peaks after %d passes",
        peak_bin.start,
        peak_bin.end,
        len(peak_bin),
        len(consensus),
        n_passes,
    )
    return [
        aggregator.to_peak()
        for aggregator in consensus
        if aggregator.number_aggregated_peaks >= min_peaks_per_consensus
    ]


def gipfelkreuzer_consensus(
    peaks: Iterable[PeakRecord],
    max_iterations: int,
    min_peaks_per_consensus: int,
) -> List[PeakRecord]:
    """Create consensus peaks with the Gipfelkreuzer algorithm.

    Parameters
    ----------
    peaks : Iterable[PeakRecord]
        Raw peaks of a single chromosome
    max_iterations : int
        Maximum number of additional merging passes per bin
    min_peaks_per_consensus : int
        Minimum number of raw peaks per consensus peak (0 disables filtering)

    Returns
    -------
    List[PeakRecord]
        Consensus peaks in bin order
    """
    if max_iterations < 0:
        raise ValueError(f"max_iterations must not be negative, got {max_iterations}")
    if min_peaks_per_consensus < 0:
        raise ValueError(
            f"min_peaks_per_consensus must not be negative, got {min_peaks_per_consensus}"
        )

    consensus_peaks: List[PeakRecord] = []
    for peak_bin in bin_peaks(peaks):
        consensus_peaks.extend(
            bin_to_consensus_peaks(peak_bin, max_iterations, min_peaks_per_consensus)
        )
    return consensus_peaks
