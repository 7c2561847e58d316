"""Consensus engine running an algorithm over all chromosomes.

Chromosomes are processed one after the other and independently of each
other: no state is shared between them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence
import logging

import pandas as pd

from ...utils.stats import width_summary
from ..peaks.binning import bin_peaks
from ..peaks.record import PeakRecord
from .config import ConsensusConfig
from .registry import AlgorithmRegistry, BaseConsensusAlgorithm

PeaksByChromosome = Mapping[str, Sequence[PeakRecord]]

SUMMARY_COLUMNS = [
    "chromosome",
    "n_input_peaks",
    "n_bins",
    "n_consensus_peaks",
]


@dataclass
class ConsensusResult:
    """Result of a consensus run.

    Attributes
    ----------
    algorithm : str
        ID of the algorithm used
    peaks : Dict[str, List[PeakRecord]]
        Consensus peaks per chromosome, in input order
    summary : pd.DataFrame
        One row per chromosome with peak counts, the number of bins the
        algorithm merged and width statistics
    """

    algorithm: str
    peaks: Dict[str, List[PeakRecord]] = field(default_factory=dict)
    summary: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=SUMMARY_COLUMNS))

    @property
    def n_input_peaks(self) -> int:
        if self.summary.empty:
            return 0
        return int(self.summary["n_input_peaks"].sum())

    @property
    def n_consensus_peaks(self) -> int:
        return sum(len(peaks) for peaks in self.peaks.values())


class ConsensusEngine:
    """Engine creating consensus peaks for every chromosome.

    Parameters
    ----------
    config : ConsensusConfig, optional
        Consensus configuration. If None, uses defaults.
    logger : logging.Logger, optional
        Logger instance. If None, creates default logger.

    Example
    -------
    >>> from gipfelkreuzer.core.consensus import ConsensusEngine, ConsensusConfig
    >>> engine = ConsensusEngine(ConsensusConfig(algorithm="simple"))
    >>> result = engine.run({"chr1": peaks})
    >>> result.peaks["chr1"]
    """

    def __init__(
        self,
        config: Optional[ConsensusConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config or ConsensusConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.algorithm: BaseConsensusAlgorithm = AlgorithmRegistry.create(self.config)

    def run(self, peaks_by_chromosome: PeaksByChromosome) -> ConsensusResult:
        """Create consensus peaks for all chromosomes.

        Parameters
        ----------
        peaks_by_chromosome : Mapping[str, Sequence[PeakRecord]]
            Raw peaks per chromosome

        Returns
        -------
        ConsensusResult
            Consensus peaks and per-chromosome summary
        """
        self.logger.info(
            "Creating consensus peaks for %d chromosomes with the %s algorithm",
            len(peaks_by_chromosome),
            self.algorithm.algorithm_id,
        )

        consensus: Dict[str, List[PeakRecord]] = {}
        rows: List[Dict[str, Any]] = []
        for chromosome, peaks in peaks_by_chromosome.items():
            peaks = list(peaks)
            chromosome_consensus = self.algorithm.consensus(peaks)
            consensus[chromosome] = chromosome_consensus

            row = {
                "chromosome": chromosome,
                "n_input_peaks": len(peaks),
                "n_bins": len(self.algorithm.bins(peaks)),
                "n_consensus_peaks": len(chromosome_consensus),
            }
            row.update(
                width_summary(
                    (peak.length() for peak in chromosome_consensus), prefix="consensus_width"
                )
            )
            rows.append(row)
            self.logger.info(
                "  %s: %d peaks -> %d consensus peaks",
                chromosome,
                len(peaks),
                len(chromosome_consensus),
            )

        result = ConsensusResult(
            algorithm=self.algorithm.algorithm_id,
            peaks=consensus,
            summary=self._to_frame(rows),
        )
        self.logger.info(
            "Created %d consensus peaks from %d input peaks",
            result.n_consensus_peaks,
            result.n_input_peaks,
        )
        return result

    def inspect(self, peaks_by_chromosome: PeaksByChromosome) -> pd.DataFrame:
        """Summarize the binning of the raw peaks without merging them.

        Parameters
        ----------
        peaks_by_chromosome : Mapping[str, Sequence[PeakRecord]]
            Raw peaks per chromosome

        Returns
        -------
        pd.DataFrame
            One row per chromosome with peak and bin statistics
        """
        rows: List[Dict[str, Any]] = []
        for chromosome, peaks in peaks_by_chromosome.items():
            bins = bin_peaks(peaks)
            row = {
                "chromosome": chromosome,
                "n_input_peaks": len(peaks),
                "n_bins": len(bins),
                "max_peaks_per_bin": max((len(peak_bin) for peak_bin in bins), default=0),
            }
            row.update(width_summary((peak.length() for peak in peaks), prefix="peak_width"))
            row.update(width_summary((peak_bin.length() for peak_bin in bins), prefix="bin_width"))
            rows.append(row)
        return self._to_frame(rows)

    @staticmethod
    def _to_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
        if not rows:
            return pd.DataFrame(columns=SUMMARY_COLUMNS)
        return pd.DataFrame(rows)
