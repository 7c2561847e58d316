"""Consensus algorithms and their registry.

Each algorithm implements the same contract: raw peaks of one chromosome in,
consensus peaks out. Algorithms register themselves by ID:

    @AlgorithmRegistry.register
    class MyAlgorithm(BaseConsensusAlgorithm):
        algorithm_id = "mine"
        ...
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Type

from ..peaks.binning import PeakBin, bin_peaks
from ..peaks.record import PeakRecord
from .config import ConsensusConfig
from .gipfelkreuzer import gipfelkreuzer_consensus
from .harmonise import harmonise_peak, harmonised_consensus
from .simple import simple_consensus


class BaseConsensusAlgorithm(ABC):
    """Abstract base class for consensus algorithms.

    Attributes
    ----------
    algorithm_id : str
        Unique identifier of the algorithm
    description : str
        Human-readable description
    """

    algorithm_id: str = "base"
    description: str = "Base consensus algorithm"

    def __init__(self, config: Optional[ConsensusConfig] = None):
        self.config = config or ConsensusConfig(algorithm=self.algorithm_id)

    @abstractmethod
    def consensus(self, peaks: Iterable[PeakRecord]) -> List[PeakRecord]:
        """Create consensus peaks from the raw peaks of one chromosome."""
        pass

    def bins(self, peaks: Iterable[PeakRecord]) -> List[PeakBin]:
        """Return the bins the algorithm forms consensus peaks from."""
        return bin_peaks(peaks)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(algorithm_id={self.algorithm_id!r})"


class AlgorithmRegistry:
    """Registry for consensus algorithms."""

    _algorithms: Dict[str, Type[BaseConsensusAlgorithm]] = {}

    @classmethod
    def register(
        cls, algorithm_class: Type[BaseConsensusAlgorithm]
    ) -> Type[BaseConsensusAlgorithm]:
        """Register an algorithm class (use as decorator)."""
        cls._algorithms[algorithm_class.algorithm_id] = algorithm_class
        return algorithm_class

    @classmethod
    def get_algorithm(cls, algorithm_id: str) -> Optional[Type[BaseConsensusAlgorithm]]:
        """Get algorithm class by ID."""
        return cls._algorithms.get(algorithm_id)

    @classmethod
    def list_algorithm_ids(cls) -> List[str]:
        """Get sorted list of all registered algorithm IDs."""
        return sorted(cls._algorithms.keys())

    @classmethod
    def create(cls, config: ConsensusConfig) -> BaseConsensusAlgorithm:
        """Instantiate the algorithm selected by the configuration.

        Raises
        ------
        KeyError
            If no algorithm is registered under ``config.algorithm``
        """
        algorithm_class = cls._algorithms.get(config.algorithm)
        if algorithm_class is None:
            raise KeyError(
                f"Unknown consensus algorithm '{config.algorithm}'. "
                f"Available: {cls.list_algorithm_ids()}"
            )
        return algorithm_class(config)


@AlgorithmRegistry.register
class GipfelkreuzerAlgorithm(BaseConsensusAlgorithm):
    """Iterative summit-proximity merging within bins."""

    algorithm_id = "gipfelkreuzer"
    description = "Iterative merging of peaks by summit proximity"

    def consensus(self, peaks: Iterable[PeakRecord]) -> List[PeakRecord]:
        return gipfelkreuzer_consensus(
            peaks,
            max_iterations=self.config.max_iterations,
            min_peaks_per_consensus=self.config.min_peaks_per_consensus,
        )


@AlgorithmRegistry.register
class SimpleAlgorithm(BaseConsensusAlgorithm):
    """One consensus peak per bin of overlapping peaks."""

    algorithm_id = "simple"
    description = "Merging of all overlapping and adjacent peaks"

    def consensus(self, peaks: Iterable[PeakRecord]) -> List[PeakRecord]:
        return simple_consensus(peaks)


@AlgorithmRegistry.register
class HarmonisedAlgorithm(BaseConsensusAlgorithm):
    """One consensus peak per bin of summit-centred windows."""

    algorithm_id = "harmonised"
    description = "Merging of fixed-radius windows around peak summits"

    def consensus(self, peaks: Iterable[PeakRecord]) -> List[PeakRecord]:
        return harmonised_consensus(
            peaks,
            radius=self.config.harmonising_radius,
            min_peaks_per_consensus=self.config.min_peaks_per_consensus,
        )

    def bins(self, peaks: Iterable[PeakRecord]) -> List[PeakBin]:
        radius = self.config.harmonising_radius
        return bin_peaks(harmonise_peak(peak, radius) for peak in peaks)
