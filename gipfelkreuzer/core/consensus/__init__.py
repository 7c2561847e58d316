"""Consensus peak generation.

Provides the Gipfelkreuzer algorithm (iterative merging of peaks by summit
proximity), simple merging of overlapping peaks and harmonised merging of
summit-centred windows, together with an engine running them per chromosome.

Example Usage
-------------
>>> from gipfelkreuzer.core.consensus import ConsensusEngine, ConsensusConfig
>>> config = ConsensusConfig(algorithm="gipfelkreuzer", max_iterations=20)
>>> engine = ConsensusEngine(config)
>>> result = engine.run(peaks_by_chromosome)
>>> result.summary
"""

# Configuration classes
from .config import (
    ALGORITHMS,
    ConsensusConfig,
    GipfelkreuzerConfig,
    OutputConfig,
)

# Algorithms
from .aggregator import ConsensusAggregator, median
from .gipfelkreuzer import (
    bin_to_consensus_peaks,
    gipfelkreuzer_consensus,
    reduce_aggregators,
)
from .harmonise import harmonise_peak, harmonised_consensus
from .simple import simple_consensus

# Dispatch
from .registry import (
    AlgorithmRegistry,
    BaseConsensusAlgorithm,
    GipfelkreuzerAlgorithm,
    HarmonisedAlgorithm,
    SimpleAlgorithm,
)
from .engine import ConsensusEngine, ConsensusResult

__all__ = [
    # Config
    "ALGORITHMS",
    "ConsensusConfig",
    "GipfelkreuzerConfig",
    "OutputConfig",
    # Gipfelkreuzer
    "ConsensusAggregator",
    "median",
    "bin_to_consensus_peaks",
    "gipfelkreuzer_consensus",
    "reduce_aggregators",
    # Simple / harmonised
    "simple_consensus",
    "harmonise_peak",
    "harmonised_consensus",
    # Dispatch
    "AlgorithmRegistry",
    "BaseConsensusAlgorithm",
    "GipfelkreuzerAlgorithm",
    "HarmonisedAlgorithm",
    "SimpleAlgorithm",
    # Engine
    "ConsensusEngine",
    "ConsensusResult",
]
