"""Gipfelkreuzer: consensus peak generation for genomic peak data.

This package provides tools for:
- Reading peak calls (BED / narrowPeak) from one or more replicates
- Binning overlapping and adjacent peaks per chromosome
- Iterative summit-based consensus peaks (Gipfelkreuzer algorithm)
- Simple merging and summit-harmonised merging of peaks
- Writing consensus peaks as BED records

Example usage:
    >>> from gipfelkreuzer.io import read_bed_files, write_bed
    >>> from gipfelkreuzer.core.consensus import ConsensusEngine, ConsensusConfig
    >>>
    >>> peaks = read_bed_files(["rep1.narrowPeak", "rep2.narrowPeak"])
    >>> result = ConsensusEngine(ConsensusConfig()).run(peaks)
    >>> write_bed("consensus.bed", result.peaks)
"""

__version__ = "0.1.0"
