"""Core modules for Gipfelkreuzer.

- peaks: peak records and binning of overlapping peaks
- consensus: consensus algorithms and the per-chromosome engine
"""
