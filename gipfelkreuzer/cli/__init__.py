"""Command-line interface for Gipfelkreuzer.

Example Usage
-------------
    # From command line:
    gipfelkreuzer --help
    gipfelkreuzer consensus -i peaks.narrowPeak -o consensus.bed
    gipfelkreuzer inspect -i peaks.narrowPeak
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
