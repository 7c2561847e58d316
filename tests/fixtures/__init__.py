"""Test fixtures for Gipfelkreuzer.

Provides mock peak generators and test utilities.
"""

from .mock_peaks import (
    create_mock_peaks,
    create_peaks_by_chromosome,
    write_narrowpeak,
)

__all__ = [
    "create_mock_peaks",
    "create_peaks_by_chromosome",
    "write_narrowpeak",
]
