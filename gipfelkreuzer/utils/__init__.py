"""Utility functions for Gipfelkreuzer.

Provides statistical helpers used for run summaries.
"""

from .stats import (
    WIDTH_PERCENTILES,
    compute_percentiles,
    width_summary,
)

__all__ = [
    "WIDTH_PERCENTILES",
    "compute_percentiles",
    "width_summary",
]
