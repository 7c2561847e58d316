"""Pytest configuration and shared fixtures for Gipfelkreuzer tests."""

import sys
from pathlib import Path

import pytest

# Add package to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gipfelkreuzer.core.peaks import PeakRecord

# Import mock data generators
from tests.fixtures import (
    create_mock_peaks,
    create_peaks_by_chromosome,
    write_narrowpeak,
)


# ============================================================================
# Peak Fixtures
# ============================================================================


@pytest.fixture
def proximity_peaks() -> list:
    """Eight peaks forming two summit proximity groups (radius 250)."""
    return [
        PeakRecord(0, 12, 22, 18),
        PeakRecord(1, 11, 21, 17),
        PeakRecord(7, 13, 22, 16),
        PeakRecord(2, 23, 26, 24),
        PeakRecord(3, 27, 29, 27),
        PeakRecord(4, 270, 290, 277),
        PeakRecord(5, 271, 291, 276),
        PeakRecord(6, 2700, 2900, 2770),
    ]


@pytest.fixture
def overlapping_peaks() -> list:
    """Six peaks forming two bins of overlapping or adjacent peaks."""
    return [
        PeakRecord(0, 12, 24, 18),
        PeakRecord(1, 11, 21, 17),
        PeakRecord(2, 23, 26, 24),
        PeakRecord(3, 27, 29, 27),
        PeakRecord(4, 260, 290, 270),
        PeakRecord(5, 259, 277, 270),
    ]


@pytest.fixture
def mock_peaks() -> list:
    """Create 200 mock peaks around 10 binding sites."""
    return create_mock_peaks(n_peaks=200, n_sites=10)


@pytest.fixture
def peaks_by_chromosome() -> dict:
    """Create mock peaks on two chromosomes."""
    return create_peaks_by_chromosome(["chr1", "chr2"], n_peaks=100)


@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Create a temporary output directory for tests."""
    output_dir = tmp_path / "output"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


# ============================================================================
# File Fixtures
# ============================================================================


@pytest.fixture
def narrowpeak_file(tmp_path: Path) -> Path:
    """Create a narrowPeak file with two chromosomes."""
    return write_narrowpeak(
        tmp_path / "sample.narrowPeak",
        [
            ("chr1", 100, 200, 50),
            ("chr1", 120, 210, 40),
            ("chr1", 110, 190, 45),
            ("chr1", 5000, 5200, 100),
            ("chr2", 300, 400, None),
        ],
    )


@pytest.fixture
def sample_config(tmp_path: Path) -> Path:
    """Create sample configuration file."""
    import yaml

    config = {
        "gipfelkreuzer": {
            "consensus": {
                "algorithm": "harmonised",
                "min_peaks_per_consensus": 1,
                "harmonising_radius": 100,
            },
            "output": {
                "n_fields": 4,
            },
            "log_level": "INFO",
        },
    }

    path = tmp_path / "gipfelkreuzer.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)

    return path
