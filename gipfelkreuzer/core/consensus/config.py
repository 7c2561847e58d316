"""Configuration classes for consensus peak generation.

All parameters can be loaded from YAML and overridden on the command line.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

ALGORITHMS: List[str] = ["gipfelkreuzer", "simple", "harmonised"]
LOG_LEVELS: List[str] = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _check_mapping(data: Any, section: str) -> None:
    if not isinstance(data, dict):
        raise ValueError(
            f"Invalid configuration: section '{section}' must be a mapping, "
            f"got {type(data).__name__}"
        )


@dataclass
class ConsensusConfig:
    """Configuration for consensus peak generation.

    Attributes
    ----------
    algorithm : str
        Consensus algorithm (gipfelkreuzer, simple, harmonised)
    max_iterations : int
        Maximum number of additional merging passes per bin (gipfelkreuzer)
    min_peaks_per_consensus : int
        Minimum number of raw peaks per consensus peak (gipfelkreuzer,
        harmonised). 0 disables filtering.
    harmonising_radius : int
        Distance from the summit defining harmonised regions (harmonised)
    """

    algorithm: str = "gipfelkreuzer"
    max_iterations: int = 20
    min_peaks_per_consensus: int = 2
    harmonising_radius: int = 250


@dataclass
class OutputConfig:
    """Configuration for BED output.

    Attributes
    ----------
    n_fields : int
        Number of BED columns to write
    summit_as_offset : bool
        Write the summit relative to the start (narrowPeak convention)
        instead of as an absolute coordinate
    """

    n_fields: int = 10
    summit_as_offset: bool = False


@dataclass
class GipfelkreuzerConfig:
    """Master configuration for a consensus peak run.

    Attributes
    ----------
    consensus : ConsensusConfig
        Consensus algorithm configuration
    output : OutputConfig
        BED output configuration
    log_level : str
        Logging level for the run
    """

    consensus: ConsensusConfig = field(default_factory=ConsensusConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "WARNING"

    @classmethod
    def from_yaml(cls, path: Path) -> "GipfelkreuzerConfig":
        """Load configuration from YAML file.

        Parameters
        ----------
        path : Path
            Path to YAML config file

        Returns
        -------
        GipfelkreuzerConfig
            Loaded configuration
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        _check_mapping(data, str(path))

        # Handle nested gipfelkreuzer section
        if "gipfelkreuzer" in data:
            data = data["gipfelkreuzer"] or {}
            _check_mapping(data, "gipfelkreuzer")
        for section in ("consensus", "output"):
            _check_mapping(data.get(section) or {}, section)

        config = cls(
            consensus=ConsensusConfig(**(data.get("consensus") or {})),
            output=OutputConfig(**(data.get("output") or {})),
            log_level=data.get("log_level", "WARNING"),
        )
        config.validate()
        return config

    @classmethod
    def default(cls) -> "GipfelkreuzerConfig":
        """Create default configuration."""
        return cls()

    def validate(self) -> None:
        """Check parameter ranges.

        Raises
        ------
        ValueError
            If a parameter is out of range
        """
        errors = []
        if self.consensus.algorithm not in ALGORITHMS:
            errors.append(
                f"Unknown algorithm '{self.consensus.algorithm}', "
                f"expected one of {ALGORITHMS}"
            )
        for name in ("max_iterations", "min_peaks_per_consensus", "harmonising_radius"):
            value = getattr(self.consensus, name)
            if not isinstance(value, int) or value < 0:
                errors.append(f"{name} must be a non-negative integer, got {value!r}")
        if not isinstance(self.output.n_fields, int) or self.output.n_fields < 0:
            errors.append(
                f"n_fields must be a non-negative integer, got {self.output.n_fields!r}"
            )
        if str(self.log_level).upper() not in LOG_LEVELS:
            errors.append(f"Unknown log level '{self.log_level}', expected one of {LOG_LEVELS}")
        if errors:
            raise ValueError("Invalid configuration: " + "; ".join(errors))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "consensus": {
                "algorithm": self.consensus.algorithm,
                "max_iterations": self.consensus.max_iterations,
                "min_peaks_per_consensus": self.consensus.min_peaks_per_consensus,
                "harmonising_radius": self.consensus.harmonising_radius,
            },
            "output": {
                "n_fields": self.output.n_fields,
                "summit_as_offset": self.output.summit_as_offset,
            },
            "log_level": self.log_level,
        }
