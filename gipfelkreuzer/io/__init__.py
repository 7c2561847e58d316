"""I/O utilities for Gipfelkreuzer.

Provides BED reading and writing, summary export and logging utilities.
"""

from .logging import add_file_handler, get_timestamped_log_path, log_yaml
from .bed import (
    BedFormatError,
    peak_to_bed_fields,
    read_bed,
    read_bed_files,
    write_bed,
    write_summary,
)

__all__ = [
    # Logging
    "add_file_handler",
    "get_timestamped_log_path",
    "log_yaml",
    # BED I/O
    "BedFormatError",
    "peak_to_bed_fields",
    "read_bed",
    "read_bed_files",
    "write_bed",
    "write_summary",
]
