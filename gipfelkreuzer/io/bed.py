"""BED I/O utilities for Gipfelkreuzer.

Reads BED / narrowPeak files into peak records grouped by chromosome and
writes consensus peaks as BED records. See the GA4GH BED v1.0 definition:
https://github.com/samtools/hts-specs/blob/master/BEDv1.pdf
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple, Union

import pandas as pd

from ..core.peaks.record import PeakDataError, PeakRecord, midpoint

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
PeaksByChromosome = Dict[str, List[PeakRecord]]

FIELD_SEPARATOR = re.compile(r"[ \t]+")
MIN_FIELDS = 3
SUMMIT_FIELD = 9
NO_SUMMIT = "-1"


class BedFormatError(ValueError):
    """Raised when a BED file cannot be parsed."""

    pass


def _parse_coordinate(value: str, name: str, line_number: int, path: Path) -> int:
    try:
        return int(value)
    except ValueError as err:
        raise BedFormatError(
            f'Value "{value}" at line {line_number} of file "{path}" could not be '
            f"parsed as {name}."
        ) from err


def _parse_bed(path: PathLike, id_offset: int = 0) -> Tuple[PeaksByChromosome, int]:
    """Parse a BED file.

    Returns
    -------
    Tuple[Dict[str, List[PeakRecord]], int]
        Peaks per chromosome and the number of lines read
    """
    bed_path = Path(path)
    if not bed_path.exists():
        raise FileNotFoundError(f"BED file not found: {bed_path}")

    peaks: PeaksByChromosome = {}
    n_approximated = 0
    n_lines = 0
    with bed_path.open("r", encoding="utf-8") as handle:
        for line_index, line in enumerate(handle):
            n_lines += 1
            line_number = line_index + 1
            fields = [f for f in FIELD_SEPARATOR.split(line.rstrip("\r\n")) if f]
            if not fields:
                logger.debug("Skipping blank line %d in %s", line_number, bed_path)
                continue
            if fields[0].startswith("#"):
                logger.debug("Skipping comment line %d in %s", line_number, bed_path)
                continue
            if len(fields) < MIN_FIELDS:
                raise BedFormatError(
                    f'Line {line_number} of file "{bed_path}" does not contain the '
                    f"minimally required {MIN_FIELDS} fields."
                )

            chromosome = fields[0]
            start = _parse_coordinate(fields[1], "genomic start coordinates", line_number, bed_path)
            end = _parse_coordinate(fields[2], "genomic end coordinates", line_number, bed_path)
            if len(fields) > SUMMIT_FIELD and fields[SUMMIT_FIELD] != NO_SUMMIT:
                offset = _parse_coordinate(
                    fields[SUMMIT_FIELD], "peak summit offset", line_number, bed_path
                )
                summit = start + offset
            else:
                logger.debug(
                    "Line %d of %s has no summit information, using the region midpoint",
                    line_number,
                    bed_path,
                )
                n_approximated += 1
                summit = midpoint(start, end)

            try:
                peak = PeakRecord(id=id_offset + line_index, start=start, end=end, summit=summit)
            except PeakDataError as err:
                raise BedFormatError(
                    f'Line {line_number} of file "{bed_path}" contains invalid data: {err}'
                ) from err
            peaks.setdefault(chromosome, []).append(peak)

    if n_approximated:
        logger.warning(
            "%d peaks in %s did not contain summit information. Summits are approximated "
            "by the region midpoint.",
            n_approximated,
            bed_path,
        )
    logger.info(
        "Read %d peaks on %d chromosomes from %s",
        sum(len(p) for p in peaks.values()),
        len(peaks),
        bed_path,
    )
    return peaks, n_lines


def read_bed(path: PathLike) -> PeaksByChromosome:
    """Load peaks from a BED or narrowPeak file.

    Columns are separated by spaces or tabs. Column 10, if present and not
    ``-1``, is the summit offset relative to the start; otherwise the summit
    is approximated by the region midpoint. Peak IDs are 0-based line
    indices.

    Parameters
    ----------
    path : PathLike
        Path to BED file.

    Returns
    -------
    Dict[str, List[PeakRecord]]
        Peaks per chromosome in order of appearance.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    BedFormatError
        If a line cannot be parsed or describes an invalid peak.
    """
    peaks, _ = _parse_bed(path)
    return peaks


def read_bed_files(paths: Iterable[PathLike]) -> PeaksByChromosome:
    """Load and pool peaks from multiple BED files.

    Peak IDs of each file are offset by the number of lines of all previous
    files, keeping them unique across files.
    """
    pooled: PeaksByChromosome = {}
    id_offset = 0
    for path in paths:
        peaks, n_lines = _parse_bed(path, id_offset=id_offset)
        for chromosome, chromosome_peaks in peaks.items():
            pooled.setdefault(chromosome, []).extend(chromosome_peaks)
        id_offset += n_lines
    return pooled


def peak_to_bed_fields(
    peak: PeakRecord,
    chromosome: str,
    n_fields: int,
    *,
    summit_as_offset: bool = False,
) -> List[str]:
    """Create the fields of a BED record for a consensus peak.

    Parameters
    ----------
    peak : PeakRecord
        Consensus peak.
    chromosome : str
        Name of the chromosome the peak belongs to.
    n_fields : int
        Number of fields to generate.
    summit_as_offset : bool
        Write the summit relative to the start instead of as absolute
        coordinate.

    Returns
    -------
    List[str]
        The record fields. Name is ``consensus_<id>``, strand is ``.``,
        the summit is field 10 and all other fields are ``0``.
    """
    summit = peak.summit - peak.start if summit_as_offset else peak.summit
    known = {
        0: chromosome,
        1: str(peak.start),
        2: str(peak.end),
        3: f"consensus_{peak.id}",
        5: ".",
        SUMMIT_FIELD: str(summit),
    }
    return [known.get(index, "0") for index in range(n_fields)]


def write_bed(
    path: PathLike,
    peaks: Mapping[str, Sequence[PeakRecord]],
    n_fields: int = 10,
    *,
    summit_as_offset: bool = False,
) -> Path:
    """Write peaks to a tab-separated BED file.

    Parameters
    ----------
    path : PathLike
        Output path. Parent directories are created.
    peaks : Mapping[str, Sequence[PeakRecord]]
        Peaks per chromosome.
    n_fields : int
        Number of fields per record. 0 creates an empty file.
    summit_as_offset : bool
        Write the summit relative to the start.

    Returns
    -------
    Path
        The output path.
    """
    if n_fields < 0:
        raise ValueError(f"The number of BED fields must not be negative, got {n_fields}")

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    rows = [
        peak_to_bed_fields(peak, chromosome, n_fields, summit_as_offset=summit_as_offset)
        for chromosome, chromosome_peaks in peaks.items()
        for peak in chromosome_peaks
    ]
    if n_fields == 0 or not rows:
        output_path.write_text("", encoding="utf-8")
    else:
        pd.DataFrame(rows, dtype=str).to_csv(
            output_path, sep="\t", header=False, index=False, lineterminator="\n"
        )
    logger.info("Wrote %d peaks to %s", len(rows), output_path)
    return output_path


def write_summary(summary: pd.DataFrame, path: PathLike) -> Path:
    """Write a summary DataFrame to CSV ensuring the parent directory exists.

    Parameters
    ----------
    summary : pd.DataFrame
        Summary table.
    path : PathLike
        Output path.

    Returns
    -------
    Path
        The output path.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(output_path, index=False)
    return output_path
