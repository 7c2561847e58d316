"""Command-line interface for Gipfelkreuzer.

Provides CLI commands for creating and inspecting consensus peaks.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import yaml

from gipfelkreuzer import __version__
from gipfelkreuzer.core.consensus import (
    ALGORITHMS,
    ConsensusEngine,
    GipfelkreuzerConfig,
)
from gipfelkreuzer.core.peaks import PeakDataError
from gipfelkreuzer.io import (
    BedFormatError,
    add_file_handler,
    log_yaml,
    read_bed_files,
    write_bed,
    write_summary,
)

# Errors reported to the user instead of a traceback.
USER_ERRORS = (BedFormatError, PeakDataError, FileNotFoundError, KeyError, ValueError)


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Setup logging for CLI commands."""
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger("gipfelkreuzer")
    logger.setLevel(level)
    return logger


def _remove_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    handler.close()


@click.group()
@click.version_option(version=__version__, prog_name="gipfelkreuzer")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug output")
@click.option("--log-file", type=click.Path(dir_okay=False),
              help="Also write logs to a timestamped file based on this path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, debug: bool, log_file: Optional[str]) -> None:
    """Gipfelkreuzer: consensus peaks from genomic peak data.

    Creates consensus peaks from ATAC- or ChIP-seq peak calls in BED or
    narrowPeak format.

    Examples:

        # Iterative summit-based consensus peaks
        gipfelkreuzer consensus -i rep1.narrowPeak -i rep2.narrowPeak -o consensus.bed

        # Harmonised consensus peaks with a 250 bp radius
        gipfelkreuzer consensus -i peaks.bed -o out.bed --algorithm harmonised --radius 250

        # Inspect the binning of raw peaks
        gipfelkreuzer inspect -i peaks.bed
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    logger = setup_logging(verbose, debug)
    if log_file:
        actual_path = add_file_handler(logger, log_file, level=logger.level)
        file_handler = logger.handlers[-1]
        ctx.call_on_close(lambda: _remove_handler(logger, file_handler))
        logger.info(f"Logging to: {actual_path}")
    ctx.obj["logger"] = logger


@cli.command()
@click.option("--input", "-i", "input_paths", required=True, multiple=True,
              type=click.Path(exists=True, dir_okay=False),
              help="Input BED / narrowPeak file (repeatable)")
@click.option("--out", "-o", "output_path", required=True, type=click.Path(dir_okay=False),
              help="Output BED file")
@click.option("--config", "-c", type=click.Path(exists=True),
              help="Configuration file (YAML)")
@click.option("--algorithm", "-a", type=click.Choice(ALGORITHMS),
              help="Consensus algorithm")
@click.option("--max-iterations", type=click.IntRange(min=0),
              help="Maximum number of additional merging passes (gipfelkreuzer)")
@click.option("--min-peaks", "min_peaks", type=click.IntRange(min=0),
              help="Minimum number of raw peaks per consensus peak")
@click.option("--radius", type=click.IntRange(min=0),
              help="Distance from the summit for harmonised peaks (harmonised)")
@click.option("--fields", "n_fields", type=click.IntRange(min=0),
              help="Number of BED columns to write")
@click.option("--summit-offset/--summit-absolute", "summit_as_offset", default=None,
              help="Write the summit relative to the start or as absolute coordinate")
@click.option("--summary", "summary_path", type=click.Path(dir_okay=False),
              help="Write a per-chromosome summary table (CSV)")
@click.pass_context
def consensus(
    ctx: click.Context,
    input_paths: Tuple[str, ...],
    output_path: str,
    config: Optional[str],
    algorithm: Optional[str],
    max_iterations: Optional[int],
    min_peaks: Optional[int],
    radius: Optional[int],
    n_fields: Optional[int],
    summit_as_offset: Optional[bool],
    summary_path: Optional[str],
) -> None:
    """Create consensus peaks from one or more peak files."""
    logger = ctx.obj["logger"]

    # Load config if provided, command line options take precedence
    try:
        if config:
            cfg = GipfelkreuzerConfig.from_yaml(Path(config))
        else:
            cfg = GipfelkreuzerConfig()
    except (TypeError, ValueError, yaml.YAMLError) as err:
        logger.error(f"Invalid configuration file {config}: {err}")
        sys.exit(1)

    if algorithm is not None:
        cfg.consensus.algorithm = algorithm
    if max_iterations is not None:
        cfg.consensus.max_iterations = max_iterations
    if min_peaks is not None:
        cfg.consensus.min_peaks_per_consensus = min_peaks
    if radius is not None:
        cfg.consensus.harmonising_radius = radius
    if n_fields is not None:
        cfg.output.n_fields = n_fields
    if summit_as_offset is not None:
        cfg.output.summit_as_offset = summit_as_offset

    try:
        cfg.validate()
        if not (ctx.obj["verbose"] or ctx.obj["debug"]):
            logger.setLevel(cfg.log_level.upper())
        log_yaml(logger, {"inputs": list(input_paths), "output": output_path, **cfg.to_dict()})

        peaks = read_bed_files(input_paths)
        engine = ConsensusEngine(cfg.consensus, logger=logger)
        result = engine.run(peaks)

        write_bed(
            output_path,
            result.peaks,
            cfg.output.n_fields,
            summit_as_offset=cfg.output.summit_as_offset,
        )
        if summary_path:
            write_summary(result.summary, summary_path)
            logger.info(f"Summary saved to: {summary_path}")
    except USER_ERRORS as err:
        logger.error(f"Consensus peak generation failed: {err}")
        sys.exit(1)

    click.echo(
        f"Consensus complete: {result.n_consensus_peaks} consensus peaks "
        f"from {result.n_input_peaks} input peaks ({result.algorithm})"
    )
    click.echo(f"Output saved to: {output_path}")


@cli.command()
@click.option("--input", "-i", "input_paths", required=True, multiple=True,
              type=click.Path(exists=True, dir_okay=False),
              help="Input BED / narrowPeak file (repeatable)")
@click.pass_context
def inspect(ctx: click.Context, input_paths: Tuple[str, ...]) -> None:
    """Show per-chromosome peak and bin statistics."""
    logger = ctx.obj["logger"]

    try:
        peaks = read_bed_files(input_paths)
        table = ConsensusEngine(logger=logger).inspect(peaks)
    except USER_ERRORS as err:
        logger.error(f"Inspection failed: {err}")
        sys.exit(1)

    if table.empty:
        click.echo("No peaks found")
        return
    click.echo(table.to_string(index=False))


def main() -> None:
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
