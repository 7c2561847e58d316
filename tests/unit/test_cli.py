"""Unit tests for the command-line interface."""

import logging

import pandas as pd
import pytest
from click.testing import CliRunner

from gipfelkreuzer import __version__
from gipfelkreuzer.cli import cli

HARMONISED_LINES = [
    "chr1\t50\t260\tconsensus_0",
    "chr1\t5000\t5200\tconsensus_1",
    "chr2\t250\t450\tconsensus_0",
]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Remove handlers and levels the CLI attaches to the package logger."""
    yield
    logger = logging.getLogger("gipfelkreuzer")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestConsensusCommand:
    """Tests for the consensus command."""

    def test_default_algorithm(self, runner, narrowpeak_file, tmp_output_dir):
        """Test iterative consensus peaks with default settings."""
        output = tmp_output_dir / "consensus.bed"
        result = runner.invoke(
            cli, ["consensus", "-i", str(narrowpeak_file), "-o", str(output)], obj={}
        )
        assert result.exit_code == 0, result.output
        assert "1 consensus peaks from 5 input peaks (gipfelkreuzer)" in result.output
        assert output.read_text().splitlines() == [
            "chr1\t110\t200\tconsensus_2\t0\t.\t0\t0\t0\t155"
        ]

    def test_summit_offset(self, runner, narrowpeak_file, tmp_output_dir):
        """Test writing summits relative to the start."""
        output = tmp_output_dir / "consensus.bed"
        result = runner.invoke(
            cli,
            ["consensus", "-i", str(narrowpeak_file), "-o", str(output), "--summit-offset"],
            obj={},
        )
        assert result.exit_code == 0, result.output
        assert output.read_text().split("\t")[-1].strip() == "45"

    def test_harmonised_options(self, runner, narrowpeak_file, tmp_output_dir):
        """Test algorithm selection through command line options."""
        output = tmp_output_dir / "harmonised.bed"
        result = runner.invoke(
            cli,
            [
                "consensus",
                "-i", str(narrowpeak_file),
                "-o", str(output),
                "--algorithm", "harmonised",
                "--radius", "100",
                "--min-peaks", "1",
                "--fields", "4",
            ],
            obj={},
        )
        assert result.exit_code == 0, result.output
        assert output.read_text().splitlines() == HARMONISED_LINES

    def test_config_file(self, runner, narrowpeak_file, sample_config, tmp_output_dir):
        """Test settings from a configuration file."""
        output = tmp_output_dir / "harmonised.bed"
        result = runner.invoke(
            cli,
            ["consensus", "-i", str(narrowpeak_file), "-o", str(output), "-c", str(sample_config)],
            obj={},
        )
        assert result.exit_code == 0, result.output
        assert "(harmonised)" in result.output
        assert output.read_text().splitlines() == HARMONISED_LINES

    def test_options_override_config(self, runner, narrowpeak_file, sample_config, tmp_output_dir):
        """Test that command line options take precedence over the config file."""
        output = tmp_output_dir / "simple.bed"
        result = runner.invoke(
            cli,
            [
                "consensus",
                "-i", str(narrowpeak_file),
                "-o", str(output),
                "-c", str(sample_config),
                "--algorithm", "simple",
                "--fields", "3",
            ],
            obj={},
        )
        assert result.exit_code == 0, result.output
        assert output.read_text().splitlines() == [
            "chr1\t100\t210",
            "chr1\t5000\t5200",
            "chr2\t300\t400",
        ]

    def test_summary(self, runner, narrowpeak_file, tmp_output_dir):
        """Test writing the summary table."""
        output = tmp_output_dir / "consensus.bed"
        summary_path = tmp_output_dir / "summary.csv"
        result = runner.invoke(
            cli,
            [
                "consensus",
                "-i", str(narrowpeak_file),
                "-o", str(output),
                "--summary", str(summary_path),
            ],
            obj={},
        )
        assert result.exit_code == 0, result.output
        summary = pd.read_csv(summary_path)
        assert list(summary["chromosome"]) == ["chr1", "chr2"]
        assert list(summary["n_input_peaks"]) == [4, 1]
        assert list(summary["n_consensus_peaks"]) == [1, 0]

    def test_multiple_inputs(self, runner, narrowpeak_file, tmp_path, tmp_output_dir):
        """Test pooling several input files."""
        second = tmp_path / "second.bed"
        second.write_text("chr2\t320\t420\n")
        output = tmp_output_dir / "consensus.bed"
        result = runner.invoke(
            cli,
            ["consensus", "-i", str(narrowpeak_file), "-i", str(second), "-o", str(output)],
            obj={},
        )
        assert result.exit_code == 0, result.output
        assert "from 6 input peaks" in result.output
        assert [line.split("\t")[0] for line in output.read_text().splitlines()] == [
            "chr1",
            "chr2",
        ]

    def test_malformed_input(self, runner, tmp_path, tmp_output_dir):
        """Test that parse errors exit with status 1."""
        bad = tmp_path / "bad.bed"
        bad.write_text("chr1\t10\n")
        output = tmp_output_dir / "consensus.bed"
        result = runner.invoke(cli, ["consensus", "-i", str(bad), "-o", str(output)], obj={})
        assert result.exit_code == 1
        assert not output.exists()

    def test_invalid_config(self, runner, narrowpeak_file, tmp_path, tmp_output_dir):
        """Test that unknown config keys exit with status 1."""
        config = tmp_path / "bad.yaml"
        config.write_text("consensus:\n  radius: 3\n")
        output = tmp_output_dir / "consensus.bed"
        result = runner.invoke(
            cli,
            ["consensus", "-i", str(narrowpeak_file), "-o", str(output), "-c", str(config)],
            obj={},
        )
        assert result.exit_code == 1

    def test_config_not_a_mapping(self, runner, narrowpeak_file, tmp_path, tmp_output_dir):
        """Test that a list document as config exits with status 1."""
        config = tmp_path / "list.yaml"
        config.write_text("- a\n- b\n")
        output = tmp_output_dir / "consensus.bed"
        result = runner.invoke(
            cli,
            ["consensus", "-i", str(narrowpeak_file), "-o", str(output), "-c", str(config)],
            obj={},
        )
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert not output.exists()

    def test_missing_input(self, runner, tmp_path, tmp_output_dir):
        """Test that missing input files are rejected by option validation."""
        result = runner.invoke(
            cli,
            ["consensus", "-i", str(tmp_path / "missing.bed"), "-o", str(tmp_output_dir / "o.bed")],
            obj={},
        )
        assert result.exit_code == 2

    def test_unknown_algorithm(self, runner, narrowpeak_file, tmp_output_dir):
        """Test that unknown algorithms are rejected by option validation."""
        result = runner.invoke(
            cli,
            [
                "consensus",
                "-i", str(narrowpeak_file),
                "-o", str(tmp_output_dir / "o.bed"),
                "--algorithm", "median",
            ],
            obj={},
        )
        assert result.exit_code == 2

    def test_log_file(self, runner, narrowpeak_file, tmp_path, tmp_output_dir):
        """Test writing a timestamped log file."""
        output = tmp_output_dir / "consensus.bed"
        result = runner.invoke(
            cli,
            [
                "-v",
                "--log-file", str(tmp_path / "logs" / "run.log"),
                "consensus",
                "-i", str(narrowpeak_file),
                "-o", str(output),
            ],
            obj={},
        )
        assert result.exit_code == 0, result.output
        (log_path,) = (tmp_path / "logs").glob("run_*.log")
        assert "algorithm: gipfelkreuzer" in log_path.read_text()

    def test_log_file_handler_closed(self, runner, narrowpeak_file, tmp_path, tmp_output_dir):
        """Test that the log file handler is detached after each invocation."""
        logger = logging.getLogger("gipfelkreuzer")
        n_handlers = len(logger.handlers)
        for _ in range(2):
            result = runner.invoke(
                cli,
                [
                    "--log-file", str(tmp_path / "run.log"),
                    "consensus",
                    "-i", str(narrowpeak_file),
                    "-o", str(tmp_output_dir / "consensus.bed"),
                ],
                obj={},
            )
            assert result.exit_code == 0, result.output
            assert len(logger.handlers) == n_handlers

    def test_log_file_handler_closed_on_error(self, runner, tmp_path, tmp_output_dir):
        """Test that the log file handler is detached when the command fails."""
        bad = tmp_path / "bad.bed"
        bad.write_text("chr1\t10\n")
        logger = logging.getLogger("gipfelkreuzer")
        n_handlers = len(logger.handlers)
        result = runner.invoke(
            cli,
            [
                "--log-file", str(tmp_path / "run.log"),
                "consensus",
                "-i", str(bad),
                "-o", str(tmp_output_dir / "consensus.bed"),
            ],
            obj={},
        )
        assert result.exit_code == 1
        assert len(logger.handlers) == n_handlers


class TestInspectCommand:
    """Tests for the inspect command."""

    def test_inspect(self, runner, narrowpeak_file):
        """Test printing bin statistics."""
        result = runner.invoke(cli, ["inspect", "-i", str(narrowpeak_file)], obj={})
        assert result.exit_code == 0, result.output
        assert "max_peaks_per_bin" in result.output
        assert "chr1" in result.output
        assert "chr2" in result.output

    def test_inspect_empty(self, runner, tmp_path):
        """Test inspecting a file without peaks."""
        empty = tmp_path / "empty.bed"
        empty.write_text("# no peaks\n")
        result = runner.invoke(cli, ["inspect", "-i", str(empty)], obj={})
        assert result.exit_code == 0, result.output
        assert "No peaks found" in result.output


def test_version(runner):
    """Test the version option."""
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
