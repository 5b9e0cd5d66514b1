"""CLI tests: exit codes and console report."""

import pytest
from typer.testing import CliRunner

from varsweep import __version__
from varsweep.cli.app import EXIT_FATAL, EXIT_MISMATCH, EXIT_OK, app

runner = CliRunner()


@pytest.fixture
def run_cli(artifact_dir, tmp_path):
    """Invoke the CLI with output and logs kept under tmp_path."""

    def invoke(*args: str):
        return runner.invoke(
            app,
            [
                *args,
                "--output-dir",
                str(artifact_dir),
                "--log-file",
                str(tmp_path / "cli.log"),
                "--workers",
                "1",
            ],
        )

    return invoke


class TestCompareCommand:
    """Tests for the compare command."""

    def test_version(self):
        """Test --version prints the version and exits cleanly."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_all_match(self, run_cli, left_font, identical_font):
        """Test matching fonts exit 0."""
        result = run_cli(str(left_font), str(identical_font))

        assert result.exit_code == EXIT_OK
        assert "All outlines match" in result.output

    def test_mismatch(self, run_cli, left_font, heavier_font, artifact_dir):
        """Test differing fonts exit 1 and list failing coordinates."""
        result = run_cli(str(left_font), str(heavier_font))

        assert result.exit_code == EXIT_MISMATCH
        assert "fails at 2/7 locations: 2, 6" in result.output
        assert (artifact_dir / "fail.A.left.2.svg").exists()

    def test_only_left_reported(self, run_cli, extended_font, left_font):
        """Test one-sided glyphs are listed."""
        result = run_cli(str(extended_font), str(left_font))

        assert result.exit_code == EXIT_MISMATCH
        assert "only_left Z" in result.output

    def test_quiet_mismatch_still_summarized(self, run_cli, left_font, heavier_font):
        """Test --quiet keeps the summary when something failed."""
        result = run_cli(str(left_font), str(heavier_font), "--quiet")

        assert result.exit_code == EXIT_MISMATCH
        assert "2 failures" in result.output

    def test_canonicalize_flag(self, run_cli, left_font, rewound_font):
        """Test --canonicalize is passed through to the comparator."""
        assert run_cli(str(left_font), str(rewound_font)).exit_code == EXIT_MISMATCH
        assert run_cli(str(left_font), str(rewound_font), "--canonicalize").exit_code == EXIT_OK

    def test_missing_input(self, run_cli, left_font, tmp_path):
        """Test a missing font file is fatal."""
        result = run_cli(str(left_font), str(tmp_path / "missing.ttf"))

        assert result.exit_code == EXIT_FATAL
        assert "Input file not found" in result.output

    def test_corrupt_font(self, run_cli, left_font, corrupt_fvar_font, artifact_dir):
        """Test an unparsable table is fatal, not a mismatch."""
        result = run_cli(str(left_font), str(corrupt_fvar_font))

        assert result.exit_code == EXIT_FATAL
        assert "Could not load font" in result.output
        assert not list(artifact_dir.glob("*.svg"))

    def test_axis_mismatch(self, run_cli, left_font, font_factory, artifact_dir):
        """Test fonts with different axes are fatal and write no artifacts."""
        weight_only = font_factory(
            "weight-only.ttf", axes=[("wght", 100.0, 400.0, 900.0, "Weight")]
        )
        result = run_cli(str(left_font), str(weight_only))

        assert result.exit_code == EXIT_FATAL
        assert "Axis tag sets differ" in result.output
        assert not list(artifact_dir.glob("*.svg"))

    def test_invalid_strategy(self, run_cli, left_font, identical_font):
        """Test an unknown strategy is rejected."""
        result = run_cli(str(left_font), str(identical_font), "--strategy", "random")

        assert result.exit_code == EXIT_FATAL
        assert "Invalid strategy" in result.output

    def test_invalid_filter(self, run_cli, left_font, identical_font):
        """Test a malformed glyph filter is fatal."""
        result = run_cli(str(left_font), str(identical_font), "--filter", "A(")

        assert result.exit_code == EXIT_FATAL
        assert "Invalid glyph filter" in result.output

    def test_verbose_and_quiet(self, run_cli, left_font, identical_font):
        """Test --verbose and --quiet are mutually exclusive."""
        result = run_cli(str(left_font), str(identical_font), "--verbose", "--quiet")
        assert result.exit_code == EXIT_FATAL
