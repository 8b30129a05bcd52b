"""Tests for the decaminx command-line interface."""

import json
import math

import pytest
from click.testing import CliRunner

from decaminx import __version__
from decaminx.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.mark.unit
@pytest.mark.cli
class TestClassifyCommand:
    def test_part(self, runner):
        result = runner.invoke(main, ["classify", "2", "0", "17.9"])
        assert result.exit_code == 0
        assert "1 (part)" in result.output

    def test_negative_coordinates(self, runner):
        result = runner.invoke(main, ["classify", "-2.0", "0", "17.9"])
        assert result.exit_code == 0, result.output
        assert "1 (part)" in result.output

    def test_void(self, runner):
        result = runner.invoke(main, ["classify", "0", "0", "0"])
        assert result.exit_code == 0
        assert "0 (void)" in result.output

    def test_deep_interior_from_config(self, runner, sample_config_dir):
        config = sample_config_dir / "puzzles" / "deep.yaml"
        result = runner.invoke(main, ["--config", str(config), "classify", "7", "7", "0"])
        assert result.exit_code == 0
        assert "2025 (special)" in result.output


@pytest.mark.unit
@pytest.mark.cli
class TestBoundaryCommand:
    def test_finds_cap_edge(self, runner):
        z_outer = math.sqrt(23.0**2 - 3.7**2)
        z_inner = math.sqrt(22.4**2 - 3.7**2)
        result = runner.invoke(
            main,
            ["boundary", "--tries", "16",
             "-3.7", "0", str(z_outer), "-3.7", "0", str(z_inner)],
        )
        assert result.exit_code == 0, result.output
        x, y, z = (float(v) for v in result.output.split())
        assert math.sqrt(x * x + y * y + z * z) == pytest.approx(22.5, abs=1e-3)

    def test_separator_still_accepted(self, runner):
        z_outer = math.sqrt(23.0**2 - 3.7**2)
        z_inner = math.sqrt(22.4**2 - 3.7**2)
        result = runner.invoke(
            main,
            ["boundary", "--", "-3.7", "0", str(z_outer), "-3.7", "0", str(z_inner)],
        )
        assert result.exit_code == 0, result.output
        assert len(result.output.split()) == 3

    def test_same_classification_fails(self, runner):
        result = runner.invoke(main, ["boundary", "0", "0", "0", "1", "1", "1"])
        assert result.exit_code == 1
        assert "no boundary" in result.output


@pytest.mark.unit
@pytest.mark.cli
class TestSampleCommand:
    def test_sample_summary(self, runner):
        result = runner.invoke(main, ["sample", "--spacing", "6"])
        assert result.exit_code == 0, result.output
        assert "Boundary points:" in result.output

    def test_invalid_spacing(self, runner):
        result = runner.invoke(main, ["sample", "--spacing=-1"])
        assert result.exit_code == 1
        assert "Invalid sampling parameters" in result.output


@pytest.mark.unit
@pytest.mark.cli
class TestConfigCommands:
    def test_show_defaults(self, runner):
        result = runner.invoke(main, ["config", "show"])
        assert result.exit_code == 0
        assert "decaminx" in result.output
        assert "off" in result.output

    def test_show_from_file(self, runner, sample_config_dir):
        config = sample_config_dir / "puzzles" / "test_decaminx.yaml"
        result = runner.invoke(main, ["--config", str(config), "config", "show"])
        assert result.exit_code == 0
        assert "Test Decaminx" in result.output

    def test_invalid_config_file(self, runner, temp_dir):
        bad = temp_dir / "bad.yaml"
        bad.write_text("puzzle:\n  ball_radius: -1\n")
        result = runner.invoke(main, ["--config", str(bad), "config", "show"])
        assert result.exit_code == 1
        assert "Failed to load configuration" in result.output


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.unit
@pytest.mark.cli
class TestLogFile:
    def test_events_written_as_json(self, runner, temp_dir):
        log_path = temp_dir / "sample.jsonl"
        result = runner.invoke(
            main,
            ["--log-level", "INFO", "--log-file", str(log_path), "sample", "--spacing", "6"],
        )
        assert result.exit_code == 0, result.output

        events = [json.loads(line) for line in log_path.read_text().splitlines() if line]
        complete = [e for e in events if e["event"] == "boundary_sampling_complete"]
        assert len(complete) == 1
        assert complete[0]["command"] == "sample"
        assert complete[0]["level"] == "info"
        assert complete[0]["spacing"] == 6.0

    def test_debug_events_filtered_by_level(self, runner, temp_dir):
        log_path = temp_dir / "quiet.jsonl"
        result = runner.invoke(
            main, ["--log-level", "INFO", "--log-file", str(log_path), "classify", "2", "0", "17.9"]
        )
        assert result.exit_code == 0
        events = [json.loads(line) for line in log_path.read_text().splitlines() if line]
        assert all(e["level"] != "debug" for e in events)
