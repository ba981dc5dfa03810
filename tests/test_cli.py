"""
Tests for cli/config.py and the demo entry point.
"""

import logging

import pytest

import main
from rangeprogress.cli.config import parse_arguments
from rangeprogress.config import get_config, tolerance
from rangeprogress.core.tracker import RangeTracker

ENV_VARS = ["PROGRESS_MODE", "LOG_FILE", "PROGRESS_TOLERANCE", "PROGRESS_WIDTH", "POLL_INTERVAL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestParseArguments:
    """Tests for parse_arguments()."""

    def test_defaults(self):
        args = parse_arguments([])

        assert args.progress == "auto"
        assert args.steps == 5
        assert args.width == 30
        assert args.tolerance == 1e-12
        assert args.console_log_level == logging.WARNING

    def test_environment_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PROGRESS_MODE", "text")
        monkeypatch.setenv("PROGRESS_WIDTH", "40")
        monkeypatch.setenv("POLL_INTERVAL", "0.2")
        monkeypatch.setenv("LOG_FILE", str(tmp_path / "demo.log"))

        args = parse_arguments([])

        assert args.progress == "text"
        assert args.width == 40
        assert args.interval == 0.2
        assert args.log_file == tmp_path / "demo.log"

    def test_invalid_environment_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("PROGRESS_MODE", "sparkly")
        monkeypatch.setenv("PROGRESS_WIDTH", "2")
        monkeypatch.setenv("PROGRESS_TOLERANCE", "tiny")

        args = parse_arguments([])

        assert args.progress == "auto"
        assert args.width == 30
        assert args.tolerance == 1e-12

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("PROGRESS_MODE", "text")

        args = parse_arguments(["--progress", "off", "--debug", "--steps", "2"])

        assert args.progress == "off"
        assert args.steps == 2
        assert args.console_log_level == logging.DEBUG

    def test_verbose(self):
        assert parse_arguments(["--verbose"]).console_log_level == logging.INFO

    def test_rejects_zero_steps(self):
        with pytest.raises(SystemExit):
            parse_arguments(["--steps", "0"])

    @pytest.mark.parametrize("width", ["2", "0", "-5"])
    def test_rejects_narrow_width(self, width):
        with pytest.raises(SystemExit):
            parse_arguments(["--width", width])

    def test_accepts_smallest_width(self):
        assert parse_arguments(["--width", "3"]).width == 3


class TestDemo:
    """Tests for the demo workload and main()."""

    def test_workload_reaches_done(self):
        tracker = RangeTracker()

        main.run_workload(tracker, steps=3, delay=0)

        assert tracker.is_done()
        assert tracker.depth == 1

    def test_main_runs_to_completion(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOG_FILE", str(tmp_path / "demo.log"))
        monkeypatch.setattr("sys.argv", ["main.py", "--progress", "off", "--steps", "2", "--delay", "0", "--width", "20"])

        assert main.main() == 0
        assert get_config().default_width == 20
        assert (tmp_path / "demo.log").exists()

    def test_main_rejects_bad_tolerance(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOG_FILE", str(tmp_path / "demo.log"))
        monkeypatch.setattr("sys.argv", ["main.py", "--progress", "off", "--tolerance", "0.5"])

        assert main.main() == 2
        assert tolerance() == 1e-12
