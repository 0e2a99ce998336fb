"""Tests for the mprimgen command."""

import logging

import pytest

import mprimgen.config as cfg
from mprimgen.cli import _resolve_log_level, build_parser, main


class TestParser:
    """Argument defaults."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.forward == 1
        assert args.backward == 0
        assert args.output is None
        assert args.workers == 1


class TestMain:
    """Running the command."""

    def test_writes_file(self, tmp_path):
        target = tmp_path / "out" / "robot.mprim"
        rc = main(
            [
                "-o",
                str(target),
                "--num-angles",
                "8",
                "--partition",
                "1",
                "--point-turn",
                "2",
                "--poses",
                "3",
            ]
        )
        assert rc == 0
        lines = target.read_text().splitlines()
        assert lines[0] == "resolution_m: 0.100000"
        assert lines[1] == "numberofangles: 8"
        # Forward plus one point turn each way per heading
        assert lines[2] == "totalnumberofprimitives: 24"

    def test_writes_stdout(self, capsys):
        rc = main(["--num-angles", "4", "--partition", "1", "--poses", "2", "-q"])
        assert rc == 0
        out = capsys.readouterr().out
        assert out.startswith("resolution_m: 0.100000\nnumberofangles: 4\n")
        assert out.count("primID: ") == 4

    @pytest.mark.parametrize(
        "argv",
        [["--poses", "1"], ["--grid-size", "0"], ["--forward", "-1"]],
    )
    def test_invalid_configuration_exits_2(self, argv):
        assert main(argv + ["-q"]) == 2


class TestLogLevel:
    """Log level resolution."""

    def test_default_follows_config(self, monkeypatch):
        monkeypatch.setattr(cfg, "TRACE_ENABLED", False)
        args = build_parser().parse_args([])
        monkeypatch.setattr(cfg, "LOG_LEVEL_DEFAULT", "WARNING")
        assert _resolve_log_level(args) == logging.WARNING
        monkeypatch.setattr(cfg, "LOG_LEVEL_DEFAULT", "DEBUG")
        assert _resolve_log_level(args) == logging.DEBUG

    def test_flags_override_default(self, monkeypatch):
        monkeypatch.setattr(cfg, "LOG_LEVEL_DEFAULT", "DEBUG")
        assert _resolve_log_level(build_parser().parse_args(["-q"])) == logging.ERROR
        assert _resolve_log_level(build_parser().parse_args(["-v"])) == logging.INFO
