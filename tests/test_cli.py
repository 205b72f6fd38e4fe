"""Tests for the root calpack CLI."""

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from calpack import __version__
from calpack.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "calpack" in result.output
    for command in ("pack", "unpack", "convert", "compare", "range", "weekday", "rank", "domains", "eval"):
        assert command in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/nonexistent/calpack.toml", "--version"])
    assert result.exit_code == 0


def test_unknown_command(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["explode"])
    assert result.exit_code == 2


@pytest.mark.usefixtures("_isolated_config")
class TestGlobalState:
    def test_verbose_enables_debug_logging(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "domains"])
        assert result.exit_code == 0
        assert logging.getLogger("calpack").level == logging.DEBUG

    def test_quiet_from_env(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CALPACK_QUIET", "1")
        result = cli_runner.invoke(cli, ["pack", "daily", "2000-01-01"])
        assert result.exit_code == 0
        assert result.output.strip() == "730485"

    def test_t_separator_from_config(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "calpack.toml").write_text("[format]\nuse_t_separator = true\n")
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(cli, ["--json", "unpack", "datetime", "0"])
        assert result.exit_code == 0
        assert json.loads(result.output)["data"]["text"] == "0000-01-01T00:00:00"

    def test_invalid_toml(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "calpack.toml").write_text("[format\n")
        monkeypatch.chdir(tmp_path)
        result = cli_runner.invoke(cli, ["domains"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
