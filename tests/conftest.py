"""Shared pytest fixtures for calpack tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from calpack.time.builtins import register_builtins
from calpack.time.domain import TimeDomain
from calpack.time.registry import DomainRegistry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> DomainRegistry:
    """A fresh registry holding the built-in domains."""
    reg = DomainRegistry()
    register_builtins(reg)
    return reg


@pytest.fixture
def daily(registry: DomainRegistry) -> TimeDomain:
    return registry.lookup("daily")


@pytest.fixture
def workweek(registry: DomainRegistry) -> TimeDomain:
    return registry.lookup("workweek")


@pytest.fixture
def datetime_domain(registry: DomainRegistry) -> TimeDomain:
    return registry.lookup("datetime")


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory with no config override in the environment.

    Use via ``@pytest.mark.usefixtures("_isolated_config")`` on CLI test
    classes so that a stray calpack.toml never leaks into a test.
    """
    monkeypatch.delenv("CALPACK_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    calpack_level = logging.getLogger("calpack").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("calpack").setLevel(calpack_level)
